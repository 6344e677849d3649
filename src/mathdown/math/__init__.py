"""Math notation for mathdown.

Recognizes ``$inline$`` and ``$$block$$`` math in a parsed document:

math/
├── delimiters.py   # When a ``$`` can open or close inline math
├── block.py        # Paragraph -> block math detection
├── inline.py       # Text leaf -> Text/InlineMath splitting
└── rewriter.py     # MathRewriter and parse_math, the whole-document pass

Usage:
    >>> from mathdown import parse
    >>> doc = parse("The sum is $x + y$.", math=True)
    >>> doc.children[0].children[1]
    InlineMath(location=SourceLocation(lineno=1, col_offset=12, end_lineno=1, end_col_offset=19, source_file=None), code='x + y')

"""

from mathdown.math.block import block_math_code
from mathdown.math.delimiters import can_close, can_open, is_escaped, is_single_dollar_delimiter
from mathdown.math.inline import split_inline_math
from mathdown.math.rewriter import MathRewriter, parse_math

__all__ = [
    "MathRewriter",
    "block_math_code",
    "can_close",
    "can_open",
    "is_escaped",
    "is_single_dollar_delimiter",
    "parse_math",
    "split_inline_math",
]
