"""Line-window lexer for the mathdown Markdown parser.

This package provides a window-based lexer with O(n) guaranteed performance.
The lexer takes one line at a time, classifies it, then commits position.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (line scanning)
├── modes.py             # LexerMode enum
└── classifiers.py       # Pure block-type classifiers

Usage:
    >>> from mathdown.lexer import Lexer
    >>> lexer = Lexer("# Hello\\n\\nWorld")
    >>> for token in lexer.tokenize():
    ...     print(token)
Token(ATX_HEADING, '# Hello', 1:1)
Token(BLANK_LINE, '', 2:1)
Token(PARAGRAPH_LINE, 'World', 3:1)
Token(EOF, '', 3:1)

"""

from mathdown.lexer.core import Lexer, split_source
from mathdown.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode", "split_source"]
