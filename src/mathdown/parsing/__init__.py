"""Parsing mixins for the mathdown parser.

Architecture:
parsing/
├── __init__.py          # Re-exports the mixins
├── charsets.py          # Character classification
├── token_nav.py         # TokenNavigationMixin
├── blocks.py            # BlockParsingMixin
└── inline/              # InlineParsingMixin, EmphasisMixin, inline tokens

"""

from mathdown.parsing.blocks import BlockParsingMixin
from mathdown.parsing.inline import EmphasisMixin, InlineParsingMixin
from mathdown.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "BlockParsingMixin",
    "EmphasisMixin",
    "InlineParsingMixin",
    "TokenNavigationMixin",
]
