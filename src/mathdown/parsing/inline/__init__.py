"""Inline parsing for the mathdown parser.

Provides the inline mixin (code spans, emphasis, escapes, breaks) and the
typed tokens it works with.
"""

from mathdown.parsing.inline.core import InlineParsingMixin, LineMap, resolve_escapes
from mathdown.parsing.inline.emphasis import EmphasisMixin

__all__ = ["EmphasisMixin", "InlineParsingMixin", "LineMap", "resolve_escapes"]
