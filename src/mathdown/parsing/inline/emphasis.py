"""Emphasis parsing for the mathdown parser.

Implements the CommonMark delimiter algorithm for emphasis/strong.
See: https://spec.commonmark.org/0.31.2/#emphasis-and-strong-emphasis

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mathdown.nodes import Emphasis, Strong
from mathdown.parsing.charsets import (
    is_unicode_punctuation,
    is_unicode_whitespace,
)
from mathdown.parsing.inline.tokens import (
    DelimiterToken,
    InlineToken,
    NodeToken,
    TextToken,
)

if TYPE_CHECKING:
    from mathdown.location import SourceLocation
    from mathdown.nodes import Inline


@dataclass(slots=True)
class DelimiterRun:
    """Working state for one delimiter run during matching.

    Openers give up characters from their right end and closers from their
    left end, so ``start``/``end`` always bound the unused characters.

    """

    char: str
    length: int
    remaining: int
    can_open: bool
    can_close: bool
    start: int
    end: int

    @classmethod
    def from_token(cls, token: DelimiterToken) -> DelimiterRun:
        return cls(
            token.char,
            token.count,
            token.count,
            token.can_open,
            token.can_close,
            token.start,
            token.end,
        )

    def leftover(self) -> TextToken:
        """Unmatched characters as literal text."""
        return TextToken(self.char * self.remaining, self.start, self.end)


type WorkItem = InlineToken | DelimiterRun


class EmphasisMixin:
    """Mixin for emphasis delimiter processing.

    Implements CommonMark flanking rules and delimiter matching.

    Required Host Methods:
        - _build_inline_nodes(items) -> tuple[Inline, ...]
        - _span_location(start, end) -> SourceLocation | None

    """

    if TYPE_CHECKING:

        def _build_inline_nodes(self, items: list[WorkItem]) -> tuple[Inline, ...]: ...

        def _span_location(self, start: int, end: int) -> SourceLocation | None: ...

    def _classify_delimiter_run(
        self, char: str, count: int, before: str, after: str, start: int
    ) -> DelimiterToken:
        """Build a delimiter token with its open/close capabilities.

        Args:
            char: Delimiter character
            count: Run length
            before: Character before the run ("" at start of content)
            after: Character after the run ("" at end of content)
            start: Offset of the run
        """
        left = self._is_left_flanking(before, after)
        right = self._is_right_flanking(before, after)
        if char == "*":
            can_open = left
            can_close = right
        else:
            # Underscore runs inside words neither open nor close
            can_open = left and (not right or is_unicode_punctuation(before))
            can_close = right and (not left or is_unicode_punctuation(after))
        return DelimiterToken(char, count, can_open, can_close, start, start + count)  # type: ignore[arg-type]

    def _is_left_flanking(self, before: str, after: str) -> bool:
        """Check if delimiter run is left-flanking.

        Left-flanking: not followed by whitespace, and either:
        - not followed by punctuation, OR
        - preceded by whitespace or punctuation
        """
        if is_unicode_whitespace(after):
            return False
        if not is_unicode_punctuation(after):
            return True
        return is_unicode_whitespace(before) or is_unicode_punctuation(before)

    def _is_right_flanking(self, before: str, after: str) -> bool:
        """Check if delimiter run is right-flanking.

        Right-flanking: not preceded by whitespace, and either:
        - not preceded by punctuation, OR
        - followed by whitespace or punctuation
        """
        if is_unicode_whitespace(before):
            return False
        if not is_unicode_punctuation(before):
            return True
        return is_unicode_whitespace(after) or is_unicode_punctuation(after)

    def _process_emphasis(self, tokens: list[InlineToken]) -> list[InlineToken]:
        """Match delimiter runs and fold matched spans into emphasis nodes.

        Returns:
            Tokens where every matched span is a single NodeToken and every
            unmatched delimiter character is literal text.
        """
        items: list[WorkItem] = [
            DelimiterRun.from_token(t) if isinstance(t, DelimiterToken) else t for t in tokens
        ]

        closer_idx = 0
        while closer_idx < len(items):
            closer = items[closer_idx]
            if not (isinstance(closer, DelimiterRun) and closer.can_close and closer.remaining):
                closer_idx += 1
                continue

            opener_idx = self._find_opener(items, closer_idx)
            if opener_idx is None:
                closer_idx += 1
                continue

            opener = items[opener_idx]
            assert isinstance(opener, DelimiterRun)
            use = 2 if opener.remaining >= 2 and closer.remaining >= 2 else 1
            opener.remaining -= use
            opener.end -= use
            closer.remaining -= use
            closer.start += use

            span_start = opener.end
            span_end = closer.start
            children = self._build_inline_nodes(items[opener_idx + 1 : closer_idx])
            location = self._span_location(span_start, span_end)
            node = (
                Strong(location=location, children=children)
                if use == 2
                else Emphasis(location=location, children=children)
            )
            items[opener_idx + 1 : closer_idx] = [NodeToken(node, span_start, span_end)]
            closer_idx = opener_idx + 2

            if opener.remaining == 0:
                del items[opener_idx]
                closer_idx -= 1
            if closer.remaining == 0:
                del items[closer_idx]
            # A closer with characters left is retried at the same index

        return [item.leftover() if isinstance(item, DelimiterRun) else item for item in items]

    def _find_opener(self, items: list[WorkItem], closer_idx: int) -> int | None:
        """Find the nearest opener that may pair with the closer at closer_idx."""
        closer = items[closer_idx]
        assert isinstance(closer, DelimiterRun)
        for idx in range(closer_idx - 1, -1, -1):
            opener = items[idx]
            if not (
                isinstance(opener, DelimiterRun)
                and opener.char == closer.char
                and opener.can_open
                and opener.remaining
            ):
                continue
            # CommonMark "multiple of 3" rule
            if (
                (opener.can_close or closer.can_open)
                and (opener.length + closer.length) % 3 == 0
                and not (opener.length % 3 == 0 and closer.length % 3 == 0)
            ):
                continue
            return idx
        return None
