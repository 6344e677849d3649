"""Block-type classifiers for the mathdown lexer.

Each classifier inspects one line (already stripped of up to three columns
of indentation) and reports whether it starts a given block. Classifiers are
pure: they never touch lexer state, so the parser can reuse them.

"""

from __future__ import annotations

from typing import NamedTuple

# Valid fence characters
FENCE_CHARS: frozenset[str] = frozenset("`~")

# Thematic break characters
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")


class HeadingMatch(NamedTuple):
    """ATX heading classification result.

    Attributes:
        level: Heading level (1-6)
        content_start: Index where heading text starts
        content_end: Index where heading text ends (closing #s removed)

    """

    level: int
    content_start: int
    content_end: int


class FenceMatch(NamedTuple):
    """Fence opener classification result.

    Attributes:
        char: Fence character (` or ~)
        count: Length of the fence run
        info: Info string (stripped, may be empty)

    """

    char: str
    count: int
    info: str


def classify_atx_heading(line: str) -> HeadingMatch | None:
    """Classify an ATX heading line (``# Title``).

    CommonMark 4.2: 1-6 ``#`` characters followed by whitespace or end of
    line. An optional closing sequence of ``#`` preceded by whitespace is
    removed from the content.
    """
    level = 0
    line_len = len(line)
    while level < line_len and line[level] == "#":
        level += 1
    if level == 0 or level > 6:
        return None
    if level < line_len and line[level] not in " \t":
        return None

    start = level
    while start < line_len and line[start] in " \t":
        start += 1
    end = len(line.rstrip(" \t"))
    if end < start:
        return HeadingMatch(level, start, start)

    # Closing sequence: trailing #s preceded by whitespace (or the whole content)
    close = end
    while close > start and line[close - 1] == "#":
        close -= 1
    if close == start:
        end = start
    elif close < end and line[close - 1] in " \t":
        end = len(line[:close].rstrip(" \t"))
    return HeadingMatch(level, start, end)


def classify_fence(line: str) -> FenceMatch | None:
    """Classify a fenced code opener (```` ``` ```` or ``~~~``)."""
    if not line or line[0] not in FENCE_CHARS:
        return None
    char = line[0]
    count = 0
    line_len = len(line)
    while count < line_len and line[count] == char:
        count += 1
    if count < 3:
        return None
    info = line[count:].strip()
    # CommonMark 4.5: backtick fence info strings may not contain backticks
    if char == "`" and "`" in info:
        return None
    return FenceMatch(char, count, info)


def is_fence_close(line: str, char: str, count: int) -> bool:
    """Check whether a line closes a fence opened with ``count`` ``char``s."""
    run = 0
    line_len = len(line)
    while run < line_len and line[run] == char:
        run += 1
    return run >= count and not line[run:].strip()


def is_thematic_break(line: str) -> bool:
    """Check for a thematic break: 3+ of the same ``-``/``*``/``_`` with spaces."""
    if not line or line[0] not in THEMATIC_BREAK_CHARS:
        return False
    char = line[0]
    count = 0
    for c in line:
        if c == char:
            count += 1
        elif c not in " \t":
            return False
    return count >= 3


def classify_quote(line: str) -> str | None:
    """Classify a block quote line.

    Returns:
        The consumed marker (``>`` or ``> ``) or None if not a quote line.
    """
    if not line or line[0] != ">":
        return None
    if len(line) > 1 and line[1] in " \t":
        return line[:2]
    return ">"
