"""Dollar-sign delimiter rules for inline math.

A ``$`` opens inline math when it is unescaped, not part of a ``$$`` run,
and followed by a non-whitespace character. It closes inline math under the
mirrored conditions. ``$5 and $10`` therefore never becomes math: the second
``$`` is preceded by a space.

Positions are Python string indices (code points). Whitespace is Unicode
whitespace as reported by ``str.isspace``.

"""

from __future__ import annotations

DOLLAR = "$"


def is_escaped(text: str, pos: int) -> bool:
    """Whether an odd number of backslashes immediately precede ``pos``."""
    count = 0
    idx = pos - 1
    while idx >= 0 and text[idx] == "\\":
        count += 1
        idx -= 1
    return count % 2 == 1


def is_single_dollar_delimiter(text: str, pos: int) -> bool:
    """Whether the ``$`` at ``pos`` has no ``$`` neighbour on either side."""
    if pos > 0 and text[pos - 1] == DOLLAR:
        return False
    return not (pos + 1 < len(text) and text[pos + 1] == DOLLAR)


def can_open(text: str, pos: int) -> bool:
    """Whether the character at ``pos`` can open an inline math span."""
    if text[pos] != DOLLAR or is_escaped(text, pos):
        return False
    if not is_single_dollar_delimiter(text, pos):
        return False
    return pos + 1 < len(text) and not text[pos + 1].isspace()


def can_close(text: str, pos: int) -> bool:
    """Whether the character at ``pos`` can close an inline math span."""
    if text[pos] != DOLLAR or is_escaped(text, pos):
        return False
    if not is_single_dollar_delimiter(text, pos):
        return False
    return pos > 0 and not text[pos - 1].isspace()


__all__ = ["can_close", "can_open", "is_escaped", "is_single_dollar_delimiter"]
