"""Character sets for O(1) classification.

Reference: CommonMark 0.31.2 specification

Usage:
    from mathdown.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:  # O(1) lookup
        ...
"""

import unicodedata

# CommonMark: ASCII punctuation characters
# https://spec.commonmark.org/0.31.2/#ascii-punctuation-character
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# ASCII whitespace for basic checks
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Characters that end a plain text run in the inline tokenizer
INLINE_SPECIAL: frozenset[str] = frozenset("*_`\\\n")

# Emphasis delimiter characters
EMPHASIS_DELIMITERS: frozenset[str] = frozenset("*_")


def is_unicode_punctuation(char: str) -> bool:
    """Check if character is Unicode punctuation (P* or S* categories).

    CommonMark uses Unicode punctuation categories for flanking rules.
    This includes ASCII punctuation as a subset.

    """
    if not char:
        return False
    if char in ASCII_PUNCTUATION:
        return True
    cat = unicodedata.category(char)
    # P* = Punctuation, S* = Symbol
    return cat.startswith("P") or cat.startswith("S")


def is_unicode_whitespace(char: str) -> bool:
    """Check if character is Unicode whitespace.

    Includes ASCII whitespace and Unicode category Zs (space separator).
    The empty string (start or end of the inline content) counts as
    whitespace for boundary checks.

    """
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"
