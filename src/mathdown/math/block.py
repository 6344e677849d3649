"""Block math detection.

A paragraph is block math when its text reads as ``$$`` on its own line,
any number of content lines, and ``$$`` on its own line; or as a single
line that starts and ends with ``$$`` (``$$x + y$$``).

Detection only looks at paragraphs made of text and line breaks. Any other
child (emphasis, code span, inline math) leaves the paragraph alone.

"""

from __future__ import annotations

import re
import string

from mathdown.nodes import LineBreak, Paragraph, SoftBreak, Text

BLOCK_DELIMITER = "$$"

# Unicode line boundaries, as recognized by str.splitlines()
_LINE_BOUNDARY = re.compile(r"\r\n|[\n\v\f\r\x1c\x1d\x1e\x85\u2028\u2029]")


def paragraph_source(paragraph: Paragraph) -> str | None:
    """Reassemble a paragraph's text with each break as a newline.

    Returns:
        The text, or None if the paragraph has a child that is neither text
        nor a line break.
    """
    parts: list[str] = []
    for child in paragraph.children:
        match child:
            case Text(content=content):
                parts.append(content)
            case SoftBreak() | LineBreak():
                parts.append("\n")
            case _:
                return None
    return "".join(parts)


def block_math_code(paragraph: Paragraph) -> str | None:
    """Return the math code if the paragraph is block math, else None.

    Interior lines are kept verbatim, blank ones included; only the
    delimiter lines are trimmed.

    Example:
        >>> para = Paragraph(None, (Text(None, "$$"), SoftBreak(None), Text(None, "x"),
        ...                         SoftBreak(None), Text(None, "$$")))
        >>> block_math_code(para)
        'x'
    """
    source = paragraph_source(paragraph)
    if source is None:
        return None

    # Empty lines are kept, including a trailing one after a final newline
    lines = _LINE_BOUNDARY.split(source)
    if not lines:
        return None

    if len(lines) >= 2:
        if (
            lines[0].strip(string.whitespace) == BLOCK_DELIMITER
            and lines[-1].strip(string.whitespace) == BLOCK_DELIMITER
        ):
            return "\n".join(lines[1:-1])
        return None

    line = lines[0].strip(string.whitespace)
    if (
        len(line) >= 2 * len(BLOCK_DELIMITER)
        and line.startswith(BLOCK_DELIMITER)
        and line.endswith(BLOCK_DELIMITER)
    ):
        return line[2:-2]
    return None


__all__ = ["block_math_code", "paragraph_source"]
