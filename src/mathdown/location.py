"""Source location tracking for AST nodes.

Provides the SourceLocation dataclass describing a range in source text.
Used by the parser to stamp nodes and by the math pass to slice sub-ranges
out of text leaves.

Coordinates:
    Lines are 1-indexed. Columns are 1-indexed and count UTF-8 bytes, so a
    range computed from a Python string must convert code-point offsets with
    ``utf8_len``. The end position is exclusive: ``$x$`` at the start of a
    line spans columns 1 to 4.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


def utf8_len(text: str) -> int:
    """Length of text in UTF-8 bytes."""
    if text.isascii():
        return len(text)
    return len(text.encode("utf-8", errors="surrogatepass"))


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source range for error messages, debugging and sub-range slicing.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column (1-indexed, UTF-8 bytes)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column, exclusive (optional)
        source_file: Source identity, usually a path or URL (optional)

    Examples:
            >>> loc = SourceLocation(lineno=1, col_offset=1, end_lineno=1, end_col_offset=4)
            >>> loc.is_single_line
            True

            >>> loc = SourceLocation(1, 1, 3, 3, "docs/math.md")
            >>> str(loc)
            'docs/math.md:1:1'

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def is_single_line(self) -> bool:
        """Whether both ends of the range lie on the same line."""
        return self.end_lineno is None or self.end_lineno == self.lineno

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end.

        Args:
            end: Ending location

        Returns:
            New SourceLocation with this start and end's end positions
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            end_lineno=end.end_lineno or end.lineno,
            end_col_offset=end.end_col_offset or end.col_offset,
            source_file=self.source_file,
        )

    def slice_columns(self, start: int, end: int) -> SourceLocation:
        """Create a same-line location offset from this location's start.

        Args:
            start: Byte offset of the slice start, relative to col_offset
            end: Byte offset of the slice end, relative to col_offset

        Returns:
            New single-line SourceLocation on this location's first line
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset + start,
            end_lineno=self.lineno,
            end_col_offset=self.col_offset + end,
            source_file=self.source_file,
        )
