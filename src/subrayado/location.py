"""Source location tracking for AST nodes and debugging.

Provides SourceLocation dataclass for tracking positions in source text.
Every paragraph is one source line, so lineno doubles as the paragraph
number.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the source buffer.

    lineno and col_offset are 1-indexed. offset and end_offset are
    0-indexed absolute positions forming the half-open range
    ``[offset, end_offset)`` that the node was built from, delimiters
    included.

    Attributes:
        lineno: Line (paragraph) number, 1-indexed
        col_offset: Starting column, 1-indexed
        offset: Absolute start offset in the source buffer
        end_offset: Absolute end offset in the source buffer (exclusive)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=1, col_offset=1, offset=0, end_offset=7)
            >>> str(loc)
            '1:1'

            >>> loc = SourceLocation(2, 5, 12, 20, "notes.txt")
            >>> str(loc)
            'notes.txt:2:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def __len__(self) -> int:
        """Number of source characters covered."""
        return self.end_offset - self.offset

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end.

        Args:
            end: Ending location

        Returns:
            New SourceLocation with this start and end's end offset
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset,
            source_file=self.source_file,
        )
