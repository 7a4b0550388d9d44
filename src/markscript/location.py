"""Source location tracking for diagnostics and debugging.

Provides SourceLocation dataclass for tracking positions in source text.
Used by tokens, AST nodes and the validation passes.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for diagnostics and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in the source string
        end_offset: Absolute end offset in the source string
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=4, col_offset=9)
            >>> str(loc)
            '4:9'

            >>> loc = SourceLocation(4, 9, source_file="pages/index.html")
            >>> str(loc)
            'pages/index.html:4:9'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for messages.

        Returns:
            Formatted string like "index.html:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def shifted(self, text: str) -> SourceLocation:
        """Location reached after consuming ``text`` from this location.

        Used when several tags share one token and each needs its own
        position.

        Args:
            text: Raw text consumed starting at this location

        Returns:
            New SourceLocation just past ``text``
        """
        newlines = text.count("\n")
        if newlines:
            col = len(text) - text.rfind("\n")
        else:
            col = self.col_offset + len(text)
        offset = self.offset + len(text)
        return SourceLocation(
            lineno=self.lineno + newlines,
            col_offset=col,
            offset=offset,
            end_offset=offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for AST nodes created synthetically or when location is unavailable.
        """
        return cls(lineno=0, col_offset=0)
