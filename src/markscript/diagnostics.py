"""Diagnostics produced by the validation passes.

A Diagnostic is one rule violation. The DiagnosticCollector is the single
sink shared by every pass in one analysis run: it numbers diagnostics
sequentially in insertion order and never reorders its own list.

Thread Safety:
Diagnostic is frozen. A DiagnosticCollector belongs to one run and is not
meant to be shared across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class Category(Enum):
    """Rule family a diagnostic belongs to."""

    IDENTIFIER = "IDENTIFIER"
    CONSTANT = "CONSTANT"
    ASSIGNMENT = "ASSIGNMENT"
    FUNCTION = "FUNCTION"
    DATA_INPUT = "DATA_INPUT"
    DATA_OUTPUT = "DATA_OUTPUT"
    HTML_STRUCTURE = "HTML_STRUCTURE"
    GENERAL = "GENERAL"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A positioned rule violation.

    Attributes:
        line: Source line the violation is reported at (1-indexed)
        number: Sequential number assigned by the collector (from 1)
        description: Human-readable message
        category: Rule family

    """

    line: int
    number: int
    description: str
    category: Category = Category.GENERAL

    def format(self) -> str:
        """Render as ``Error <n>: <description> at line <line>``."""
        return f"Error {self.number}: {self.description} at line {self.line}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class DiagnosticCollector:
    """Append-only diagnostic sink.

    Usage:
        >>> collector = DiagnosticCollector()
        >>> collector.add(3, "Missing <head> tag", Category.HTML_STRUCTURE).number
        1
        >>> collector.count
        1

    """

    _diagnostics: list[Diagnostic] = field(default_factory=list)
    _next_number: int = 1

    def add(
        self,
        line: int,
        description: str,
        category: Category = Category.GENERAL,
    ) -> Diagnostic:
        """Record a violation and assign it the next number.

        Args:
            line: Source line of the violation
            description: Human-readable message
            category: Rule family

        Returns:
            The created Diagnostic.
        """
        diagnostic = Diagnostic(
            line=line,
            number=self._next_number,
            description=description,
            category=category,
        )
        self._next_number += 1
        self._diagnostics.append(diagnostic)
        return diagnostic

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """All diagnostics in insertion order."""
        return tuple(self._diagnostics)

    def sorted_by_line(self) -> list[Diagnostic]:
        """All diagnostics ordered by line; insertion order breaks ties."""
        return sorted(self._diagnostics, key=lambda d: d.line)

    def by_line(self) -> dict[int, list[Diagnostic]]:
        """Diagnostics grouped by line, each group in insertion order."""
        grouped: dict[int, list[Diagnostic]] = {}
        for diagnostic in self._diagnostics:
            grouped.setdefault(diagnostic.line, []).append(diagnostic)
        return grouped

    def by_category(self, category: Category) -> list[Diagnostic]:
        """Diagnostics of one rule family, in insertion order."""
        return [d for d in self._diagnostics if d.category == category]

    @property
    def count(self) -> int:
        """Number of diagnostics recorded."""
        return len(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        """Whether any diagnostic was recorded."""
        return bool(self._diagnostics)

    def clear(self) -> None:
        """Remove all diagnostics and restart numbering at 1."""
        self._diagnostics.clear()
        self._next_number = 1

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._diagnostics)
