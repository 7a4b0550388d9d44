"""Validator protocol for rule passes.

Each pass inspects a finished Document and reports violations to the
shared DiagnosticCollector. Passes never raise for rule violations and
never depend on each other's output.

Example:
    >>> class NoScriptsValidator:
    ...     name = "no-scripts"
    ...
    ...     def validate(self, document, collector):
    ...         for tag in document.children:
    ...             if tag.name == "script":
    ...                 collector.add(tag.lineno, "Scripts are not allowed")

"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from markscript.diagnostics import DiagnosticCollector
    from markscript.nodes import Document


@runtime_checkable
class Validator(Protocol):
    """Protocol for rule passes.

    Attributes:
        name: Short pass name used in logs.

    """

    name: ClassVar[str]

    def validate(self, document: Document, collector: DiagnosticCollector) -> None:
        """Inspect ``document`` and add a diagnostic per violation."""
        ...
