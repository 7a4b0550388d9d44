"""Assignment pass.

Operators are restricted to ``= += -= *= /= %=``. Chain assignments
(``a = b = 1``) are unwound to their targets; the rightmost value is
trusted and no kinds are compared. Simple assignments infer a coarse
literal kind on both sides, and a mismatch is logged, never reported.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.lexer.modes import BOOLEAN_WORDS, NULL_WORD
from markscript.nodes import Assignment, Identifier
from markscript.utils.logger import get_logger
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from markscript.diagnostics import DiagnosticCollector
    from markscript.nodes import Document, Node

logger = get_logger(__name__)

VALID_ASSIGNMENT_OPERATORS = frozenset({"=", "+=", "-=", "*=", "/=", "%="})


class LiteralKind(Enum):
    """Coarse kind of a literal operand."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNKNOWN = "unknown"


def infer_kind(node: Node | None) -> LiteralKind:
    """Kind of a literal Identifier; UNKNOWN for anything else."""
    if not isinstance(node, Identifier):
        return LiteralKind.UNKNOWN
    text = node.name
    if text[:1] in ("'", '"'):
        return LiteralKind.STRING
    if text in BOOLEAN_WORDS:
        return LiteralKind.BOOLEAN
    if text == NULL_WORD:
        return LiteralKind.NULL
    try:
        float(text)
    except ValueError:
        return LiteralKind.UNKNOWN
    return LiteralKind.NUMBER


def chain_targets(node: Assignment) -> list[str]:
    """Target names of ``node`` and every Assignment nested in its value."""
    targets: list[str] = []
    current: Node | None = node
    while isinstance(current, Assignment):
        targets.append(current.target.name)
        current = current.value
    return targets


class AssignmentValidator(ScriptWalker):
    """Assignment operators and chain structure."""

    name = "assignments"

    def __init__(self) -> None:
        super().__init__()
        self._chained: set[int] = set()

    def validate(self, document: Document, collector: DiagnosticCollector) -> None:
        self._chained.clear()
        try:
            super().validate(document, collector)
        finally:
            self._chained.clear()

    def visit_assignment(self, node: Assignment) -> None:
        # Inner links of a chain were validated with their outermost Assignment
        if id(node) in self._chained:
            return

        if isinstance(node.value, Assignment):
            self._check_chain(node)
        else:
            self._check_operator(node)
            self._compare_kinds(node)

    def _check_chain(self, node: Assignment) -> None:
        current: Node | None = node
        while isinstance(current, Assignment):
            self._chained.add(id(current))
            self._check_operator(current)
            current = current.value
        logger.debug(
            "Chain assignment at line %d: %s",
            node.lineno,
            " = ".join(chain_targets(node)),
        )

    def _check_operator(self, node: Assignment) -> None:
        if node.operator not in VALID_ASSIGNMENT_OPERATORS:
            self.collector.add(
                node.lineno,
                f"Invalid assignment operator: {node.operator}",
                Category.ASSIGNMENT,
            )

    def _compare_kinds(self, node: Assignment) -> None:
        if node.value is None:
            return
        target_kind = infer_kind(node.target)
        value_kind = infer_kind(node.value)
        if LiteralKind.UNKNOWN not in (target_kind, value_kind) and target_kind != value_kind:
            logger.debug(
                "Kind mismatch at line %d: %s <- %s (not reported)",
                node.lineno,
                target_kind.value,
                value_kind.value,
            )
