"""Constant declaration pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.nodes import Const, Variable
from markscript.validators.naming import is_reserved, is_valid_identifier
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from markscript.nodes import Function, Script, Statement


class ConstantValidator(ScriptWalker):
    """Const names, initializers and declaration order.

    Order is checked per scope: each Script and each Function body is its
    own statement list, and a const after any ``let``/``var`` in the same
    list is flagged.

    """

    name = "constants"

    def visit_script(self, node: Script) -> None:
        self._check_scope(node.statements)

    def visit_function(self, node: Function) -> None:
        self._check_scope(node.body)

    def _check_scope(self, statements: tuple[Statement, ...]) -> None:
        seen_variable = False
        for statement in statements:
            if isinstance(statement, Variable):
                seen_variable = True
            elif isinstance(statement, Const):
                self._check_const(statement, after_variable=seen_variable)

    def _check_const(self, node: Const, *, after_variable: bool) -> None:
        name = node.target.name
        line = node.target.lineno
        report = self.collector.add

        if not is_valid_identifier(name):
            report(
                line,
                f"Constant name '{name}' does not follow identifier rules",
                Category.CONSTANT,
            )
        if is_reserved(name):
            report(line, f"Constant name '{name}' is a JavaScript reserved word", Category.CONSTANT)
        if node.initializer is None:
            report(line, "Constant must be assigned a value at declaration", Category.CONSTANT)
        if after_variable:
            report(
                line,
                "Constant cannot be declared after var or let in the same scope",
                Category.CONSTANT,
            )
