"""Function declaration pass."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.validators.naming import is_reserved, is_valid_identifier
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from markscript.nodes import Function


class FunctionValidator(ScriptWalker):
    """Function names, parameters and non-empty bodies."""

    name = "functions"

    def visit_function(self, node: Function) -> None:
        report = self.collector.add
        line = node.lineno
        name = node.name

        if not name:
            report(line, "Function name cannot be empty", Category.FUNCTION)
            return

        if not is_valid_identifier(name):
            report(
                line,
                f"Function name '{name}' does not follow identifier rules",
                Category.FUNCTION,
            )
        if is_reserved(name):
            report(line, f"Function name '{name}' is a JavaScript reserved word", Category.FUNCTION)

        for param in node.parameters:
            if not is_valid_identifier(param.name):
                report(
                    param.lineno,
                    f"Function parameter '{param.name}' does not follow identifier rules",
                    Category.FUNCTION,
                )
            if is_reserved(param.name):
                report(
                    param.lineno,
                    f"Function parameter '{param.name}' is a JavaScript reserved word",
                    Category.FUNCTION,
                )

        if not node.body:
            report(line, "Function body must contain at least one statement", Category.FUNCTION)
