"""Identifier naming pass.

Checks every declared variable and constant name, every function name and
every function parameter. Each broken rule is its own diagnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.utils.text import is_identifier_start
from markscript.validators.naming import (
    first_invalid_character,
    first_special_character,
    is_reserved,
)
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from markscript.nodes import Const, Function, Variable


class IdentifierValidator(ScriptWalker):
    """Naming rules for declared names, function names and parameters."""

    name = "identifiers"

    def visit_variable(self, node: Variable) -> None:
        self.check_name(node.target.name, node.target.lineno)

    def visit_const(self, node: Const) -> None:
        self.check_name(node.target.name, node.target.lineno)

    def visit_function(self, node: Function) -> None:
        self.check_name(node.name, node.lineno)
        for param in node.parameters:
            self.check_name(param.name, param.lineno)

    def check_name(self, name: str, line: int) -> None:
        """Report every naming rule ``name`` breaks."""
        report = self.collector.add
        if not name:
            report(line, "Identifier cannot be empty", Category.IDENTIFIER)
            return

        if not is_identifier_start(name[0]):
            report(
                line,
                f"Identifier '{name}' must start with a letter, underscore, or Unicode letter",
                Category.IDENTIFIER,
            )

        invalid = first_invalid_character(name)
        if invalid is not None:
            report(
                line,
                f"Identifier '{name}' contains invalid character '{invalid}'",
                Category.IDENTIFIER,
            )

        if " " in name:
            report(line, f"Identifier '{name}' cannot contain spaces", Category.IDENTIFIER)

        special = first_special_character(name)
        if special is not None:
            report(
                line,
                f"Identifier '{name}' cannot contain special character '{special}'",
                Category.IDENTIFIER,
            )

        if is_reserved(name):
            report(
                line,
                f"Identifier '{name}' is a JavaScript reserved word and cannot be used",
                Category.IDENTIFIER,
            )
