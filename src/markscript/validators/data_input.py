"""Data-input pass: ``getElementById`` lookups must name a known element id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.nodes import Identifier
from markscript.utils.text import is_quoted, strip_quotes
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from collections.abc import Iterable

    from markscript.nodes import Call

LOOKUP_METHOD = "getElementById"


class DataInputValidator(ScriptWalker):
    """Every reachable Call to ``getElementById`` with a quoted literal argument.

    Args:
        element_ids: Identifier registry collected by the parser.

    """

    name = "data-input"

    def __init__(self, element_ids: Iterable[str]) -> None:
        super().__init__()
        self.element_ids = frozenset(element_ids)

    def visit_call(self, node: Call) -> None:
        if LOOKUP_METHOD not in node.callee.name or not node.arguments:
            return
        argument = node.arguments[0]
        if not isinstance(argument, Identifier) or not is_quoted(argument.name):
            return
        element_id = strip_quotes(argument.name)
        if element_id not in self.element_ids:
            self.collector.add(
                node.lineno,
                f"getElementById references non-existent element ID: '{element_id}'",
                Category.DATA_INPUT,
            )
