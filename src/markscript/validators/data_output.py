"""Data-output pass: ``innerHTML`` writes must target a known element id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.diagnostics import Category
from markscript.utils.text import strip_quotes
from markscript.validators.data_input import LOOKUP_METHOD
from markscript.validators.walker import ScriptWalker

if TYPE_CHECKING:
    from collections.abc import Iterable

    from markscript.nodes import Assignment

OUTPUT_PROPERTY = "innerHTML"


def extract_lookup_id(target: str) -> str | None:
    """Quoted argument of the first ``getElementById`` in a flattened target.

    Looks for a double quote after the method name, then a single quote,
    and returns the text up to the matching closing quote, quotes included.

    >>> extract_lookup_id('document.getElementById("out").innerHTML')
    '"out"'
    >>> extract_lookup_id("el.innerHTML") is None
    True
    """
    index = target.find(LOOKUP_METHOD)
    if index < 0:
        return None
    start = target.find('"', index)
    if start < 0:
        start = target.find("'", index)
    if start < 0:
        return None
    end = target.find(target[start], start + 1)
    if end < 0:
        return None
    return target[start : end + 1]


class DataOutputValidator(ScriptWalker):
    """Every reachable Assignment whose target writes ``innerHTML``.

    Args:
        element_ids: Identifier registry collected by the parser.

    """

    name = "data-output"

    def __init__(self, element_ids: Iterable[str]) -> None:
        super().__init__()
        self.element_ids = frozenset(element_ids)

    def visit_assignment(self, node: Assignment) -> None:
        target = node.target.name
        if OUTPUT_PROPERTY not in target:
            return
        quoted = extract_lookup_id(target)
        if quoted is None:
            return
        element_id = strip_quotes(quoted)
        if element_id not in self.element_ids:
            self.collector.add(
                node.lineno,
                f"innerHTML assignment references non-existent element ID: '{element_id}'",
                Category.DATA_OUTPUT,
            )
