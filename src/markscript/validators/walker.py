"""Shared traversal for rule passes.

ScriptWalker visits Document, then every Tag in document order, then each
Script's statements, Function bodies and nested expression nodes. The walk
is iterative (pre-order, children in source order) and keyed by node
identity, so each node is dispatched at most once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.visitor import BaseVisitor, child_nodes

if TYPE_CHECKING:
    from markscript.diagnostics import DiagnosticCollector
    from markscript.nodes import Document, Node


class ScriptWalker(BaseVisitor[None]):
    """Base class for passes that inspect script nodes.

    Subclasses override ``visit_*`` hooks and report through
    ``self.collector`` while ``validate`` is running.

    """

    name = "walker"

    def __init__(self) -> None:
        self._collector: DiagnosticCollector | None = None

    @property
    def collector(self) -> DiagnosticCollector:
        """Collector of the run in progress."""
        if self._collector is None:
            raise RuntimeError(f"{type(self).__name__} used outside validate()")
        return self._collector

    def validate(self, document: Document, collector: DiagnosticCollector) -> None:
        """Walk ``document`` reporting to ``collector``."""
        self._collector = collector
        try:
            self.visit(document)
        finally:
            self._collector = None

    def visit(self, node: Node) -> None:
        """Dispatch every node reachable from ``node`` once, in document order."""
        visited: set[int] = set()
        pending: list[Node] = [node]
        while pending:
            current = pending.pop()
            key = id(current)
            if key in visited:
                continue
            visited.add(key)
            self._dispatch(current)
            pending.extend(reversed(child_nodes(current)))
