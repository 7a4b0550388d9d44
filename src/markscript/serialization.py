"""AST dump for ``markscript --dump-ast``.

Every node becomes a dict holding a ``_type`` key (the node class name) and
one key per dataclass field. Child nodes nest as dicts, tuples become lists
and locations become plain ``lineno``/``col_offset``/``offset``/
``end_offset``/``source_file`` dicts.

The conversion walks the tree with an explicit stack, so documents nested
deeper than the interpreter recursion limit still convert. ``Document.root``
is the same object as one of the tags under ``children``; it is converted
once and the resulting dict appears in both places.

Example:
    >>> from markscript import parse
    >>> data = to_dict(parse("<p>Hi</p>").document)
    >>> data["children"][0]["name"]
    'p'

"""

import json
from dataclasses import fields
from typing import Any, TypeAlias

from markscript.location import SourceLocation
from markscript.nodes import Document, Node

NodeDict: TypeAlias = dict[str, Any]


def _location_dict(loc: SourceLocation) -> dict[str, Any]:
    return {
        "lineno": loc.lineno,
        "col_offset": loc.col_offset,
        "offset": loc.offset,
        "end_offset": loc.end_offset,
        "source_file": loc.source_file,
    }


def _child_nodes(node: Node) -> list[Node]:
    """Nodes held directly in ``node``'s fields, in field order."""
    children: list[Node] = []
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Node):
            children.append(value)
        elif isinstance(value, tuple):
            children.extend(item for item in value if isinstance(item, Node))
    return children


def _node_dict(node: Node, built: dict[int, NodeDict]) -> NodeDict:
    """Dict for ``node``; every child must already be in ``built``."""
    entry: NodeDict = {"_type": type(node).__name__}
    for f in fields(node):
        value = getattr(node, f.name)
        match value:
            case Node():
                entry[f.name] = built[id(value)]
            case SourceLocation():
                entry[f.name] = _location_dict(value)
            case tuple():
                entry[f.name] = [
                    built[id(item)] if isinstance(item, Node) else item for item in value
                ]
            case _:
                entry[f.name] = value
    return entry


def to_dict(node: Node) -> NodeDict:
    """Convert a node and everything under it to JSON-compatible dicts.

    Args:
        node: Any markscript AST node

    Returns:
        Dict with ``_type`` and one entry per node field.
    """
    built: dict[int, NodeDict] = {}
    # (node, children already scheduled)
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if id(current) in built:
            continue
        if expanded:
            built[id(current)] = _node_dict(current, built)
            continue
        stack.append((current, True))
        stack.extend((child, False) for child in reversed(_child_nodes(current)))
    return built[id(node)]


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string with sorted keys.

    Args:
        doc: Document to serialize
        indent: JSON indentation level (None for compact)
    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


__all__ = ["NodeDict", "to_dict", "to_json"]
