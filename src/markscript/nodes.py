"""Typed AST nodes for markscript.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Markup family
│   ├── Document
│   ├── Tag
│   ├── Attribute
│   └── Text
└── Script family
    ├── Script (statement container, child of a Tag)
    ├── Variable (let / var)
    ├── Const
    ├── Assignment
    ├── Function
    ├── Call
    ├── Identifier (names, literals, flattened dotted chains)
    └── Expression (flat operand/operator sequence)

Every node owns its children exclusively. A Function's body statements
belong to the Function only, never also to the enclosing Script.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from markscript.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for diagnostics and debugging.

    """

    location: SourceLocation

    @property
    def lineno(self) -> int:
        """Start line of the node (1-indexed)."""
        return self.location.lineno


# =============================================================================
# Markup Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attribute(Node):
    """Tag attribute.

    ``value`` has surrounding quotes removed and is empty for boolean
    attributes such as ``disabled``.

    """

    name: str
    value: str = ""


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Trimmed text content between tags. Never empty."""

    content: str


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """An element.

    Children are Tags, Text and Script containers in document order.
    The doctype declaration is represented as a Tag named ``!DOCTYPE``.
    Closing tags only unwind the open-tag stack, so tags in a parsed tree
    always have ``closing`` False.

    """

    name: str
    attributes: tuple[Attribute, ...] = ()
    children: tuple[TagChild, ...] = ()
    self_closing: bool = False
    closing: bool = False

    def get_attribute(self, name: str) -> Attribute | None:
        """First attribute whose name matches ``name`` case-insensitively."""
        lowered = name.lower()
        for attr in self.attributes:
            if attr.name.lower() == lowered:
                return attr
        return None

    @property
    def child_tags(self) -> tuple[Tag, ...]:
        """Direct children that are Tags."""
        return tuple(child for child in self.children if isinstance(child, Tag))


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node of a parsed document.

    ``children`` holds the top-level Tags. ``doctype`` references the
    doctype Tag when one was seen. ``root`` references the first ``html``
    Tag encountered at any depth; it is the same object that appears in
    the tree.

    """

    children: tuple[Tag, ...] = ()
    doctype: Tag | None = None
    root: Tag | None = None


# =============================================================================
# Script Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    """A name, a literal, or a flattened property/method chain.

    Literals keep their raw source text (string literals keep their quotes).

    """

    name: str


@dataclass(frozen=True, slots=True)
class Expression(Node):
    """Flat operand/operator sequence, evaluated left to right.

    Not a precedence tree: ``a + b * c`` has three operands and two operators.

    """

    operands: tuple[ScriptExpr, ...]
    operators: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Call(Node):
    """Function or method call.

    The callee is a dotted name (``document.getElementById``).

    """

    callee: Identifier
    arguments: tuple[ScriptExpr, ...] = ()


@dataclass(frozen=True, slots=True)
class Assignment(Node):
    """Assignment statement or nested chain assignment.

    ``target.name`` is the flattened left-hand side, e.g.
    ``document.getElementById("out").innerHTML``. ``value`` is itself an
    Assignment for chains such as ``a = b = 1``.

    """

    target: Identifier
    operator: str
    value: ScriptExpr | None = None


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """``let`` or ``var`` declaration."""

    keyword: str
    target: Identifier
    initializer: ScriptExpr | None = None


@dataclass(frozen=True, slots=True)
class Const(Node):
    """``const`` declaration.

    The initializer may be absent; validation reports that, construction
    does not.

    """

    target: Identifier
    initializer: ScriptExpr | None = None


@dataclass(frozen=True, slots=True)
class Function(Node):
    """Function declaration.

    ``body`` holds only the declarations and identifier-led statements
    found inside the braces.

    """

    name: str
    parameters: tuple[Identifier, ...] = ()
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True, slots=True)
class Script(Node):
    """Statements of one ``<script>`` element."""

    statements: tuple[Statement, ...] = ()


# PEP 695 type aliases

ScriptExpr: TypeAlias = Assignment | Call | Expression | Identifier

Statement: TypeAlias = Variable | Const | Assignment | Function | Call | Expression | Identifier

ScriptNode: TypeAlias = Script | Statement

TagChild: TypeAlias = Tag | Text | Script

Markup: TypeAlias = Document | Tag | Attribute | Text
