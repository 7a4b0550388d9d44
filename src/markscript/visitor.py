"""AST Visitor for markscript.

Provides a base visitor class with match-based dispatch over both node
families.

Example: collect every function name.

    class FunctionNames(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_function(self, node: Function) -> None:
            self.names.append(node.name)

    collector = FunctionNames()
    collector.visit(doc)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from markscript.nodes import (
    Assignment,
    Attribute,
    Call,
    Const,
    Document,
    Expression,
    Function,
    Identifier,
    Node,
    Script,
    Tag,
    Text,
    Variable,
)


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call, in document order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Markup visitors -------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_tag(self, node: Tag) -> T:
        return self.visit_default(node)

    def visit_attribute(self, node: Attribute) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    # -- Script visitors -------------------------------------------------------

    def visit_script(self, node: Script) -> T:
        return self.visit_default(node)

    def visit_variable(self, node: Variable) -> T:
        return self.visit_default(node)

    def visit_const(self, node: Const) -> T:
        return self.visit_default(node)

    def visit_assignment(self, node: Assignment) -> T:
        return self.visit_default(node)

    def visit_function(self, node: Function) -> T:
        return self.visit_default(node)

    def visit_call(self, node: Call) -> T:
        return self.visit_default(node)

    def visit_identifier(self, node: Identifier) -> T:
        return self.visit_default(node)

    def visit_expression(self, node: Expression) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Tag():
                return self.visit_tag(node)
            case Attribute():
                return self.visit_attribute(node)
            case Text():
                return self.visit_text(node)
            case Script():
                return self.visit_script(node)
            case Variable():
                return self.visit_variable(node)
            case Const():
                return self.visit_const(node)
            case Assignment():
                return self.visit_assignment(node)
            case Function():
                return self.visit_function(node)
            case Call():
                return self.visit_call(node)
            case Identifier():
                return self.visit_identifier(node)
            case Expression():
                return self.visit_expression(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        for child in child_nodes(node):
            self.visit(child)


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Direct children of ``node`` in document order.

    Attributes are not included; visit them from ``visit_tag`` if needed.
    Declaration names and function parameters are reached through their
    owning node, not listed as separate Identifiers.

    """
    match node:
        case Document(children=children) | Tag(children=children):
            return children
        case Script(statements=statements):
            return statements
        case Function(body=body):
            return body
        case Variable(initializer=initializer) | Const(initializer=initializer):
            return (initializer,) if initializer is not None else ()
        case Assignment(value=value):
            return (value,) if value is not None else ()
        case Call(arguments=arguments):
            return arguments
        case Expression(operands=operands):
            return operands
        case _:
            return ()  # Leaf nodes: no children
