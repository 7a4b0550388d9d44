"""Open-tag stack for building the markup tree.

Tags are collected into mutable frames while the token stream is consumed,
because a tag's children are only known once its closing tag (or the end
of input) is reached. Frames are frozen into immutable Tag nodes once the
parse is complete.

Usage:
    stack = TagStack()
    stack.push(TagFrame(name="div", location=loc))
    stack.pop_to("div")      # unwinds to the first matching frame
    tags, built = freeze_frames(roots)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markscript.location import SourceLocation
from markscript.nodes import Attribute, Script, Tag, TagChild, Text


@dataclass(slots=True)
class TagFrame:
    """An element whose children are still being collected.

    Attributes:
        name: Lowercased tag name
        location: Position of the opening tag
        attributes: Parsed attributes in source order
        self_closing: Tag ended with ``/>`` or `` /``
        children: Child frames, Text and Script nodes in document order

    """

    name: str
    location: SourceLocation
    attributes: tuple[Attribute, ...] = ()
    self_closing: bool = False
    children: list[TagFrame | Text | Script] = field(default_factory=list)

    def to_tag(self, children: tuple[TagChild, ...]) -> Tag:
        """Build the immutable Tag for this frame with already-frozen children."""
        return Tag(
            location=self.location,
            name=self.name,
            attributes=self.attributes,
            children=children,
            self_closing=self.self_closing,
        )


@dataclass
class TagStack:
    """Stack of currently open tags.

    Invariant: stack[-1] is the innermost open tag. An empty stack means
    new content belongs at document level.

    """

    _stack: list[TagFrame] = field(default_factory=list)

    @property
    def top(self) -> TagFrame | None:
        """Innermost open tag, or None at document level."""
        return self._stack[-1] if self._stack else None

    def push(self, frame: TagFrame) -> None:
        """Open ``frame``."""
        self._stack.append(frame)

    def pop(self) -> TagFrame:
        """Close the innermost open tag.

        Raises:
            IndexError: If no tag is open
        """
        return self._stack.pop()

    def find(self, name: str) -> int:
        """Index of the innermost open tag named ``name`` (case-insensitive), or -1."""
        lowered = name.lower()
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i].name.lower() == lowered:
                return i
        return -1

    def pop_to(self, name: str) -> TagFrame | None:
        """Close tags down to and including the innermost one named ``name``.

        Frames above the match are closed implicitly. When no open tag
        matches, the stack is left unchanged.

        Returns:
            The matched frame, or None when nothing matched.
        """
        idx = self.find(name)
        if idx < 0:
            return None
        frame = self._stack[idx]
        del self._stack[idx:]
        return frame

    def names(self) -> tuple[str, ...]:
        """Names of open tags, outermost first."""
        return tuple(frame.name for frame in self._stack)

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)


def freeze_frames(roots: list[TagFrame]) -> tuple[tuple[Tag, ...], dict[int, Tag]]:
    """Freeze a forest of frames into Tag nodes.

    Iterative post-order walk so deep nesting is bounded by the explicit
    stack, not the interpreter's recursion limit.

    Args:
        roots: Top-level frames in document order

    Returns:
        (top-level Tags, mapping of ``id(frame)`` to its built Tag)
    """
    built: dict[int, Tag] = {}
    pending: list[tuple[TagFrame, bool]] = [(frame, False) for frame in reversed(roots)]

    while pending:
        frame, expanded = pending.pop()
        if expanded:
            children = tuple(
                built[id(child)] if isinstance(child, TagFrame) else child
                for child in frame.children
            )
            built[id(frame)] = frame.to_tag(children)
            continue

        pending.append((frame, True))
        for child in frame.children:
            if isinstance(child, TagFrame):
                pending.append((child, False))

    return tuple(built[id(frame)] for frame in roots), built
