"""Markup-state parsing mixin.

Handles doctype, opening and closing tags, text and the start of script
regions. Tag tokens are split into individual tags, attributes are parsed,
and element ids are recorded in the identifier registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.location import SourceLocation
from markscript.nodes import Attribute, Script, Tag, Text
from markscript.parsing.tag_stack import TagFrame, TagStack
from markscript.tokens import Token, TokenType
from markscript.utils.logger import get_logger
from markscript.utils.text import strip_quotes

if TYPE_CHECKING:
    from markscript.config import AnalysisConfig
    from markscript.nodes import Statement

logger = get_logger(__name__)


def split_tags(raw: str) -> list[tuple[int, str]]:
    """Split a tag token into individual ``<...>`` spans.

    Quote-aware: ``>`` and ``<`` inside quoted attribute values do not end
    a span. An unquoted ``<`` starts a new span.

    Args:
        raw: Raw tag token text

    Returns:
        (offset within raw, span text) pairs in order
    """
    spans: list[tuple[int, str]] = []
    raw_len = len(raw)
    start = 0
    while start < raw_len:
        quote = ""
        end = raw_len
        i = start + 1
        while i < raw_len:
            ch = raw[i]
            if quote:
                if ch == quote:
                    quote = ""
            elif ch == '"' or ch == "'":
                quote = ch
            elif ch == ">":
                end = i + 1
                break
            elif ch == "<":
                end = i
                break
            i += 1
        if raw[start:end].strip():
            spans.append((start, raw[start:end]))
        start = end
    return spans


def split_attributes(text: str) -> list[str]:
    """Split tag content on whitespace outside quotes.

    Pieces around a bare ``=`` are rejoined, so ``id = "x"`` yields one part.

    >>> split_attributes('div id="a b" hidden')
    ['div', 'id="a b"', 'hidden']
    """
    parts: list[str] = []
    current: list[str] = []
    quote = ""
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = ""
        elif ch == '"' or ch == "'":
            quote = ch
            current.append(ch)
        elif ch.isspace():
            if current:
                parts.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        parts.append("".join(current))

    merged: list[str] = parts[:1]
    for part in parts[1:]:
        if len(merged) > 1 and (part.startswith("=") or merged[-1].endswith("=")):
            merged[-1] += part
        else:
            merged.append(part)
    return merged


def tag_name_of(raw: str) -> str:
    """Lowercased name of an opening or closing tag."""
    inner = raw.strip()
    if inner.startswith("<"):
        inner = inner[1:]
    if inner.endswith(">"):
        inner = inner[:-1]
    inner = inner.strip().removeprefix("/").strip()
    parts = inner.split(None, 1)
    if not parts:
        return ""
    return parts[0].removesuffix("/").lower()


class MarkupParsingMixin:
    """Mixin for markup-state token handling.

    Required Host Attributes:
        - _current: Token | None
        - _config: AnalysisConfig
        - _tags: TagStack
        - _roots: list[TagFrame]
        - _root_frame: TagFrame | None
        - _doctype: Tag | None
        - _element_ids: list[str]
        - _in_script: bool
        - _script_owner: TagFrame | None
        - _script_location: SourceLocation | None
        - _sinks: list[list[Statement]]

    """

    _current: Token | None
    _config: AnalysisConfig
    _tags: TagStack
    _roots: list[TagFrame]
    _root_frame: TagFrame | None
    _doctype: Tag | None
    _element_ids: list[str]
    _in_script: bool
    _script_owner: TagFrame | None
    _script_location: SourceLocation | None
    _sinks: list[list[Statement]]

    def _advance(self) -> Token | None:
        """Advance to next token. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _parse_markup_token(self) -> None:
        """Consume one token in markup state."""
        tok = self._current
        if tok is None:
            return

        match tok.type:
            case TokenType.DOCTYPE:
                if self._doctype is None:
                    self._doctype = Tag(location=tok.location, name="!DOCTYPE")
            case TokenType.TAG_OPEN:
                self._parse_open_tags(tok)
            case TokenType.TAG_CLOSE:
                self._parse_close_tag(tok)
            case TokenType.TEXT:
                top = self._tags.top
                if top is not None and tok.value:
                    top.children.append(Text(location=tok.location, content=tok.value))
            case TokenType.SCRIPT_OPEN:
                self._open_script(tok)
            case _:
                # Comments and stray script tokens
                pass
        self._advance()

    def _parse_open_tags(self, tok: Token) -> None:
        """Parse every tag contained in one TAG_OPEN token."""
        base = tok.location
        for offset, text in split_tags(tok.value):
            location = base.shifted(tok.value[:offset]) if offset else base
            if text.lstrip().startswith("</"):
                self._close_tag(tag_name_of(text), location)
                continue
            frame = self._build_frame(text, location)
            if frame is not None:
                self._attach_frame(frame)

    def _build_frame(self, text: str, location: SourceLocation) -> TagFrame | None:
        """Parse a single ``<name attr=value ...>`` span into a frame.

        Returns:
            The frame, or None for a tag without a name (``<>``).
        """
        stripped = text.rstrip()
        self_closing = stripped.endswith("/>") or stripped.endswith(" /")

        inner = stripped.lstrip()
        if inner.startswith("<"):
            inner = inner[1:]
        if inner.endswith(">"):
            inner = inner[:-1]
        inner = inner.strip().removeprefix("/").lstrip()
        if inner.endswith("/"):
            inner = inner[:-1].rstrip()

        parts = split_attributes(inner)
        if not parts:
            return None
        name = parts[0].lower()

        attributes: list[Attribute] = []
        for part in parts[1:]:
            if "=" in part:
                attr_name, value = part.split("=", 1)
                attributes.append(
                    Attribute(
                        location=location,
                        name=attr_name.strip(),
                        value=strip_quotes(value.strip()),
                    )
                )
            elif part != "/":
                attributes.append(Attribute(location=location, name=part))

        for attr in attributes:
            if attr.name.lower() == "id":
                self._element_ids.append(attr.value)

        return TagFrame(
            name=name,
            location=location,
            attributes=tuple(attributes),
            self_closing=self_closing,
        )

    def _attach_frame(self, frame: TagFrame) -> None:
        """Attach ``frame`` to the innermost open tag and open it if it has content."""
        top = self._tags.top
        if top is not None:
            top.children.append(frame)
        else:
            self._roots.append(frame)

        if frame.name == "html" and self._root_frame is None:
            self._root_frame = frame

        if not frame.self_closing and frame.name not in self._config.void_elements:
            self._tags.push(frame)

    def _parse_close_tag(self, tok: Token) -> None:
        """Unwind the tag stack to the tag this closing tag names."""
        self._close_tag(tag_name_of(tok.value), tok.location)

    def _close_tag(self, name: str, location: SourceLocation) -> None:
        if self._tags.pop_to(name) is None:
            logger.debug("unmatched closing tag </%s> at %s", name, location)

    def _open_script(self, tok: Token) -> None:
        """Start collecting statements for a new script region."""
        self._in_script = True
        self._script_owner = self._tags.top
        self._script_location = tok.location
        self._sinks = [[]]

    def _close_script(self) -> None:
        """Finish the current script region and attach it to its owning tag.

        A script region opened at document level has no owner and is
        discarded.
        """
        if self._script_owner is not None and self._script_location is not None:
            script = Script(location=self._script_location, statements=tuple(self._sinks[0]))
            self._script_owner.children.append(script)
        elif self._sinks and self._sinks[0]:
            logger.debug("discarding top-level script at %s", self._script_location)
        self._in_script = False
        self._script_owner = None
        self._script_location = None
        self._sinks = []
