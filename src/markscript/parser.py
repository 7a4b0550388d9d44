"""Two-state parser producing the typed AST.

Consumes the token stream from Lexer and builds a Document spanning both
markup and embedded scripts, plus the registry of element ids.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `MarkupParsingMixin`: Tags, text, script region boundaries
- `ScriptParsingMixin`: Statements inside script regions
- `ExpressionParsingMixin`: Expressions and call chains

Malformed input never raises: unknown tokens are skipped, unmatched
closing tags leave the tag stack alone and empty expressions become None.

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share AST across threads

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from markscript.config import get_analysis_config
from markscript.lexer import Lexer
from markscript.location import SourceLocation
from markscript.nodes import Document, Statement, Tag
from markscript.parsing import (
    ExpressionParsingMixin,
    MarkupParsingMixin,
    ScriptParsingMixin,
    TagFrame,
    TagStack,
    TokenNavigationMixin,
    freeze_frames,
)
from markscript.tokens import Token


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one document.

    Attributes:
        document: Root of the AST
        element_ids: Every ``id`` attribute value, quote-stripped, in
            encounter order, duplicates kept
        declared_names: Variable and constant names in declaration order

    """

    document: Document
    element_ids: tuple[str, ...]
    declared_names: tuple[str, ...]


class Parser(
    TokenNavigationMixin,
    ExpressionParsingMixin,
    MarkupParsingMixin,
    ScriptParsingMixin,
):
    """Parser for HTML documents with embedded JavaScript.

    Usage:
            >>> parser = Parser('<div id="out"></div>')
            >>> doc = parser.parse()
            >>> doc.children[0].name
            'div'
            >>> parser.element_ids
            ('out',)

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_config",
        # Markup state
        "_tags",
        "_roots",
        "_root_frame",
        "_doctype",
        "_element_ids",
        # Script state
        "_in_script",
        "_script_owner",
        "_script_location",
        "_sinks",
        "_declared_names",
        "_call_depth",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar when parse() runs.

        Args:
            source: Document source text
            source_file: Optional source file path for locations

        """
        self._source = source
        self._source_file = source_file
        self._tokens: Sequence[Token] = ()
        self._tokens_len = 0
        self._pos = 0
        self._current: Token | None = None
        self._config = get_analysis_config()

        self._tags = TagStack()
        self._roots: list[TagFrame] = []
        self._root_frame: TagFrame | None = None
        self._doctype: Tag | None = None
        self._element_ids: list[str] = []

        self._in_script = False
        self._script_owner: TagFrame | None = None
        self._script_location: SourceLocation | None = None
        self._sinks: list[list[Statement]] = []
        self._declared_names: list[str] = []
        self._call_depth = 0

    @classmethod
    def from_tokens(cls, tokens: Sequence[Token], source_file: str | None = None) -> Parser:
        """Create a parser over an existing token stream.

        Args:
            tokens: Tokens as produced by Lexer.tokenize()
            source_file: Optional source file path for locations

        """
        parser = cls("", source_file)
        parser._tokens = tokens
        return parser

    @property
    def element_ids(self) -> tuple[str, ...]:
        """Identifier registry collected during parse()."""
        return tuple(self._element_ids)

    @property
    def declared_names(self) -> tuple[str, ...]:
        """Variable and constant names collected during parse()."""
        return tuple(self._declared_names)

    @property
    def open_tags(self) -> tuple[str, ...]:
        """Names of tags still open when parse() finished, outermost first."""
        return self._tags.names()

    def parse(self) -> Document:
        """Parse the source into a Document.

        Returns:
            Document root of the typed AST.

        """
        self._config = get_analysis_config()
        if not self._tokens:
            self._tokens = Lexer(self._source, self._source_file).tokenize()
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        while not self._at_end():
            start = self._pos
            if self._in_script:
                self._parse_script_token()
            else:
                self._parse_markup_token()
            # Every iteration consumes at least one token
            if self._pos == start:
                self._advance()

        if self._in_script:
            self._close_script()

        children, built = freeze_frames(self._roots)
        root = built[id(self._root_frame)] if self._root_frame is not None else None
        return Document(
            location=SourceLocation(1, 1, source_file=self._source_file),
            children=children,
            doctype=self._doctype,
            root=root,
        )

    def parse_result(self) -> ParseResult:
        """Parse and bundle the document with the collected registries."""
        document = self.parse()
        return ParseResult(
            document=document,
            element_ids=self.element_ids,
            declared_names=self.declared_names,
        )
