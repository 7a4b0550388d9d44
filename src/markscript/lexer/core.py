"""Two-mode lexer for HTML documents with embedded JavaScript.

Scans markup until a ``<script`` opening tag, then scans script tokens until
the matching ``</script>``. Every character of the source either lands in a
token value or is whitespace skipped between tokens.

No regex in the hot path. Unrecognized characters become single-character
punctuation tokens, so the scan always advances and never raises.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from markscript.lexer.modes import WHITESPACE_CHARS, LexerMode
from markscript.lexer.scanners import MarkupScannerMixin, ScriptScannerMixin
from markscript.tokens import Token, TokenType
from markscript.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer(
    MarkupScannerMixin,
    ScriptScannerMixin,
):
    """Mode-switching lexer producing a fully materialized token list.

    Usage:
            >>> lexer = Lexer("<p>Hi</p>")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(TAG_OPEN, '<p>', 1:1)
        Token(TEXT, 'Hi', 1:4)
        Token(TAG_CLOSE, '</p>', 1:6)
        Token(EOF, '', 1:10)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_pos",
        "_lineno",
        "_col",
        "_mode",
        "_source_file",
        "_saved_pos",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: HTML document text
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._mode = LexerMode.MARKUP
        self._source_file = source_file

        self._saved_pos = 0
        self._saved_lineno = 1
        self._saved_col = 1

    @property
    def mode(self) -> LexerMode:
        """Current scanning mode."""
        return self._mode

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Returns:
            Tokens in source order, terminated by exactly one EOF token.

        Complexity: O(n) where n = len(source)
        """
        tokens: list[Token] = []
        while True:
            self._skip_whitespace()
            if self._pos >= self._source_len:
                break
            token = self._dispatch_mode()
            if token is not None:
                tokens.append(token)

        self._save_location()
        tokens.append(self._make_token(TokenType.EOF, ""))
        return tokens

    def _dispatch_mode(self) -> Token | None:
        """Dispatch to the scanner for the current mode.

        Returns:
            The next token, or None when the scanned span produced no token
            (whitespace-only text).
        """
        if self._mode == LexerMode.MARKUP:
            return self._scan_markup()
        return self._scan_script()

    def _switch_mode(self, mode: LexerMode) -> None:
        """Enter ``mode`` at the current position."""
        logger.debug(
            "lexer mode %s -> %s at %d:%d", self._mode.name, mode.name, self._lineno, self._col
        )
        self._mode = mode

    # =========================================================================
    # Character navigation helpers
    # =========================================================================

    def _peek(self, ahead: int = 0) -> str:
        """Peek at a character without advancing.

        Returns:
            The character ``ahead`` positions past the current one, or empty
            string past the end of input.
        """
        pos = self._pos + ahead
        if pos >= self._source_len:
            return ""
        return self._source[pos]

    def _starts_with(self, prefix: str, *, ignore_case: bool = False) -> bool:
        """Whether the source continues with ``prefix`` at the current position."""
        end = self._pos + len(prefix)
        if ignore_case:
            return self._source[self._pos : end].lower() == prefix.lower()
        return self._source.startswith(prefix, self._pos)

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs and newlines between tokens."""
        start = self._pos
        pos = start
        source = self._source
        source_len = self._source_len
        while pos < source_len and source[pos] in WHITESPACE_CHARS:
            pos += 1
        if pos != start:
            self._advance_to(pos)

    def _advance_to(self, end: int) -> None:
        """Move the position to ``end``, counting lines and columns.

        Newlines inside the consumed span advance the line and reset the
        column, so positions after multi-line tokens stay exact.

        Args:
            end: Position to advance to (clamped to end of input).
        """
        end = min(end, self._source_len)
        if end <= self._pos:
            return

        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")
        if newline_count:
            self._lineno += newline_count
            self._col = len(segment) - segment.rfind("\n")
        else:
            self._col += len(segment)
        self._pos = end

    def _find_tag_end(self, start: int) -> int:
        """Find the position just past the ``>`` closing a tag started at ``start``.

        Tracks single and double quotes so that ``>`` inside an attribute
        value does not close the tag.

        Returns:
            Position after the closing ``>``, or end of input.
        """
        source = self._source
        quote = ""
        pos = start
        while pos < self._source_len:
            ch = source[pos]
            pos += 1
            if quote:
                if ch == quote:
                    quote = ""
            elif ch == '"' or ch == "'":
                quote = ch
            elif ch == ">":
                return pos
        return self._source_len

    def _find_end(self, delimiter: str, start: int) -> int:
        """Find the position just past ``delimiter``, or end of input."""
        idx = self._source.find(delimiter, start)
        if idx == -1:
            return self._source_len
        return idx + len(delimiter)

    # =========================================================================
    # Token creation
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location as the start of the next token."""
        self._saved_pos = self._pos
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create a Token starting at the saved location."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._saved_lineno,
            col=self._saved_col,
            offset=self._saved_pos,
            source_file=self._source_file,
        )

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Consume source up to ``end`` and return it as one token.

        Args:
            token_type: Type of the emitted token
            end: Position just past the token's last character

        Returns:
            Token whose value is the raw source text consumed.
        """
        self._save_location()
        value = self._source[self._pos : end]
        self._advance_to(end)
        return self._make_token(token_type, value)
