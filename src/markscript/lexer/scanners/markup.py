"""Markup mode scanner mixin."""

from markscript.lexer.modes import LexerMode
from markscript.tokens import Token, TokenType

# Characters that may follow "<script" for it to open a script element
_SCRIPT_NAME_END = frozenset(" \t\r\n\f>/")


class MarkupScannerMixin:
    """Mixin providing markup mode scanning logic.

    Recognizes, in priority order: script opening tags, doctype
    declarations, HTML comments, closing tags, opening tags and text.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _lineno: int
    _col: int

    def _peek(self, ahead: int = 0) -> str:
        """Peek at a character. Implemented by Lexer."""
        raise NotImplementedError

    def _starts_with(self, prefix: str, *, ignore_case: bool = False) -> bool:
        """Prefix check at current position. Implemented by Lexer."""
        raise NotImplementedError

    def _find_tag_end(self, start: int) -> int:
        """Quote-aware tag end search. Implemented by Lexer."""
        raise NotImplementedError

    def _find_end(self, delimiter: str, start: int) -> int:
        """Delimiter search. Implemented by Lexer."""
        raise NotImplementedError

    def _emit(self, token_type: TokenType, end: int) -> Token:
        """Consume and emit a token. Implemented by Lexer."""
        raise NotImplementedError

    def _switch_mode(self, mode: LexerMode) -> None:
        """Change lexer mode. Implemented by Lexer."""
        raise NotImplementedError

    def _save_location(self) -> None:
        """Save token start location. Implemented by Lexer."""
        raise NotImplementedError

    def _advance_to(self, end: int) -> None:
        """Advance with line tracking. Implemented by Lexer."""
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create a token at the saved location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_markup(self) -> Token | None:
        """Scan one markup construct at the current position.

        Returns:
            The scanned token, or None for whitespace-only text.
        """
        if self._peek() != "<":
            return self._scan_text()

        if self._is_script_open():
            token = self._emit(TokenType.SCRIPT_OPEN, self._find_tag_end(self._pos))
            self._switch_mode(LexerMode.SCRIPT)
            return token

        if self._starts_with("<!DOCTYPE", ignore_case=True):
            return self._emit(TokenType.DOCTYPE, self._find_end(">", self._pos))

        if self._starts_with("<!--"):
            return self._emit(TokenType.COMMENT, self._find_end("-->", self._pos + 4))

        if self._peek(1) == "/":
            return self._emit(TokenType.TAG_CLOSE, self._find_end(">", self._pos))

        return self._emit(TokenType.TAG_OPEN, self._find_tag_end(self._pos))

    def _is_script_open(self) -> bool:
        """Check for ``<script`` followed by whitespace, ``>``, ``/`` or end of input."""
        if not self._starts_with("<script", ignore_case=True):
            return False
        following = self._peek(7)
        return following == "" or following in _SCRIPT_NAME_END

    def _scan_text(self) -> Token | None:
        """Scan text up to the next ``<``.

        The token value is the trimmed text; whitespace-only text produces
        no token.
        """
        idx = self._source.find("<", self._pos)
        end = idx if idx != -1 else self._source_len
        raw = self._source[self._pos : end]
        text = raw.strip()

        lead = len(raw) - len(raw.lstrip())
        self._advance_to(self._pos + lead)
        self._save_location()
        self._advance_to(end)
        if not text:
            return None
        return self._make_token(TokenType.TEXT, text)
