"""Token navigation utilities for the markscript parser.

Provides mixin for token stream navigation and basic lookahead checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int
        - _current: Token | None

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _seek(self, pos: int) -> Token | None:
        """Move to absolute token index ``pos`` and return the token there."""
        self._pos = pos
        if pos < self._tokens_len:
            self._current = self._tokens[pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def _check(self, token_type: TokenType, value: str | None = None) -> bool:
        """Whether the current token has ``token_type`` (and ``value``, if given)."""
        tok = self._current
        if tok is None or tok.type != token_type:
            return False
        return value is None or tok.value == value

    def _check_punct(self, value: str) -> bool:
        """Whether the current token is the punctuation ``value``."""
        return self._current is not None and self._current.is_punct(value)

    def _skip_punct(self, value: str) -> None:
        """Consume the punctuation ``value`` if it is the current token."""
        if self._check_punct(value):
            self._advance()
