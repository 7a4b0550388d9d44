"""Script mode scanner mixin.

Classifies each script token by its leading character: string, number,
identifier or keyword, comment, operator, bracket, punctuation. Anything
unrecognized becomes a single-character PUNCTUATION token.
"""

from markscript.lexer.modes import (
    BOOLEAN_WORDS,
    KEYWORDS,
    NULL_WORD,
    OPERATOR_CHARS,
    THREE_CHAR_OPERATORS,
    TWO_CHAR_OPERATORS,
    LexerMode,
)
from markscript.tokens import Token, TokenType
from markscript.utils.text import is_identifier_part, is_identifier_start

_BRACKETS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
}


class ScriptScannerMixin:
    """Mixin providing script mode scanning logic.

    Detects the closing ``</script>`` tag and returns the lexer to markup
    mode.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int

    def _peek(self, ahead: int = 0) -> str:
        """Peek at a character. Implemented by Lexer."""
        raise NotImplementedError

    def _starts_with(self, prefix: str, *, ignore_case: bool = False) -> bool:
        """Prefix check at current position. Implemented by Lexer."""
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

    def _scan_script(self) -> Token:
        """Scan one script token at the current position."""
        ch = self._peek()

        if ch == "<":
            close_end = self._script_close_end()
            if close_end:
                token = self._emit(TokenType.SCRIPT_CLOSE, close_end)
                self._switch_mode(LexerMode.MARKUP)
                return token

        if ch == '"' or ch == "'":
            return self._emit(TokenType.STRING, self._string_end(ch))

        if ch.isdigit():
            return self._emit(TokenType.NUMBER, self._number_end())

        if is_identifier_start(ch):
            return self._scan_word()

        if ch == "/":
            nxt = self._peek(1)
            if nxt == "/":
                idx = self._source.find("\n", self._pos)
                return self._emit(TokenType.COMMENT, idx if idx != -1 else self._source_len)
            if nxt == "*":
                return self._emit(TokenType.COMMENT, self._find_end("*/", self._pos + 2))

        if ch in OPERATOR_CHARS:
            return self._scan_operator()

        bracket = _BRACKETS.get(ch)
        if bracket is not None:
            return self._emit(bracket, self._pos + 1)

        # ; , . : ? and any unrecognized character
        return self._emit(TokenType.PUNCTUATION, self._pos + 1)

    def _script_close_end(self) -> int:
        """Match ``</script`` + optional whitespace + ``>`` at the current position.

        Returns:
            Position after the ``>``, or 0 when there is no closing tag here.
        """
        if not self._starts_with("</script", ignore_case=True):
            return 0
        pos = self._pos + 8
        source = self._source
        while pos < self._source_len and source[pos].isspace():
            pos += 1
        if pos < self._source_len and source[pos] == ">":
            return pos + 1
        return 0

    def _string_end(self, delimiter: str) -> int:
        """End of a string literal opened by ``delimiter``.

        Backslash escapes the next character. An unescaped newline ends an
        unterminated string without being consumed.
        """
        source = self._source
        pos = self._pos + 1
        while pos < self._source_len:
            ch = source[pos]
            if ch == "\\":
                pos += 2
                continue
            if ch == delimiter:
                return pos + 1
            if ch == "\n":
                return pos
            pos += 1
        return self._source_len

    def _number_end(self) -> int:
        """End of a numeric literal: digits, one ``.``, optional signed exponent."""
        source = self._source
        source_len = self._source_len
        pos = self._pos
        while pos < source_len and source[pos].isdigit():
            pos += 1
        if pos < source_len and source[pos] == ".":
            pos += 1
            while pos < source_len and source[pos].isdigit():
                pos += 1
        if pos < source_len and source[pos] in "eE":
            exp = pos + 1
            if exp < source_len and source[exp] in "+-":
                exp += 1
            if exp < source_len and source[exp].isdigit():
                pos = exp
                while pos < source_len and source[pos].isdigit():
                    pos += 1
        return pos

    def _scan_word(self) -> Token:
        """Scan an identifier and classify it as keyword, literal or identifier."""
        source = self._source
        pos = self._pos + 1
        while pos < self._source_len and is_identifier_part(source[pos]):
            pos += 1
        word = source[self._pos : pos]

        if word in KEYWORDS:
            token_type = TokenType.KEYWORD
        elif word in BOOLEAN_WORDS:
            token_type = TokenType.BOOLEAN
        elif word == NULL_WORD:
            token_type = TokenType.NULL
        else:
            token_type = TokenType.IDENTIFIER
        return self._emit(token_type, pos)

    def _scan_operator(self) -> Token:
        """Scan the longest operator at the current position."""
        source = self._source
        pos = self._pos
        if source[pos : pos + 3] in THREE_CHAR_OPERATORS:
            return self._emit(TokenType.OPERATOR, pos + 3)
        if source[pos : pos + 2] in TWO_CHAR_OPERATORS:
            return self._emit(TokenType.OPERATOR, pos + 2)
        return self._emit(TokenType.OPERATOR, pos + 1)
