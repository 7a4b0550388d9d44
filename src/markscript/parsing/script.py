"""Script-state parsing mixin.

Recognizes the statement forms the analyzer cares about: ``let``/``var``
and ``const`` declarations, function declarations, assignments and
expression statements. Everything else is skipped token by token.

Statements are appended to the innermost statement sink: the script
region's list, or a function body's list while that body is open.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.nodes import Assignment, Const, Function, Identifier, Variable
from markscript.parsing.expressions import ASSIGNMENT_OPERATORS
from markscript.tokens import WORD_TYPES, Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markscript.config import AnalysisConfig
    from markscript.nodes import ScriptExpr, Statement

# Token types that end an assignment lookahead
_STATEMENT_END = frozenset(
    {TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE, TokenType.SCRIPT_CLOSE, TokenType.EOF}
)


class ScriptParsingMixin:
    """Mixin for script-state statement parsing.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int
        - _pos: int
        - _current: Token | None
        - _config: AnalysisConfig
        - _sinks: list[list[Statement]]
        - _declared_names: list[str]

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None
    _config: AnalysisConfig
    _sinks: list[list[Statement]]
    _declared_names: list[str]

    def _advance(self) -> Token | None:
        """Advance to next token. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _seek(self, pos: int) -> Token | None:
        """Jump to a token index. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _check(self, token_type: TokenType, value: str | None = None) -> bool:
        """Check current token. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _skip_punct(self, value: str) -> None:
        """Skip punctuation. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _parse_expression(self) -> ScriptExpr | None:
        """Parse an expression. Implemented by ExpressionParsingMixin."""
        raise NotImplementedError

    def _close_script(self) -> None:
        """End the script region. Implemented by MarkupParsingMixin."""
        raise NotImplementedError

    def _add_statement(self, statement: Statement) -> None:
        """Append ``statement`` to the innermost statement list."""
        if self._sinks:
            self._sinks[-1].append(statement)

    def _parse_script_token(self) -> None:
        """Consume one statement (or one skipped token) in script state."""
        tok = self._current
        if tok is None:
            return

        match tok.type:
            case TokenType.SCRIPT_CLOSE:
                self._close_script()
                self._advance()
            case TokenType.KEYWORD:
                self._parse_keyword_statement(tok)
            case TokenType.IDENTIFIER:
                self._parse_assignment_or_expression()
            case _:
                self._advance()

    def _parse_keyword_statement(self, tok: Token) -> None:
        """Dispatch on a statement-leading keyword."""
        keyword = tok.value
        if keyword == "function":
            self._parse_function()
        elif keyword == "let" or keyword == "var":
            self._parse_variable()
        elif keyword == "const":
            self._parse_const()
        elif keyword in self._config.expression_keywords:
            expr = self._parse_expression()
            if expr is not None:
                self._add_statement(expr)
            self._skip_punct(";")
        else:
            self._advance()

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_declared_name(self) -> Identifier | None:
        """Consume the name after ``let``/``var``/``const`` and record it.

        Any word token is accepted so reserved words used as names reach
        the naming rules.
        """
        tok = self._current
        if tok is None or tok.type not in WORD_TYPES:
            return None
        self._advance()
        self._declared_names.append(tok.value)
        return Identifier(location=tok.location, name=tok.value)

    def _parse_initializer(self) -> ScriptExpr | None:
        """Parse ``= expr`` if present."""
        if self._check(TokenType.OPERATOR, "="):
            self._advance()
            return self._parse_expression()
        return None

    def _parse_variable(self) -> None:
        """Parse ``let name [= expr] [;]`` or the ``var`` form."""
        kw = self._current
        assert kw is not None
        self._advance()
        target = self._parse_declared_name()
        if target is None:
            return
        initializer = self._parse_initializer()
        self._add_statement(
            Variable(location=kw.location, keyword=kw.value, target=target, initializer=initializer)
        )
        self._skip_punct(";")

    def _parse_const(self) -> None:
        """Parse ``const name [= expr] [;]``."""
        kw = self._current
        assert kw is not None
        self._advance()
        target = self._parse_declared_name()
        if target is None:
            return
        initializer = self._parse_initializer()
        self._add_statement(Const(location=kw.location, target=target, initializer=initializer))
        self._skip_punct(";")

    # =========================================================================
    # Functions
    # =========================================================================

    def _parse_function(self) -> None:
        """Parse ``function name(params) { body }``.

        Anonymous functions are left to the statement loop.
        """
        kw = self._current
        assert kw is not None
        self._advance()
        name_tok = self._current
        if name_tok is None or name_tok.type not in WORD_TYPES:
            return
        self._advance()

        parameters: tuple[Identifier, ...] = ()
        if self._check(TokenType.LEFT_PAREN):
            self._advance()
            parameters = self._parse_parameters()

        body: list[Statement] = []
        if self._check(TokenType.LEFT_BRACE):
            self._advance()
            self._parse_function_body(body)

        self._add_statement(
            Function(
                location=kw.location,
                name=name_tok.value,
                parameters=parameters,
                body=tuple(body),
            )
        )

    def _parse_parameters(self) -> tuple[Identifier, ...]:
        """Parse identifiers up to the closing parenthesis.

        Non-identifier tokens inside the list are skipped.
        """
        params: list[Identifier] = []
        while True:
            tok = self._current
            if tok is None or tok.type in _STATEMENT_END or tok.type == TokenType.RIGHT_PAREN:
                break
            if tok.type == TokenType.IDENTIFIER:
                params.append(Identifier(location=tok.location, name=tok.value))
            self._advance()
        if self._check(TokenType.RIGHT_PAREN):
            self._advance()
        return tuple(params)

    def _parse_function_body(self, body: list[Statement]) -> None:
        """Parse statements until the brace matching the one already consumed.

        Nested braces are balanced with a depth counter. Only declarations
        and identifier-led statements are captured. The end of the script
        region also ends the body, without being consumed.
        """
        self._sinks.append(body)
        depth = 1
        try:
            while depth > 0:
                tok = self._current
                if tok is None or tok.type in (TokenType.EOF, TokenType.SCRIPT_CLOSE):
                    break
                match tok.type:
                    case TokenType.LEFT_BRACE:
                        depth += 1
                        self._advance()
                    case TokenType.RIGHT_BRACE:
                        depth -= 1
                        self._advance()
                    case TokenType.KEYWORD if tok.value in ("let", "var"):
                        self._parse_variable()
                    case TokenType.KEYWORD if tok.value == "const":
                        self._parse_const()
                    case TokenType.IDENTIFIER:
                        self._parse_assignment_or_expression()
                    case _:
                        self._advance()
        finally:
            self._sinks.pop()

    # =========================================================================
    # Assignments and expression statements
    # =========================================================================

    def _find_assignment_operator(self) -> int:
        """Look ahead from the current token for an assignment operator.

        The lookahead stops at ``;``, braces, the end of the script region
        and end of input.

        Returns:
            Token index of the operator, or -1 if the statement has none.
        """
        pos = self._pos + 1
        tokens = self._tokens
        while pos < self._tokens_len:
            tok = tokens[pos]
            if tok.type in _STATEMENT_END or tok.is_punct(";"):
                return -1
            if tok.type == TokenType.OPERATOR and tok.value in ASSIGNMENT_OPERATORS:
                return pos
            pos += 1
        return -1

    def _read_assignment_target(self, op_index: int) -> tuple[Identifier, str]:
        """Consume the tokens before the operator at ``op_index`` and the operator.

        Returns:
            (target, operator) where the target's name is the concatenated
            raw text of the left-hand side, comments excluded.
        """
        first = self._current
        assert first is not None
        name = "".join(
            tok.value
            for tok in self._tokens[self._pos : op_index]
            if tok.type != TokenType.COMMENT
        )
        operator = self._tokens[op_index].value
        self._seek(op_index + 1)
        return Identifier(location=first.location, name=name), operator

    def _parse_assignment_or_expression(self) -> None:
        """Parse an identifier-led statement as an assignment or an expression."""
        op_index = self._find_assignment_operator()
        if op_index < 0:
            expr = self._parse_expression()
            if expr is not None:
                self._add_statement(expr)
        else:
            self._add_statement(self._parse_assignment(op_index))
        self._skip_punct(";")

    def _parse_assignment(self, op_index: int) -> Assignment:
        """Parse ``target op value``, nesting chained assignments to the right.

        ``a = b = 1`` becomes ``Assignment(a, =, Assignment(b, =, 1))``.
        """
        chain = [self._read_assignment_target(op_index)]
        while self._check(TokenType.IDENTIFIER):
            next_op = self._find_assignment_operator()
            if next_op < 0:
                break
            chain.append(self._read_assignment_target(next_op))

        value: ScriptExpr | None = self._parse_expression()
        for target, operator in reversed(chain):
            value = Assignment(location=target.location, target=target, operator=operator, value=value)
        assert isinstance(value, Assignment)
        return value
