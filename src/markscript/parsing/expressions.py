"""Expression parsing mixin.

Expressions are flat operand/operator sequences; there is no precedence
climbing. Dotted names and call chains are flattened: ``a.b(x).c`` becomes
the single Identifier ``a.b.c`` and only a lone call such as ``a.b(x)``
keeps its arguments as a Call node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markscript.nodes import Call, Expression, Identifier
from markscript.tokens import LITERAL_TYPES, WORD_TYPES, Token, TokenType
from markscript.utils.logger import get_logger

if TYPE_CHECKING:
    from markscript.config import AnalysisConfig
    from markscript.nodes import ScriptExpr

logger = get_logger(__name__)

# Operators that assign rather than compute
ASSIGNMENT_OPERATORS = frozenset({"=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "**="})

# Token types that end an expression without being consumed
_EXPRESSION_STOP = frozenset(
    {TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE, TokenType.SCRIPT_CLOSE, TokenType.EOF}
)

# Call nesting beyond this depth is skipped rather than parsed
MAX_CALL_DEPTH = 100


def is_terminator(tok: Token | None) -> bool:
    """Whether ``tok`` ends an expression: ``;``, ``,`` or ``)``."""
    if tok is None:
        return True
    if tok.type == TokenType.RIGHT_PAREN:
        return True
    return tok.type == TokenType.PUNCTUATION and (tok.value == ";" or tok.value == ",")


class ExpressionParsingMixin:
    """Mixin for expression, dotted-name and call parsing.

    Required Host Attributes:
        - _current: Token | None
        - _config: AnalysisConfig
        - _call_depth: int

    """

    _current: Token | None
    _config: AnalysisConfig
    _call_depth: int

    def _advance(self) -> Token | None:
        """Advance to next token. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek ahead. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _check(self, token_type: TokenType, value: str | None = None) -> bool:
        """Check current token. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _check_punct(self, value: str) -> bool:
        """Check current punctuation. Implemented by TokenNavigationMixin."""
        raise NotImplementedError

    def _parse_expression(self) -> ScriptExpr | None:
        """Parse an expression starting at the current token.

        Returns:
            A single Identifier for a lone name or literal, a Call or
            flattened Identifier for dotted names, an Expression for
            operand/operator sequences, or None when nothing was parsed.
        """
        tok = self._current
        if tok is None or tok.type == TokenType.EOF:
            return None

        if tok.type == TokenType.KEYWORD and tok.value == "new":
            self._advance()
            return self._parse_method_call()

        nxt = self._peek()
        if tok.type == TokenType.IDENTIFIER:
            if nxt is not None and (nxt.is_punct(".") or nxt.type == TokenType.LEFT_PAREN):
                return self._parse_method_call()
            if is_terminator(nxt):
                self._advance()
                return Identifier(location=tok.location, name=tok.value)
        elif tok.type in LITERAL_TYPES and is_terminator(nxt):
            self._advance()
            return Identifier(location=tok.location, name=tok.value)

        return self._parse_flat_expression(tok)

    def _parse_flat_expression(self, start: Token) -> ScriptExpr | None:
        """Accumulate operands and operators until a terminator.

        Bounded by ``max_expression_tokens`` iterations. Braces, the end of
        the script region and end of input stop the expression without
        being consumed; any other unrecognized token is consumed and stops
        it.
        """
        operands: list[ScriptExpr] = []
        operators: list[str] = []

        for _ in range(self._config.max_expression_tokens):
            tok = self._current
            if tok is None or tok.type in _EXPRESSION_STOP or is_terminator(tok):
                break

            if tok.type == TokenType.OPERATOR:
                if tok.value in ASSIGNMENT_OPERATORS:
                    break
                operators.append(tok.value)
                self._advance()
            elif tok.type == TokenType.IDENTIFIER:
                nxt = self._peek()
                if nxt is not None and (nxt.is_punct(".") or nxt.type == TokenType.LEFT_PAREN):
                    call = self._parse_method_call()
                    if call is not None:
                        operands.append(call)
                else:
                    operands.append(Identifier(location=tok.location, name=tok.value))
                    self._advance()
            elif tok.type in LITERAL_TYPES:
                operands.append(Identifier(location=tok.location, name=tok.value))
                self._advance()
            else:
                self._advance()
                break
        else:
            logger.debug(
                "expression at %s stopped after %d tokens",
                start.location,
                self._config.max_expression_tokens,
            )

        if len(operands) == 1 and not operators:
            return operands[0]
        if not operands:
            return None
        return Expression(
            location=start.location,
            operands=tuple(operands),
            operators=tuple(operators),
        )

    def _parse_dotted_name(self, *, first_word: bool = False) -> list[str]:
        """Consume ``name(.name)*`` and return the names.

        Args:
            first_word: Accept any word token (keywords included) as the first
                name, as after a property-access dot. Otherwise the first name
                must be an identifier.
        """
        names: list[str] = []
        tok = self._current
        if tok is None:
            return names
        if tok.type == TokenType.IDENTIFIER or (first_word and tok.type in WORD_TYPES):
            names.append(tok.value)
            self._advance()
        else:
            return names

        while self._check_punct("."):
            nxt = self._peek()
            if nxt is None or nxt.type not in WORD_TYPES:
                break
            self._advance()
            names.append(nxt.value)
            self._advance()
        return names

    def _parse_method_call(self) -> ScriptExpr | None:
        """Parse a dotted name, an optional argument list and any trailing chain.

        ``document.getElementById("x")`` yields a Call. A bare dotted name
        yields an Identifier. Anything chained after a call with ``.``
        collapses everything into one dotted Identifier; arguments of the
        chained calls are dropped.
        """
        first = self._current
        if first is None:
            return None
        names = self._parse_dotted_name()
        if not names:
            return None

        callee = Identifier(location=first.location, name=".".join(names))
        result: ScriptExpr = callee
        if self._check(TokenType.LEFT_PAREN):
            result = Call(location=first.location, callee=callee, arguments=self._parse_arguments())

        chained: list[str] = []
        while self._check_punct("."):
            self._advance()
            more = self._parse_dotted_name(first_word=True)
            if not more:
                break
            chained.extend(more)
            if self._check(TokenType.LEFT_PAREN):
                self._parse_arguments()

        if chained:
            return Identifier(location=first.location, name=".".join([callee.name, *chained]))
        return result

    def _parse_arguments(self) -> tuple[ScriptExpr, ...]:
        """Parse ``( expr, expr, ... )`` starting at the opening parenthesis.

        Stops early at braces, the end of the script region or end of input.
        """
        self._advance()  # (
        if self._call_depth >= MAX_CALL_DEPTH:
            self._skip_parenthesized()
            return ()

        self._call_depth += 1
        args: list[ScriptExpr] = []
        try:
            while True:
                tok = self._current
                if tok is None or tok.type in _EXPRESSION_STOP or tok.type == TokenType.RIGHT_PAREN:
                    break
                arg = self._parse_expression()
                if arg is not None:
                    args.append(arg)

                tok = self._current
                if tok is None or tok.type in _EXPRESSION_STOP or tok.type == TokenType.RIGHT_PAREN:
                    break
                # Skip the comma or whatever stopped the argument
                self._advance()
        finally:
            self._call_depth -= 1

        if self._check(TokenType.RIGHT_PAREN):
            self._advance()
        return tuple(args)

    def _skip_parenthesized(self) -> None:
        """Skip to just past the parenthesis matching one already consumed."""
        depth = 1
        while depth:
            tok = self._current
            if tok is None or tok.type in _EXPRESSION_STOP:
                return
            if tok.type == TokenType.LEFT_PAREN:
                depth += 1
            elif tok.type == TokenType.RIGHT_PAREN:
                depth -= 1
            self._advance()
