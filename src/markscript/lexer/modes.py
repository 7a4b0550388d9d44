"""Lexer operating modes and constants.

This module defines the finite state machine modes for the lexer
and the fixed character and word tables used by the script scanner.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes at script region boundaries:
    - MARKUP: Outside any script element, scanning tags and text
    - SCRIPT: Between ``<script ...>`` and ``</script>``

    """

    MARKUP = auto()
    SCRIPT = auto()


# JavaScript reserved words, in the order the naming rules list them
RESERVED_WORDS: tuple[str, ...] = (
    "let",
    "var",
    "const",
    "function",
    "if",
    "else",
    "for",
    "while",
    "do",
    "switch",
    "case",
    "break",
    "continue",
    "return",
    "try",
    "catch",
    "finally",
    "throw",
    "new",
    "this",
    "typeof",
    "instanceof",
    "true",
    "false",
    "null",
    "undefined",
    "void",
    "delete",
    "in",
    "of",
    "class",
    "extends",
    "super",
    "static",
    "async",
    "await",
    "yield",
    "import",
    "export",
    "default",
    "from",
    "as",
    "with",
    "debugger",
)

RESERVED_WORD_SET = frozenset(RESERVED_WORDS)

# Literal words lex as BOOLEAN / NULL rather than KEYWORD
BOOLEAN_WORDS = frozenset({"true", "false"})
NULL_WORD = "null"

KEYWORDS = RESERVED_WORD_SET - BOOLEAN_WORDS - {NULL_WORD}

# Greedy operator tables, longest first
THREE_CHAR_OPERATORS = frozenset({"===", "!==", "**="})
TWO_CHAR_OPERATORS = frozenset(
    {
        "==",
        "!=",
        "<=",
        ">=",
        "++",
        "--",
        "+=",
        "-=",
        "*=",
        "/=",
        "%=",
        "&=",
        "|=",
        "^=",
        "&&",
        "||",
        "**",
    }
)
OPERATOR_CHARS = frozenset("+-*/=!<>&|%^")

# Script-mode whitespace skipped between tokens ("\n" also advances the line)
WHITESPACE_CHARS = frozenset(" \t\r\n")
