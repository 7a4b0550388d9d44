"""Character-class and quoting helpers shared by lexer, parser and validators."""

from __future__ import annotations


def is_identifier_start(ch: str) -> bool:
    """Whether ``ch`` may begin a script identifier."""
    return ch == "_" or ch.isalpha() or ch.isidentifier()


def is_identifier_part(ch: str) -> bool:
    """Whether ``ch`` may continue a script identifier."""
    return ch.isalnum() or ("_" + ch).isidentifier()


def is_quoted(value: str) -> bool:
    """Whether ``value`` is wrapped in a matching pair of quotes."""
    return len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]


def strip_quotes(value: str) -> str:
    """Remove one pair of surrounding quotes, if present.

    >>> strip_quotes('"main"')
    'main'
    >>> strip_quotes("plain")
    'plain'
    """
    if is_quoted(value):
        return value[1:-1]
    return value
