"""Identifier naming rules shared by the naming, constant and function passes."""

from __future__ import annotations

from markscript.lexer.modes import RESERVED_WORD_SET
from markscript.utils.text import is_identifier_part, is_identifier_start

# Characters called out individually by the naming pass
SPECIAL_CHARACTERS = "-+*/"


def is_reserved(name: str) -> bool:
    """Whether ``name`` is a JavaScript reserved word."""
    return name in RESERVED_WORD_SET


def is_valid_identifier(name: str) -> bool:
    """Whether ``name`` is a well-formed identifier.

    Must start with a letter, underscore or Unicode identifier-start
    character, and continue with letters, digits, underscores or Unicode
    identifier-continue characters. Reserved words are checked separately.

    >>> is_valid_identifier("total_2")
    True
    >>> is_valid_identifier("2total")
    False
    """
    if not name or not is_identifier_start(name[0]):
        return False
    return all(is_identifier_part(ch) for ch in name[1:])


def first_invalid_character(name: str) -> str | None:
    """First character after the first one that cannot continue an identifier."""
    for ch in name[1:]:
        if not is_identifier_part(ch):
            return ch
    return None


def first_special_character(name: str) -> str | None:
    """First of ``- + * /`` (in that order) present anywhere in ``name``."""
    for ch in SPECIAL_CHARACTERS:
        if ch in name:
            return ch
    return None
