"""Tests for markscript utility modules."""

import logging

import pytest

from markscript.location import SourceLocation
from markscript.utils.logger import get_logger
from markscript.utils.text import (
    is_identifier_part,
    is_identifier_start,
    is_quoted,
    strip_quotes,
)


class TestIdentifierCharacters:
    """Character classes for script identifiers."""

    @pytest.mark.parametrize("ch", ["a", "Z", "_", "é", "名"])
    def test_start(self, ch: str) -> None:
        assert is_identifier_start(ch)

    @pytest.mark.parametrize("ch", ["1", "$", "-", " ", "."])
    def test_not_start(self, ch: str) -> None:
        assert not is_identifier_start(ch)

    @pytest.mark.parametrize("ch", ["a", "0", "_", "é", "\u0301"])
    def test_part(self, ch: str) -> None:
        assert is_identifier_part(ch)

    @pytest.mark.parametrize("ch", ["$", "-", "+", " ", "."])
    def test_not_part(self, ch: str) -> None:
        assert not is_identifier_part(ch)


class TestQuotes:
    """Quote detection and stripping."""

    def test_is_quoted(self) -> None:
        assert is_quoted('"a"')
        assert is_quoted("'a'")
        assert is_quoted('""')
        assert not is_quoted('"a\'')
        assert not is_quoted('"')
        assert not is_quoted("a")

    def test_strip_quotes(self) -> None:
        assert strip_quotes('"main"') == "main"
        assert strip_quotes("'main'") == "main"
        assert strip_quotes('"main') == '"main'
        assert strip_quotes("plain") == "plain"
        assert strip_quotes("''") == ""


class TestLogger:
    """Logger namespacing."""

    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "markscript.mymodule"

    def test_prefix_not_duplicated(self) -> None:
        assert get_logger("markscript.parser").name == "markscript.parser"
        assert get_logger("markscript").name == "markscript"

    def test_similar_name_prefixed(self) -> None:
        assert get_logger("markscriptx").name == "markscript.markscriptx"

    def test_returns_stdlib_logger(self) -> None:
        assert isinstance(get_logger("x"), logging.Logger)


class TestSourceLocation:
    """Location formatting and shifting."""

    def test_str(self) -> None:
        assert str(SourceLocation(4, 9)) == "4:9"
        assert str(SourceLocation(4, 9, source_file="a.html")) == "a.html:4:9"

    def test_shifted_same_line(self) -> None:
        loc = SourceLocation(2, 5, offset=10).shifted("<p>")
        assert (loc.lineno, loc.col_offset, loc.offset) == (2, 8, 13)

    def test_shifted_across_lines(self) -> None:
        loc = SourceLocation(2, 5, offset=10, source_file="f").shifted("<p\n  ")
        assert (loc.lineno, loc.col_offset, loc.offset) == (3, 3, 15)
        assert loc.source_file == "f"

    def test_unknown(self) -> None:
        assert SourceLocation.unknown() == SourceLocation(0, 0)
