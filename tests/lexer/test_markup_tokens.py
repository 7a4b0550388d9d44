"""Tests for markup-mode token recognition."""

import pytest

from markscript.lexer import Lexer
from markscript.tokens import TokenType


def markup_tokens(source: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.value) for t in Lexer(source).tokenize()[:-1]]


class TestTags:
    """Opening and closing tags."""

    def test_opening_and_closing(self) -> None:
        assert markup_tokens("<div></div >") == [
            (TokenType.TAG_OPEN, "<div>"),
            (TokenType.TAG_CLOSE, "</div >"),
        ]

    def test_attributes_stay_in_tag(self) -> None:
        assert markup_tokens('<a href="/x" class=\'c\'>') == [
            (TokenType.TAG_OPEN, '<a href="/x" class=\'c\'>'),
        ]

    def test_quoted_angle_bracket(self) -> None:
        """A ``>`` inside a quoted attribute value does not end the tag."""
        assert markup_tokens('<a title="x>y">t</a>') == [
            (TokenType.TAG_OPEN, '<a title="x>y">'),
            (TokenType.TEXT, "t"),
            (TokenType.TAG_CLOSE, "</a>"),
        ]

    def test_self_closing(self) -> None:
        assert markup_tokens("<br/><img src='a.png' />") == [
            (TokenType.TAG_OPEN, "<br/>"),
            (TokenType.TAG_OPEN, "<img src='a.png' />"),
        ]


class TestDeclarations:
    """Doctype and comments."""

    @pytest.mark.parametrize("doctype", ["<!DOCTYPE html>", "<!doctype html>", "<!DocType html>"])
    def test_doctype_any_case(self, doctype: str) -> None:
        assert markup_tokens(doctype) == [(TokenType.DOCTYPE, doctype)]

    def test_comment(self) -> None:
        assert markup_tokens("<!-- a > b --><p>") == [
            (TokenType.COMMENT, "<!-- a > b -->"),
            (TokenType.TAG_OPEN, "<p>"),
        ]

    def test_empty_comment(self) -> None:
        assert markup_tokens("<!---->x") == [
            (TokenType.COMMENT, "<!---->"),
            (TokenType.TEXT, "x"),
        ]


class TestText:
    """Text between tags."""

    def test_text_is_trimmed(self) -> None:
        assert markup_tokens("<p>  a b  </p>") == [
            (TokenType.TAG_OPEN, "<p>"),
            (TokenType.TEXT, "a b"),
            (TokenType.TAG_CLOSE, "</p>"),
        ]

    def test_whitespace_only_text_is_dropped(self) -> None:
        assert markup_tokens("<p> \n\t </p>") == [
            (TokenType.TAG_OPEN, "<p>"),
            (TokenType.TAG_CLOSE, "</p>"),
        ]

    def test_plain_text_document(self) -> None:
        assert markup_tokens("hello world") == [(TokenType.TEXT, "hello world")]

    def test_multiline_text_is_one_token(self) -> None:
        assert markup_tokens("<p>one\ntwo</p>")[1] == (TokenType.TEXT, "one\ntwo")


class TestModeSwitching:
    """Transitions between markup and script mode."""

    def test_script_region(self) -> None:
        types = [t for t, _ in markup_tokens("<script>let a;</script><p>x</p>")]
        assert types == [
            TokenType.SCRIPT_OPEN,
            TokenType.KEYWORD,
            TokenType.IDENTIFIER,
            TokenType.PUNCTUATION,
            TokenType.SCRIPT_CLOSE,
            TokenType.TAG_OPEN,
            TokenType.TEXT,
            TokenType.TAG_CLOSE,
        ]

    def test_script_with_attributes(self) -> None:
        tokens = markup_tokens('<script type="module">x</script>')
        assert tokens[0] == (TokenType.SCRIPT_OPEN, '<script type="module">')
        assert tokens[1] == (TokenType.IDENTIFIER, "x")

    @pytest.mark.parametrize("close", ["</script>", "</SCRIPT>", "</script >", "</script\n>"])
    def test_closing_tag_variants(self, close: str) -> None:
        tokens = markup_tokens(f"<Script>x{close}")
        assert tokens[0][0] == TokenType.SCRIPT_OPEN
        assert tokens[-1] == (TokenType.SCRIPT_CLOSE, close)

    def test_similar_tag_names_stay_markup(self) -> None:
        """``<scripts>`` is an ordinary tag."""
        assert markup_tokens("<scripts>x</scripts>") == [
            (TokenType.TAG_OPEN, "<scripts>"),
            (TokenType.TEXT, "x"),
            (TokenType.TAG_CLOSE, "</scripts>"),
        ]

    def test_less_than_inside_script(self) -> None:
        """``<`` not starting ``</script>`` is an operator."""
        tokens = markup_tokens("<script>a < b</script>")
        assert tokens[2] == (TokenType.OPERATOR, "<")
        assert tokens[-1][0] == TokenType.SCRIPT_CLOSE

    def test_mode_after_tokenize(self) -> None:
        lexer = Lexer("<script>let a")
        lexer.tokenize()
        assert lexer.mode.name == "SCRIPT"


class TestUnterminatedConstructs:
    """Unterminated constructs run to end of input without raising."""

    def test_unterminated_tag(self) -> None:
        assert markup_tokens("<div class='a") == [(TokenType.TAG_OPEN, "<div class='a")]

    def test_unterminated_comment(self) -> None:
        assert markup_tokens("<!-- never closed <p>") == [
            (TokenType.COMMENT, "<!-- never closed <p>"),
        ]

    def test_unterminated_doctype(self) -> None:
        assert markup_tokens("<!DOCTYPE html") == [(TokenType.DOCTYPE, "<!DOCTYPE html")]

    def test_unterminated_script(self) -> None:
        assert markup_tokens("<script>let a") == [
            (TokenType.SCRIPT_OPEN, "<script>"),
            (TokenType.KEYWORD, "let"),
            (TokenType.IDENTIFIER, "a"),
        ]

    def test_unterminated_block_comment(self) -> None:
        assert markup_tokens("<script>/* open</script>") == [
            (TokenType.SCRIPT_OPEN, "<script>"),
            (TokenType.COMMENT, "/* open</script>"),
        ]

    def test_unterminated_string_at_end(self) -> None:
        assert markup_tokens("<script>'abc") == [
            (TokenType.SCRIPT_OPEN, "<script>"),
            (TokenType.STRING, "'abc"),
        ]
