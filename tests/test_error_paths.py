"""Error-path and malformed input tests.

Analysis never raises for malformed documents; these tests pin down the
graceful degradation and the few exceptions that do propagate.
"""

import pytest

from markscript import analyze, parse, tokenize
from markscript.errors import MarkscriptError, ReportError, UsageError
from markscript.tokens import TokenType

# =========================================================================
# Exception types
# =========================================================================


class TestExceptions:
    """Exception construction and hierarchy."""

    def test_report_error(self) -> None:
        err = ReportError("out/page.txt", "cannot write report: denied")
        assert str(err) == "out/page.txt: cannot write report: denied"
        assert err.path == "out/page.txt"
        assert err.message == "cannot write report: denied"

    def test_hierarchy(self) -> None:
        assert isinstance(ReportError("a", "b"), MarkscriptError)
        assert isinstance(UsageError("x"), MarkscriptError)
        assert not isinstance(UsageError("x"), ReportError)


# =========================================================================
# Malformed documents
# =========================================================================


class TestMalformedMarkup:
    """Broken markup degrades to diagnostics, never exceptions."""

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "<",
            "<<<<",
            "</",
            "</>",
            "<!",
            "<!--",
            "<!DOCTYPE",
            '<div id="unterminated>',
            "<div id='a'",
            "text only",
            "</html></body>",
            "<script>",
            "<script>let",
            '<script>"unterminated',
            "<script>/* open",
            "<body><script>function",
            "<body><script>function f(",
            "<body><script>function f() {",
            "<body><script>x = = = ;</script></body>",
            "<body><script>document.getElementById(</script></body>",
            "<body><script>a.b.c.</script></body>",
            "<body><script>new</script></body>",
            "<body><script>))))}}}};;;</script></body>",
        ],
    )
    def test_analyze_does_not_raise(self, source: str) -> None:
        result = analyze(source)
        assert all(d.number == i for i, d in enumerate(result.diagnostics, 1))

    def test_tokenize_ends_with_eof(self) -> None:
        assert tokenize("<script>let x = '")[-1].type == TokenType.EOF

    def test_unclosed_tags_kept_in_tree(self) -> None:
        parser_result = parse("<html><body><div>")
        assert parser_result.document.root is not None
        assert parser_result.document.root.child_tags[0].name == "body"

    def test_nul_and_control_characters(self) -> None:
        analyze("<body>\x00<script>\x01 let a = 1;\x7f</script></body>")
