"""Tests for the assignment and data-flow passes."""

import logging

import pytest

from markscript import analyze, parse
from markscript.diagnostics import Category, DiagnosticCollector
from markscript.location import SourceLocation
from markscript.nodes import Assignment, Call, Document, Identifier, Script, Tag
from markscript.validators import AssignmentValidator
from markscript.validators.assignments import LiteralKind, chain_targets, infer_kind
from markscript.validators.data_output import extract_lookup_id

DATA_CATEGORIES = (Category.DATA_INPUT, Category.DATA_OUTPUT)


def page(code: str) -> str:
    """A document with ids ``out`` and ``name``; script code starts on line 6."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head></head>\n"
        '<body><div id="out"></div><input id="name">\n'
        "<script>\n"
        + code
        + "\n</script>\n</body>\n</html>\n"
    )


def messages(code: str, *categories: Category) -> list[tuple[int, str]]:
    result = analyze(page(code))
    return [(d.line, d.description) for d in result.diagnostics if d.category in categories]


def at(line: int) -> SourceLocation:
    return SourceLocation(line, 1)


class TestAssignmentOperators:
    """Only = += -= *= /= %= are accepted."""

    @pytest.mark.parametrize("op", ["=", "+=", "-=", "*=", "/=", "%="])
    def test_accepted(self, op: str) -> None:
        assert messages(f"x {op} 2;", Category.ASSIGNMENT) == []

    @pytest.mark.parametrize("op", ["&=", "|=", "^=", "**="])
    def test_rejected(self, op: str) -> None:
        assert messages(f"x {op} 2;", Category.ASSIGNMENT) == [
            (6, f"Invalid assignment operator: {op}")
        ]

    def test_inside_function_body(self) -> None:
        code = "function f() {\n  x |= 1;\n}"
        assert messages(code, Category.ASSIGNMENT) == [(7, "Invalid assignment operator: |=")]

    def test_plain_chain(self) -> None:
        assert messages("a = b = c = 1;", Category.ASSIGNMENT) == []

    def test_chain_link_reported_once(self) -> None:
        assert messages("a = b &= 1;", Category.ASSIGNMENT) == [
            (6, "Invalid assignment operator: &=")
        ]

    def test_every_bad_link_reported(self) -> None:
        assert messages("a ^= b = c |= 1;", Category.ASSIGNMENT) == [
            (6, "Invalid assignment operator: ^="),
            (6, "Invalid assignment operator: |="),
        ]

    def test_validator_reusable(self) -> None:
        doc = parse(page("a = b &= 1;")).document
        validator = AssignmentValidator()
        first, second = DiagnosticCollector(), DiagnosticCollector()
        validator.validate(doc, first)
        validator.validate(doc, second)
        assert first.count == second.count == 1


class TestKindInference:
    """Literal kinds compared on simple assignments."""

    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ('"a"', LiteralKind.STRING),
            ("'a'", LiteralKind.STRING),
            ("42", LiteralKind.NUMBER),
            ("3.5e2", LiteralKind.NUMBER),
            ("true", LiteralKind.BOOLEAN),
            ("false", LiteralKind.BOOLEAN),
            ("null", LiteralKind.NULL),
            ("total", LiteralKind.UNKNOWN),
        ],
    )
    def test_identifier_kinds(self, text: str, kind: LiteralKind) -> None:
        assert infer_kind(Identifier(location=at(1), name=text)) is kind

    def test_non_identifier_is_unknown(self) -> None:
        call = Call(location=at(1), callee=Identifier(location=at(1), name="f"))
        assert infer_kind(call) is LiteralKind.UNKNOWN
        assert infer_kind(None) is LiteralKind.UNKNOWN

    def test_mismatch_logged_not_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        node = Assignment(
            location=at(2),
            target=Identifier(location=at(2), name="1"),
            operator="=",
            value=Identifier(location=at(2), name='"s"'),
        )
        script = Script(location=at(1), statements=(node,))
        doc = Document(location=at(1), children=(Tag(location=at(1), name="body", children=(script,)),))
        collector = DiagnosticCollector()
        with caplog.at_level(logging.DEBUG, logger="markscript"):
            AssignmentValidator().validate(doc, collector)
        assert collector.count == 0
        assert "Kind mismatch at line 2" in caplog.text

    def test_chain_targets(self) -> None:
        (stmt,) = parse("<body><script>a = b = c = 1;</script></body>").document.children[0].children[0].statements
        assert chain_targets(stmt) == ["a", "b", "c"]


class TestDataInput:
    """getElementById lookups."""

    def test_known_id(self) -> None:
        assert messages('let v = document.getElementById("name");', *DATA_CATEGORIES) == []

    def test_unknown_id(self) -> None:
        assert messages('let v = document.getElementById("missing");', *DATA_CATEGORIES) == [
            (6, "getElementById references non-existent element ID: 'missing'")
        ]

    def test_single_quotes(self) -> None:
        assert messages("let v = document.getElementById('gone');", *DATA_CATEGORIES) == [
            (6, "getElementById references non-existent element ID: 'gone'")
        ]

    def test_non_literal_argument_ignored(self) -> None:
        assert messages("let v = document.getElementById(key);", *DATA_CATEGORIES) == []

    def test_lookup_inside_expression(self) -> None:
        code = 'let s = "a" + document.getElementById("nope");'
        assert messages(code, *DATA_CATEGORIES) == [
            (6, "getElementById references non-existent element ID: 'nope'")
        ]

    def test_lookup_as_call_argument(self) -> None:
        code = 'alert(\n  document.getElementById("nope"));'
        assert messages(code, *DATA_CATEGORIES) == [
            (7, "getElementById references non-existent element ID: 'nope'")
        ]

    def test_chained_lookup_not_checked(self) -> None:
        """Arguments of a flattened chain are not kept, so nothing is checked."""
        code = 'let v = document.getElementById("nope").value;'
        assert messages(code, *DATA_CATEGORIES) == []

    def test_inside_function(self) -> None:
        code = 'function f() {\n  let v = document.getElementById("x");\n}'
        assert messages(code, *DATA_CATEGORIES) == [
            (7, "getElementById references non-existent element ID: 'x'")
        ]


class TestDataOutput:
    """innerHTML writes."""

    def test_known_id(self) -> None:
        code = 'document.getElementById("out").innerHTML = "hi";'
        assert messages(code, *DATA_CATEGORIES) == []

    def test_unknown_id(self) -> None:
        code = 'document.getElementById("nope").innerHTML = "hi";'
        assert messages(code, *DATA_CATEGORIES) == [
            (6, "innerHTML assignment references non-existent element ID: 'nope'")
        ]

    def test_compound_write(self) -> None:
        code = "document.getElementById('nope').innerHTML += x;"
        assert messages(code, *DATA_CATEGORIES) == [
            (6, "innerHTML assignment references non-existent element ID: 'nope'")
        ]

    def test_variable_target_ignored(self) -> None:
        assert messages('el.innerHTML = "x";', *DATA_CATEGORIES) == []

    def test_other_property_ignored(self) -> None:
        code = 'document.getElementById("nope").value = "x";'
        assert messages(code, *DATA_CATEGORIES) == []

    @pytest.mark.parametrize("lookup", ["x", "y"])
    def test_document_level_script_not_analyzed(self, lookup: str) -> None:
        source = (
            '<div id="x"></div><script>'
            f'document.getElementById("{lookup}").innerHTML = "hi";</script>'
        )
        result = analyze(source)
        assert [d for d in result.diagnostics if d.category is Category.DATA_OUTPUT] == []

    @pytest.mark.parametrize(("lookup", "expected"), [("x", 0), ("y", 1)])
    def test_same_snippet_inside_body(self, lookup: str, expected: int) -> None:
        source = (
            '<body><div id="x"></div><script>'
            f'document.getElementById("{lookup}").innerHTML = "hi";</script></body>'
        )
        found = [d for d in analyze(source).diagnostics if d.category is Category.DATA_OUTPUT]
        assert len(found) == expected
        assert all(f"'{lookup}'" in d.description for d in found)

    def test_inside_function(self) -> None:
        code = 'function show() {\n  document.getElementById("gone").innerHTML = "x";\n}'
        assert messages(code, *DATA_CATEGORIES) == [
            (7, "innerHTML assignment references non-existent element ID: 'gone'")
        ]

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            ('document.getElementById("a").innerHTML', '"a"'),
            ("document.getElementById('a').innerHTML", "'a'"),
            ("document.getElementById(key).innerHTML", None),
            ('document.getElementById("a', None),
            ("el.innerHTML", None),
        ],
    )
    def test_extract_lookup_id(self, target: str, expected: str | None) -> None:
        assert extract_lookup_id(target) == expected

    def test_duplicate_ids_are_known(self) -> None:
        source = page('document.getElementById("out").innerHTML = "x";').replace(
            "<head></head>", '<head></head><p id="out"></p>'
        )
        result = analyze(source)
        assert result.element_ids.count("out") == 2
        assert result.collector.by_category(Category.DATA_OUTPUT) == []
