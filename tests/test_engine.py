"""Tests for the analysis pipeline."""

from hypothesis import given, settings
from hypothesis import strategies as st

from markscript import AnalysisConfig, Analyzer, analyze, parse, validate
from markscript.config import get_analysis_config
from markscript.diagnostics import Category, DiagnosticCollector
from markscript.validators import Validator, default_validators

CLEAN = """<!DOCTYPE html>
<html>
<head><title>Calc</title></head>
<body>
<input id="a"><div id="out"></div>
<script>
const RATE = 2;
function double(x) {
  let y = x * RATE;
  return y;
}
document.getElementById("out").innerHTML = double(3);
</script>
</body>
</html>
"""

BROKEN = """<html>
<body>
<script>
let a = 1;
const B;
x &= 2;
function class() {}
let v = document.getElementById("nope");
</script>
</body>
</html>
"""

_SNIPPETS = st.lists(
    st.sampled_from(
        [
            "let", "const", "var", "function", "x", "=", "==", "+=", "&=", "(", ")",
            "{", "}", ";", ",", ".", '"s"', "'t'", "1", "2.5", "//c\n", "/*c*/", "\n",
            "new", "document", "getElementById", "innerHTML", "if", "return",
        ]
    ),
    max_size=40,
).map(" ".join)


class TestAnalyze:
    """End-to-end analysis."""

    def test_clean_document(self) -> None:
        result = analyze(CLEAN)
        assert result.ok
        assert result.diagnostics == ()
        assert result.element_ids == ("a", "out")

    def test_broken_document(self) -> None:
        result = analyze(BROKEN)
        assert not result.ok
        categories = {d.category for d in result.diagnostics}
        assert categories == {
            Category.IDENTIFIER,
            Category.CONSTANT,
            Category.ASSIGNMENT,
            Category.FUNCTION,
            Category.DATA_INPUT,
            Category.HTML_STRUCTURE,
        }

    def test_numbering_follows_pass_order(self) -> None:
        result = analyze(BROKEN)
        assert [d.number for d in result.diagnostics] == list(
            range(1, len(result.diagnostics) + 1)
        )
        order = [
            Category.IDENTIFIER,
            Category.CONSTANT,
            Category.ASSIGNMENT,
            Category.FUNCTION,
            Category.DATA_INPUT,
            Category.HTML_STRUCTURE,
        ]
        seen = [d.category for d in result.diagnostics]
        assert sorted(seen, key=order.index) == seen

    def test_sorted_by_line_keeps_numbers(self) -> None:
        result = analyze(BROKEN)
        ordered = result.collector.sorted_by_line()
        assert [d.line for d in ordered] == sorted(d.line for d in ordered)
        assert ordered[0].line == 1
        assert {d.number for d in ordered} == {d.number for d in result.diagnostics}

    def test_deterministic(self) -> None:
        assert analyze(BROKEN).diagnostics == analyze(BROKEN).diagnostics

    def test_source_file_recorded(self) -> None:
        result = analyze(CLEAN, source_file="calc.html")
        assert result.document.children[0].location.source_file == "calc.html"

    @settings(max_examples=200)
    @given(_SNIPPETS)
    def test_never_raises_on_script_soup(self, code: str) -> None:
        result = analyze(f"<!DOCTYPE html><html><head></head><body><script>{code}</script></body></html>")
        assert [d.number for d in result.diagnostics] == list(
            range(1, len(result.diagnostics) + 1)
        )

    @given(st.text(max_size=200))
    def test_never_raises_on_arbitrary_text(self, source: str) -> None:
        analyze(source)


class TestValidate:
    """Running the passes over an existing parse."""

    def test_matches_analyze(self) -> None:
        parsed = parse(BROKEN)
        collector = validate(parsed.document, parsed.element_ids)
        assert collector.diagnostics == analyze(BROKEN).diagnostics

    def test_appends_to_existing_collector(self) -> None:
        parsed = parse(BROKEN)
        collector = DiagnosticCollector()
        collector.add(1, "earlier")
        returned = validate(parsed.document, parsed.element_ids, collector)
        assert returned is collector
        assert collector.diagnostics[0].description == "earlier"
        assert collector.diagnostics[1].number == 2

    def test_empty_collector_is_used(self) -> None:
        parsed = parse(CLEAN)
        collector = DiagnosticCollector()
        assert validate(parsed.document, parsed.element_ids, collector) is collector

    def test_default_validators(self) -> None:
        validators = default_validators(["x"])
        assert [v.name for v in validators] == [
            "identifiers",
            "constants",
            "assignments",
            "functions",
            "data-input",
            "data-output",
            "doctype",
            "skeleton",
        ]
        assert all(isinstance(v, Validator) for v in validators)


class TestAnalyzer:
    """Analyzer bound to a configuration."""

    def test_default_config(self) -> None:
        assert Analyzer().config == AnalysisConfig()

    def test_config_applies_only_during_call(self) -> None:
        source = "\n\n<!DOCTYPE html><html><head></head><body></body></html>"
        strict = Analyzer(AnalysisConfig(doctype_max_line=1))
        assert [d.line for d in strict(source).diagnostics] == [3]
        assert analyze(source).ok
        assert get_analysis_config() == AnalysisConfig()

    def test_source_file(self) -> None:
        result = Analyzer()(CLEAN, source_file="x.html")
        assert result.document.location.source_file == "x.html"
