"""Tests for ContextVar-based analysis configuration.

Validates thread isolation, context manager behavior and the effect of
configuration on the parser and passes.
"""

from threading import Thread

import pytest

from markscript import (
    AnalysisConfig,
    Analyzer,
    analysis_config_context,
    analyze,
    get_analysis_config,
    parse,
    reset_analysis_config,
    set_analysis_config,
)
from markscript.config import DEFAULT_EXPRESSION_KEYWORDS, HTML_VOID_ELEMENTS


class TestAnalysisConfigDataclass:
    """AnalysisConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = AnalysisConfig()
        assert config.doctype_max_line == 3
        assert config.max_expression_tokens == 1000
        assert config.expression_keywords == DEFAULT_EXPRESSION_KEYWORDS
        assert config.void_elements == frozenset()
        assert config.source_extension == ".html"
        assert config.report_extension == ".txt"

    def test_immutability(self) -> None:
        config = AnalysisConfig()
        with pytest.raises(AttributeError):
            config.doctype_max_line = 1  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = AnalysisConfig.from_dict({"doctype_max_line": 1, "color": "red"})
        assert config.doctype_max_line == 1
        assert config.max_expression_tokens == 1000

    def test_from_dict_normalizes_sets(self) -> None:
        config = AnalysisConfig.from_dict({"void_elements": ["BR", "img"]})
        assert config.void_elements == frozenset({"br", "img"})

    def test_from_empty_dict(self) -> None:
        assert AnalysisConfig.from_dict({}) == AnalysisConfig()


class TestContextVarFunctions:
    """get/set/reset functions."""

    def test_default(self) -> None:
        reset_analysis_config()
        assert get_analysis_config() == AnalysisConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_analysis_config(AnalysisConfig(doctype_max_line=9))
            assert get_analysis_config().doctype_max_line == 9
        finally:
            reset_analysis_config()
        assert get_analysis_config().doctype_max_line == 3

    def test_context_restores(self) -> None:
        with analysis_config_context(AnalysisConfig(doctype_max_line=7)):
            assert get_analysis_config().doctype_max_line == 7
        assert get_analysis_config().doctype_max_line == 3

    def test_context_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with analysis_config_context(AnalysisConfig(doctype_max_line=7)):
                raise RuntimeError("boom")
        assert get_analysis_config().doctype_max_line == 3

    def test_nested_contexts(self) -> None:
        with analysis_config_context(AnalysisConfig(doctype_max_line=5)):
            with analysis_config_context(AnalysisConfig(doctype_max_line=6)):
                assert get_analysis_config().doctype_max_line == 6
            assert get_analysis_config().doctype_max_line == 5


class TestThreadIsolation:
    """Each thread sees its own configuration."""

    def test_threads_do_not_share_config(self) -> None:
        results: dict[int, int] = {}

        def worker(limit: int) -> None:
            with analysis_config_context(AnalysisConfig(doctype_max_line=limit)):
                results[limit] = get_analysis_config().doctype_max_line

        threads = [Thread(target=worker, args=(n,)) for n in range(1, 6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == {n: n for n in range(1, 6)}
        assert get_analysis_config().doctype_max_line == 3

    def test_analyzer_from_threads(self) -> None:
        source = "\n\n<!DOCTYPE html><html><head></head><body></body></html>"
        strict = Analyzer(AnalysisConfig(doctype_max_line=1))
        lenient = Analyzer()
        outcomes: dict[str, bool] = {}

        def run(name: str, analyzer: Analyzer) -> None:
            outcomes[name] = analyzer(source).ok

        threads = [
            Thread(target=run, args=("strict", strict)),
            Thread(target=run, args=("lenient", lenient)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert outcomes == {"strict": False, "lenient": True}


class TestConfigEffects:
    """Configuration read by the parser and passes."""

    def test_void_elements_opt_in(self) -> None:
        assert "input" in HTML_VOID_ELEMENTS
        with analysis_config_context(AnalysisConfig(void_elements=HTML_VOID_ELEMENTS)):
            result = parse("<div><br><p></p></div>")
        assert [child.name for child in result.document.children[0].child_tags] == ["br", "p"]

    def test_void_elements_skeleton(self) -> None:
        source = "<!DOCTYPE html>\n<html><br><head></head><body></body></html>"
        assert [d.description.split(".")[0] for d in analyze(source).diagnostics] == [
            "Missing <head> tag",
            "Missing <body> tag",
        ]
        with analysis_config_context(AnalysisConfig(void_elements=HTML_VOID_ELEMENTS)):
            assert analyze(source).ok

    def test_doctype_limit(self) -> None:
        source = "\n\n\n\n<!DOCTYPE html><html><head></head><body></body></html>"
        assert not analyze(source).ok
        with analysis_config_context(AnalysisConfig(doctype_max_line=5)):
            assert analyze(source).ok
