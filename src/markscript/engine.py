"""Analysis pipeline: tokenize, parse, then run every rule pass.

Example:
    >>> result = analyze("<html><head></head><body></body></html>")
    >>> [d.format() for d in result.diagnostics]
    ['Error 1: Missing DOCTYPE declaration. Must be <!DOCTYPE html> at the beginning at line 1']

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from markscript.config import AnalysisConfig, analysis_config_context
from markscript.diagnostics import Diagnostic, DiagnosticCollector
from markscript.nodes import Document
from markscript.parser import Parser
from markscript.utils.logger import get_logger
from markscript.validators import default_validators, run_validators

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything one analysis run produced.

    Attributes:
        document: Root of the AST
        element_ids: Identifier registry, in encounter order
        diagnostics: Diagnostics in insertion order
        collector: The collector the passes reported to

    """

    document: Document
    element_ids: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    collector: DiagnosticCollector

    @property
    def ok(self) -> bool:
        """Whether no diagnostic was reported."""
        return not self.diagnostics


def validate(
    document: Document,
    element_ids: Iterable[str],
    collector: DiagnosticCollector | None = None,
) -> DiagnosticCollector:
    """Run all eight passes over ``document``.

    Args:
        document: Parsed document
        element_ids: Identifier registry from the parser
        collector: Collector to append to (a fresh one when None)

    Returns:
        The collector holding the diagnostics.

    """
    if collector is None:
        collector = DiagnosticCollector()
    run_validators(document, collector, default_validators(element_ids))
    return collector


def analyze(source: str, source_file: str | None = None) -> AnalysisResult:
    """Tokenize, parse and validate ``source``.

    Never raises for malformed documents; problems become diagnostics.

    Args:
        source: Document text
        source_file: Optional path recorded in node locations

    """
    parser = Parser(source, source_file=source_file)
    document = parser.parse()
    element_ids = parser.element_ids
    logger.debug(
        "Parsed %s: %d top-level tag(s), %d element id(s)",
        source_file or "<string>",
        len(document.children),
        len(element_ids),
    )
    collector = validate(document, element_ids)
    return AnalysisResult(
        document=document,
        element_ids=element_ids,
        diagnostics=collector.diagnostics,
        collector=collector,
    )


class Analyzer:
    """Reusable analyzer bound to one configuration.

    Usage:
        >>> analyzer = Analyzer(AnalysisConfig(doctype_max_line=1))
        >>> result = analyzer("<html></html>")
        >>> result.ok
        False

    Thread Safety:
        The configuration is installed via ContextVar for the duration of
        each call. Safe to use one instance from several threads.

    """

    __slots__ = ("_config",)

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self._config = config or AnalysisConfig()

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def __call__(self, source: str, source_file: str | None = None) -> AnalysisResult:
        with analysis_config_context(self._config):
            return analyze(source, source_file=source_file)
