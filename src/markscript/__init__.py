"""
markscript: static analysis for HTML documents with embedded JavaScript.

A dual-mode lexer and a mode-switching parser build one typed AST spanning
markup and scripts; eight rule passes walk it and report positioned
diagnostics. Zero runtime dependencies.

Quick Start:
    >>> from markscript import analyze
    >>> result = analyze('<!DOCTYPE html><html><head></head><body>'
    ...                  '<script>const A;</script></body></html>')
    >>> for d in result.diagnostics:
    ...     print(d)
    Error 1: Constant must be assigned a value at declaration at line 1

    >>> # Or step by step
    >>> from markscript import parse, validate
    >>> parsed = parse('<div id="out"></div>')
    >>> parsed.element_ids
    ('out',)
    >>> collector = validate(parsed.document, parsed.element_ids)

Installation:
    pip install markscript

"""

from collections.abc import Iterable

from markscript.config import (
    AnalysisConfig,
    analysis_config_context,
    get_analysis_config,
    reset_analysis_config,
    set_analysis_config,
)
from markscript.diagnostics import Category, Diagnostic, DiagnosticCollector
from markscript.engine import AnalysisResult, Analyzer, analyze
from markscript.engine import validate as _validate
from markscript.errors import MarkscriptError, ReportError, UsageError
from markscript.lexer import Lexer
from markscript.location import SourceLocation
from markscript.nodes import (
    Assignment,
    Attribute,
    Call,
    Const,
    Document,
    Expression,
    Function,
    Identifier,
    Node,
    Script,
    Tag,
    Text,
    Variable,
)
from markscript.parser import ParseResult, Parser
from markscript.report import format_report, report_path_for, write_report
from markscript.serialization import to_dict, to_json
from markscript.tokens import Token, TokenType
from markscript.visitor import BaseVisitor

__version__ = "0.1.0"


def tokenize(source: str, *, source_file: str | None = None) -> list[Token]:
    """Tokenize a document into a flat token list ending with EOF.

    Example:
        >>> [t.type.name for t in tokenize("<p>Hi</p>")]
        ['TAG_OPEN', 'TEXT', 'TAG_CLOSE', 'EOF']
    """
    return Lexer(source, source_file).tokenize()


def parse(source: str, *, source_file: str | None = None) -> ParseResult:
    """Parse a document into its AST and registries.

    Args:
        source: Document text
        source_file: Optional path recorded in node locations

    Returns:
        ParseResult with the Document, the element id registry and the
        declared variable/constant names.
    """
    return Parser(source, source_file=source_file).parse_result()


def validate(
    document: Document,
    element_ids: Iterable[str],
    collector: DiagnosticCollector | None = None,
) -> DiagnosticCollector:
    """Run every rule pass over a parsed document.

    Args:
        document: Parsed document
        element_ids: Identifier registry from ``parse``
        collector: Collector to append to (a fresh one when None)
    """
    return _validate(document, element_ids, collector)


__all__ = [
    # Pipeline
    "tokenize",
    "parse",
    "validate",
    "analyze",
    "Analyzer",
    "AnalysisResult",
    "ParseResult",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",
    # Nodes
    "Node",
    "Document",
    "Tag",
    "Attribute",
    "Text",
    "Script",
    "Variable",
    "Const",
    "Assignment",
    "Function",
    "Call",
    "Identifier",
    "Expression",
    "BaseVisitor",
    # Diagnostics
    "Category",
    "Diagnostic",
    "DiagnosticCollector",
    # Configuration
    "AnalysisConfig",
    "get_analysis_config",
    "set_analysis_config",
    "reset_analysis_config",
    "analysis_config_context",
    # Reporting and serialization
    "format_report",
    "report_path_for",
    "write_report",
    "to_dict",
    "to_json",
    # Errors
    "MarkscriptError",
    "ReportError",
    "UsageError",
    "__version__",
]
