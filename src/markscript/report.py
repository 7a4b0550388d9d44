"""Annotated report writer.

The report repeats every source line prefixed with its 4-digit line number.
Beneath each line come the diagnostics reported at that line, in collector
insertion order, indented by five spaces:

    0001 <html>
         Error 1: Missing DOCTYPE declaration. Must be <!DOCTYPE html> at the beginning at line 1

Diagnostics pointing past the last source line (an empty document still
gets its line 1 diagnostics) are written after the numbered lines.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from markscript.config import get_analysis_config
from markscript.diagnostics import Diagnostic
from markscript.errors import ReportError
from markscript.utils.logger import get_logger

logger = get_logger(__name__)

DIAGNOSTIC_INDENT = " " * 5


def source_lines(source: str) -> list[str]:
    """Split ``source`` the way the lexer counts lines.

    A trailing newline does not start an extra line, and a ``\\r`` before
    ``\\n`` is dropped.
    """
    if not source:
        return []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def format_report(source: str, diagnostics: Iterable[Diagnostic]) -> str:
    """Render the annotated report for ``source``.

    Args:
        source: Analyzed document text
        diagnostics: Diagnostics in collector insertion order

    Returns:
        Report text, one entry per line, ending with a newline.
    """
    by_line: dict[int, list[Diagnostic]] = {}
    for diagnostic in diagnostics:
        by_line.setdefault(diagnostic.line, []).append(diagnostic)

    out: list[str] = []
    lines = source_lines(source)
    for lineno, text in enumerate(lines, start=1):
        out.append(f"{lineno:04d} {text}")
        out.extend(DIAGNOSTIC_INDENT + d.format() for d in by_line.pop(lineno, ()))

    for lineno in sorted(by_line):
        out.extend(DIAGNOSTIC_INDENT + d.format() for d in by_line[lineno])

    return "".join(line + "\n" for line in out)


def report_path_for(source_path: str | Path) -> Path:
    """Report path next to ``source_path``.

    The source extension (``.html`` by default) is replaced by the report
    extension; other paths get the report extension appended.

    >>> report_path_for("pages/index.html").as_posix()
    'pages/index.txt'
    """
    config = get_analysis_config()
    path = Path(source_path)
    if path.name.lower().endswith(config.source_extension):
        stem = path.name[: -len(config.source_extension)]
        return path.with_name(stem + config.report_extension)
    return path.with_name(path.name + config.report_extension)


def read_source(source_path: str | Path) -> str:
    """Read a document, wrapping I/O failures in ReportError."""
    try:
        return Path(source_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportError(str(source_path), f"cannot read source: {e}") from e


def write_report(
    source: str,
    diagnostics: Iterable[Diagnostic],
    report_path: str | Path,
) -> Path:
    """Write the annotated report.

    Args:
        source: Analyzed document text
        diagnostics: Diagnostics in collector insertion order
        report_path: Destination file

    Returns:
        The path written.

    Raises:
        ReportError: If the report cannot be written.
    """
    path = Path(report_path)
    text = format_report(source, diagnostics)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ReportError(str(path), f"cannot write report: {e}") from e
    logger.debug("Wrote report %s (%d bytes)", path, len(text))
    return path
