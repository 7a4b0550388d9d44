"""Command-line driver.

Usage:
    markscript page.html              analyze one document, write page.txt
    markscript --batch pages/         analyze every document in a directory
    markscript --dump-ast page.html   print the AST as JSON

Exit codes: 0 when analysis ran (diagnostics or not), 1 when a document or
report could not be read or written, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from markscript import __version__
from markscript.config import get_analysis_config
from markscript.engine import AnalysisResult, analyze
from markscript.errors import ReportError, UsageError
from markscript.report import read_source, report_path_for, write_report
from markscript.serialization import to_json
from markscript.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``markscript`` command."""
    parser = argparse.ArgumentParser(
        prog="markscript",
        description="Static analysis of HTML documents with embedded JavaScript.",
    )
    parser.add_argument("path", help="document to analyze, or a directory with --batch")
    parser.add_argument(
        "--batch",
        action="store_true",
        help="analyze every document in the directory PATH",
    )
    parser.add_argument(
        "--dump-ast",
        action="store_true",
        help="print the syntax tree as JSON instead of writing a report",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log progress (-v) or parser and pass details (-vv)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _check_source_path(path: Path) -> None:
    extension = get_analysis_config().source_extension
    if not path.name.lower().endswith(extension):
        raise UsageError(f"input file must have {extension} extension: {path}")


def _print_diagnostics(result: AnalysisResult, indent: str) -> None:
    if not result.diagnostics:
        return
    print(f"{indent}Errors:")
    for diagnostic in result.collector.sorted_by_line():
        print(f"{indent}  {diagnostic.format()}")


def run_file(path: Path) -> AnalysisResult:
    """Analyze one document and write its report next to it.

    Raises:
        ReportError: If the document or report cannot be read or written.
    """
    source = read_source(path)
    result = analyze(source, source_file=str(path))
    report_path = write_report(source, result.diagnostics, report_path_for(path))
    logger.info("%s: %d diagnostic(s), report %s", path, len(result.diagnostics), report_path)
    return result


def _run_single(path: Path) -> int:
    _check_source_path(path)
    result = run_file(path)
    print("Validation complete!")
    print(f"Errors found: {len(result.diagnostics)}")
    print(f"Report generated: {report_path_for(path)}")
    _print_diagnostics(result, indent="")
    return EXIT_OK


def _run_dump(path: Path) -> int:
    _check_source_path(path)
    result = analyze(read_source(path), source_file=str(path))
    print(to_json(result.document, indent=2))
    return EXIT_OK


def _run_batch(directory: Path) -> int:
    if not directory.is_dir():
        raise UsageError(f"directory not found: {directory}")

    extension = get_analysis_config().source_extension
    documents = sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.lower().endswith(extension)
    )
    if not documents:
        print(f"No {extension} files found in {directory}")
        return EXIT_OK

    print(f"Running validation on {len(documents)} files...")
    passed = failed = 0
    for path in documents:
        print(f"\nFile: {path.name}")
        try:
            result = run_file(path)
        except ReportError as e:
            print(f"  FAILED - {e}", file=sys.stderr)
            failed += 1
            continue
        print(f"  Completed - Errors found: {len(result.diagnostics)}")
        print(f"  Output: {report_path_for(path).name}")
        _print_diagnostics(result, indent="  ")
        passed += 1

    print("\n" + "=" * 40)
    print("Summary:")
    print(f"  Passed: {passed}")
    print(f"  Failed: {failed}")
    print(f"  Total:  {passed + failed}")
    return EXIT_IO_ERROR if failed else EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_USAGE

    _configure_logging(args.verbose)
    path = Path(args.path)
    try:
        if args.batch:
            return _run_batch(path)
        if args.dump_ast:
            return _run_dump(path)
        return _run_single(path)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ReportError as e:
        print(f"Error reading or writing file: {e}", file=sys.stderr)
        return EXIT_IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
