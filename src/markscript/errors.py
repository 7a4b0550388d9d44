"""Exception classes for markscript.

Analysis itself never raises for malformed documents: tokenizer and parser
degrade gracefully and rule violations become diagnostics. These exceptions
cover the failures that do propagate to callers: file I/O and CLI usage.
"""

from __future__ import annotations


class MarkscriptError(Exception):
    """Base exception for all markscript errors.

    Subclass this for specific error categories.
    """

    pass


class ReportError(MarkscriptError):
    """Error reading a source document or writing its report.

    Wraps the underlying OSError so the CLI can print one readable line
    and exit non-zero.
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize report error.

        Args:
            path: File that could not be read or written
            message: Description of the failure
        """
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class UsageError(MarkscriptError):
    """Invalid command-line usage.

    Raised when the input path is missing or does not carry the expected
    source extension.
    """

    pass
