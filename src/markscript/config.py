"""ContextVar-based analysis configuration for markscript.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read by the parser and the validation passes running in the
current context.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from markscript.config import AnalysisConfig, analysis_config_context

    with analysis_config_context(AnalysisConfig(doctype_max_line=1)):
        result = analyze(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_EXPRESSION_KEYWORDS = frozenset({"new", "if", "else"})

# Opt-in set for void_elements; by default every non-self-closing tag stays open
HTML_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Immutable analysis configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        doctype_max_line: Last source line on which the doctype may appear
        max_expression_tokens: Iteration cap for flat expression parsing
        expression_keywords: Keywords folded into expression parsing
        void_elements: Tag names attached to the tree but never left open
            (empty by default; pass HTML_VOID_ELEMENTS for HTML void tags)
        source_extension: Required extension of analyzed documents
        report_extension: Extension of the generated report file

    """

    doctype_max_line: int = 3
    max_expression_tokens: int = 1000
    expression_keywords: frozenset[str] = DEFAULT_EXPRESSION_KEYWORDS
    void_elements: frozenset[str] = frozenset()
    source_extension: str = ".html"
    report_extension: str = ".txt"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "AnalysisConfig":
        """Create AnalysisConfig from dictionary.

        Only includes keys that are valid AnalysisConfig fields; unknown keys
        are silently ignored. Iterable values for the keyword and element
        sets are converted to frozensets.

        Args:
            config_dict: Dictionary with config values. Keys should match
                AnalysisConfig attribute names.

        Returns:
            New AnalysisConfig instance with values from dict.

        Example:
            >>> config = AnalysisConfig.from_dict({
            ...     "doctype_max_line": 1,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.doctype_max_line
            1

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for key in ("expression_keywords", "void_elements"):
            if key in filtered:
                filtered[key] = frozenset(s.lower() for s in filtered[key])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: AnalysisConfig = AnalysisConfig()

# Thread-local configuration via ContextVar
_analysis_config: ContextVar[AnalysisConfig] = ContextVar(
    "analysis_config",
    default=_DEFAULT_CONFIG,
)


def get_analysis_config() -> AnalysisConfig:
    """Get current analysis configuration (thread-local).

    Returns:
        The active AnalysisConfig for this thread/context.

    """
    return _analysis_config.get()


def set_analysis_config(config: AnalysisConfig) -> None:
    """Set analysis configuration for current context.

    Args:
        config: AnalysisConfig instance to use for this context.

    """
    _analysis_config.set(config)


def reset_analysis_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _analysis_config.set(_DEFAULT_CONFIG)


@contextmanager
def analysis_config_context(config: AnalysisConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Useful for tests and isolated analysis runs.

    Args:
        config: AnalysisConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _analysis_config.get()
    _analysis_config.set(config)
    try:
        yield
    finally:
        _analysis_config.set(previous)


__all__ = [
    "HTML_VOID_ELEMENTS",
    "AnalysisConfig",
    "get_analysis_config",
    "set_analysis_config",
    "reset_analysis_config",
    "analysis_config_context",
]
