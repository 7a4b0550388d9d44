"""Utility modules for markscript.

Provides:
- logger: get_logger for logging
- text: quote stripping and identifier character classes
"""

from markscript.utils.logger import get_logger
from markscript.utils.text import (
    is_identifier_part,
    is_identifier_start,
    is_quoted,
    strip_quotes,
)

__all__ = [
    "get_logger",
    "is_identifier_part",
    "is_identifier_start",
    "is_quoted",
    "strip_quotes",
]
