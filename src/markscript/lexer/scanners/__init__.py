"""Mode-specific scanners for the markscript lexer.

Each scanner is a mixin that provides scanning logic for a specific
lexer mode (MARKUP, SCRIPT).
"""

from __future__ import annotations

from markscript.lexer.scanners.markup import MarkupScannerMixin
from markscript.lexer.scanners.script import ScriptScannerMixin

__all__ = [
    "MarkupScannerMixin",
    "ScriptScannerMixin",
]
