"""Two-mode lexer for markscript.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum, reserved words, operator tables
└── scanners/            # Mode-specific scanners
    ├── markup.py        # Tags, doctype, comments, text
    └── script.py        # JavaScript tokens, </script> detection

Usage:
    >>> from markscript.lexer import Lexer
    >>> [t.type.name for t in Lexer("<script>let a;</script>").tokenize()]
    ['SCRIPT_OPEN', 'KEYWORD', 'IDENTIFIER', 'PUNCTUATION', 'SCRIPT_CLOSE', 'EOF']

"""

from markscript.lexer.core import Lexer
from markscript.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
