"""Parsing subsystem for the markscript parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `MarkupParsingMixin`: Doctype, tags, text, script region boundaries
- `ScriptParsingMixin`: Declarations, functions, assignments
- `ExpressionParsingMixin`: Flat expressions, dotted names, calls

Architecture:
The parser is a two-state machine (markup, script). Each mixin handles
one aspect of the grammar; the Parser class composes them and owns the
per-parse state.

"""

from markscript.parsing.expressions import ExpressionParsingMixin
from markscript.parsing.markup import MarkupParsingMixin
from markscript.parsing.script import ScriptParsingMixin
from markscript.parsing.tag_stack import TagFrame, TagStack, freeze_frames
from markscript.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "MarkupParsingMixin",
    "ScriptParsingMixin",
    "ExpressionParsingMixin",
    "TagFrame",
    "TagStack",
    "freeze_frames",
]
