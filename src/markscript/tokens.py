"""Token and TokenType definitions for the markscript lexer.

The lexer produces a list of Token objects that the parser consumes.
Each Token has a type, the raw source text it covers, and a position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto

from markscript.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by the mode that produces them:
    - Markup mode (doctype, tags, text)
    - Script region boundaries
    - Script mode (keywords, literals, operators, brackets)
    - Shared (comments, EOF)

    """

    # Markup mode
    DOCTYPE = auto()  # <!DOCTYPE html>
    TAG_OPEN = auto()  # <div id="x">
    TAG_CLOSE = auto()  # </div>
    TEXT = auto()  # trimmed text between tags

    # Script region boundaries
    SCRIPT_OPEN = auto()  # <script ...>
    SCRIPT_CLOSE = auto()  # </script>

    # Script mode - words and literals
    KEYWORD = auto()  # let, const, function, ...
    IDENTIFIER = auto()
    STRING = auto()  # "text" or 'text', quotes included
    NUMBER = auto()  # 42, 3.14, 1e-3
    BOOLEAN = auto()  # true, false
    NULL = auto()  # null

    # Script mode - operators and punctuation
    OPERATOR = auto()  # + - = == += ...
    PUNCTUATION = auto()  # ; , . : ? and unknown characters

    # Script mode - brackets
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()

    # Shared
    COMMENT = auto()  # <!-- -->, // and /* */
    EOF = auto()


# Token types carrying a literal value in script mode
LITERAL_TYPES = frozenset(
    {TokenType.STRING, TokenType.NUMBER, TokenType.BOOLEAN, TokenType.NULL}
)

# Token types that can spell a declared name
WORD_TYPES = frozenset(
    {TokenType.IDENTIFIER, TokenType.KEYWORD, TokenType.BOOLEAN, TokenType.NULL}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source
        lineno: Start line number (1-indexed)
        col: Start column (1-indexed)
        offset: Absolute start position in source
        source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: TokenType
    value: str
    lineno: int
    col: int
    offset: int = 0
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        """Source location of the token start."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.offset,
            end_offset=self.offset + len(self.value),
            source_file=self.source_file,
        )

    def is_punct(self, value: str) -> bool:
        """Whether this is the punctuation token ``value``."""
        return self.type == TokenType.PUNCTUATION and self.value == value

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.col})"
