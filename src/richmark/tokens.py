"""Token and TokenType definitions for the richmark lexer.

The lexer classifies the source line by line and produces a stream of Token
objects that the parser consumes. Inline content is not tokenized; it is
scanned by the inline parser from the token value.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from richmark.location import SourceLocation


class TokenType(Enum):
    """Line classes produced by the lexer."""

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Headings and rules
    ATX_HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, ***, ___, ===

    # Code
    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_CONTENT = auto()
    FENCED_CODE_END = auto()
    INDENTED_CODE = auto()  # 4-space indented

    # Containers
    BLOCK_QUOTE_LINE = auto()  # > content
    LIST_ITEM = auto()  # -, *, 1., [ ], [x]

    # Fallback (also carries table rows, detected by the parser)
    PARAGRAPH_LINE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A classified source line.

    Attributes:
        type: The token type
        value: Payload with the marker removed (heading text, list item
            text, quote content, fence info string, code line)
        lineno: Line number (1-indexed)
        line_indent: Indent of the line in columns (tabs expand to 4)
        marker: The block marker as written ("##", "```", "-", "1.", "[x]", ">")
        source_file: Optional source file path

    """

    type: TokenType
    value: str
    lineno: int
    line_indent: int = 0
    marker: str = ""
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        """Source location of the line start."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.line_indent + 1,
            source_file=self.source_file,
        )

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno}:{self.line_indent})"
