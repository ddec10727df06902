"""Recursive descent parser producing a typed rich-text tree.

Consumes the line token stream from Lexer and builds typed nodes.
Produces immutable (frozen) dataclass nodes for thread-safety.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (marks, links, code spans, hashtags)
- `BlockParsingMixin`: Block-level content (paragraphs, lists, tables)

Thread Safety:
- Parser produces an immutable tree (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share the tree across threads

"""

from __future__ import annotations

from collections.abc import Callable

from richmark.config import ParseConfig, get_parse_config
from richmark.lexer import Lexer
from richmark.location import SourceLocation
from richmark.nodes import Block, Paragraph
from richmark.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    TokenNavigationMixin,
)
from richmark.tokens import Token
from richmark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Markdown.

    Consumes tokens from Lexer and builds typed nodes.

    Usage:
            >>> parser = Parser("# Hello\\n\\nWorld")
            >>> blocks = parser.parse()
            >>> blocks[0]
        Heading(level=1, children=(Text(text='Hello', marks=()),))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).
        The resulting tree is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_source_file",
        "_start_lineno",
        "_nested",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        start_lineno: int = 1,
        nested: bool = False,
    ) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default configuration.

        Args:
            source: Markdown source text
            source_file: Optional source file path for locations
            start_lineno: Line number of the first source line
            nested: True for blockquote content, which has already been
                through the text transformer

        """
        self._source = source
        self._source_file = source_file
        self._start_lineno = start_lineno
        self._nested = nested
        self._tokens: list[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._current: Token | None = None

    # =========================================================================
    # Configuration Properties (read from ContextVar)
    # =========================================================================

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def _tables_enabled(self) -> bool:
        """Whether pipe table parsing is enabled."""
        return self._config.tables_enabled

    @property
    def _hashtags_enabled(self) -> bool:
        """Whether #hashtag parsing is enabled."""
        return self._config.hashtags_enabled

    @property
    def _todo_lists_enabled(self) -> bool:
        """Whether [ ] / [x] todo list items are enabled."""
        return self._config.todo_lists_enabled

    @property
    def _text_transformer(self) -> Callable[[str], str] | None:
        """Optional callback to transform non-code lines."""
        if self._nested:
            return None
        return self._config.text_transformer

    def parse(self) -> tuple[Block, ...]:
        """Parse source into blocks.

        Empty input gives no blocks; whitespace-only input gives a single
        empty paragraph.

        Thread Safety:
            Returns an immutable tree (frozen dataclasses).
        """
        lexer = Lexer(
            self._source,
            self._source_file,
            text_transformer=self._text_transformer,
            start_lineno=self._start_lineno,
            todo_lists_enabled=self._todo_lists_enabled,
        )
        self._tokens = list(lexer.tokenize())
        self._tokens_len = len(self._tokens)
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None

        blocks = self._parse_blocks()
        if not blocks and self._source and not self._source.strip():
            location = SourceLocation(self._start_lineno, 1, source_file=self._source_file)
            blocks = (Paragraph(location=location),)

        if not self._nested:
            logger.debug(
                "Parsed %d blocks from %d lines%s",
                len(blocks),
                self._source.count("\n") + 1,
                f" ({self._source_file})" if self._source_file else "",
            )
        return blocks

    def _parse_nested_content(
        self,
        content: str,
        location: SourceLocation,
    ) -> tuple[Block, ...]:
        """Parse nested content as blocks (for block quotes).

        Creates a sub-parser to handle nested block-level content.
        Configuration is inherited via ContextVar.

        Returns:
            Tuple of Block nodes, empty for whitespace-only content

        """
        if not content.strip():
            return ()

        sub_parser = Parser(
            content,
            self._source_file,
            start_lineno=location.lineno,
            nested=True,
        )
        return sub_parser.parse()
