"""Line-classifying lexer with O(n) guaranteed performance.

Implements a window-based approach: scan entire lines, classify, then commit.
This eliminates position rewinds and guarantees forward progress.

No regex in the hot path.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from richmark.lexer.classifiers import (
    FenceClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
    QuoteClassifierMixin,
    ThematicClassifierMixin,
)
from richmark.lexer.modes import LexerMode
from richmark.lexer.scanners import BlockScannerMixin, FenceScannerMixin
from richmark.tokens import Token, TokenType


class Lexer(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    FenceClassifierMixin,
    ThematicClassifierMixin,
    QuoteClassifierMixin,
    ListClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    FenceScannerMixin,
):
    """Line-classifying lexer.

    Uses a window-based approach for block scanning:
    1. Scan to end of line (find window)
    2. Classify the line (pure logic, no position changes)
    3. Commit position (always advances)

    Usage:
            >>> lexer = Lexer("# Hello\\n\\nWorld")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(ATX_HEADING, 'Hello', 1:0)
        Token(BLANK_LINE, '', 2:0)
        Token(PARAGRAPH_LINE, 'World', 3:0)
        Token(EOF, '', 3:0)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_saved_lineno",
        "_mode",
        "_source_file",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_in_paragraph",
        "_in_list",
        "_text_transformer",
        "_todo_lists_enabled",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        text_transformer: Callable[[str], str] | None = None,
        *,
        start_lineno: int = 1,
        todo_lists_enabled: bool = True,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for token locations
            text_transformer: Optional callback to transform non-code lines
            start_lineno: Line number of the first source line (nested
                blockquote content keeps absolute line numbers)
            todo_lists_enabled: Recognise [ ] / [x] list markers
        """
        self._source = source.replace("\r\n", "\n").replace("\r", "\n")
        self._source_len = len(self._source)
        self._pos = 0
        self._lineno = start_lineno
        self._saved_lineno = start_lineno
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._text_transformer = text_transformer
        self._todo_lists_enabled = todo_lists_enabled

        # Fenced code state
        self._fence_char: str = ""
        self._fence_count: int = 0
        self._fence_indent: int = 0

        # Context from previous lines
        self._in_paragraph: bool = False
        self._in_list: bool = False

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a stream of line tokens.

        Yields:
            Token objects one at a time, ending with EOF

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        self._save_location()
        yield self._make_token(TokenType.EOF, "")

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to appropriate scanner based on current mode."""
        if self._mode == LexerMode.BLOCK:
            yield from self._scan_block()
        elif self._mode == LexerMode.CODE_FENCE:
            yield from self._scan_code_fence_content()

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to next multiple of 4.

        Returns:
            (indent_spaces, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
                pos += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
                pos += 1
            else:
                break
        return indent, pos

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end, consuming the newline if present."""
        self._pos = line_end
        if self._pos < self._source_len and self._source[self._pos] == "\n":
            self._pos += 1
            self._lineno += 1

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save the current line number. Call at the START of scanning a line."""
        self._saved_lineno = self._lineno

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        *,
        indent: int = 0,
        marker: str = "",
    ) -> Token:
        """Create a Token for the line whose location was last saved."""
        return Token(
            type=token_type,
            value=value,
            lineno=self._saved_lineno,
            line_indent=indent,
            marker=marker,
            source_file=self._source_file,
        )
