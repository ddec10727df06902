"""Fenced code mode scanner mixin."""

from collections.abc import Iterator

from richmark.lexer.modes import LexerMode
from richmark.tokens import Token, TokenType


class FenceScannerMixin:
    """Mixin providing fenced code mode scanning logic.

    Scans content inside fenced code blocks, detecting the closing fence.
    Content lines are emitted verbatim apart from the opening fence's
    indentation, which is stripped.

    """

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _mode: LexerMode
    _fence_char: str
    _fence_count: int
    _fence_indent: int

    def _save_location(self) -> None:
        """Save current location for token creation."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        """Find end of current line."""
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end."""
        raise NotImplementedError

    def _chars_for_indent(self, line: str, target_indent: int) -> int:
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        *,
        indent: int = 0,
        marker: str = "",
    ) -> Token:
        """Create token at the saved line. Implemented by Lexer."""
        raise NotImplementedError

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line is a closing fence. Implemented by FenceClassifierMixin."""
        raise NotImplementedError

    def _scan_code_fence_content(self) -> Iterator[Token]:
        """Scan one line inside a fenced code block.

        Yields:
            FENCED_CODE_CONTENT for a content line, or FENCED_CODE_END when
            the closing fence is found.
        """
        self._save_location()

        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        self._commit_to(line_end)

        if self._is_closing_fence(line):
            fence = self._fence_char * self._fence_count
            self._mode = LexerMode.BLOCK
            self._fence_char = ""
            self._fence_count = 0
            self._fence_indent = 0
            yield self._make_token(TokenType.FENCED_CODE_END, "", marker=fence)
            return

        if self._fence_indent:
            line = line[self._chars_for_indent(line, self._fence_indent) :]

        yield self._make_token(TokenType.FENCED_CODE_CONTENT, line)
