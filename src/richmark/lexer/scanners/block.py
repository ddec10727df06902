"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from richmark.parsing.charsets import FENCE_CHARS
from richmark.tokens import Token, TokenType


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Scans one line at a time using the window approach:
    1. Find end of current line (window)
    2. Classify the line content (pure logic)
    3. Emit token and commit position (always advances)

    Two pieces of context from earlier lines affect classification:

    - ``_in_paragraph``: the previous line was paragraph text. Rule lines
      (``---``, ``===``) and indented lines then continue the paragraph
      instead of starting a block, so Setext underlines stay plain text.
    - ``_in_list``: we are inside a list. Indented lines are then list
      items or item continuations, never indented code.

    """

    # These will be set by the Lexer class or other mixins
    _source: str
    _pos: int
    _in_paragraph: bool
    _in_list: bool
    _text_transformer: Callable[[str], str] | None

    def _save_location(self) -> None:
        """Save current location for token creation."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        """Find end of current line."""
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position."""
        raise NotImplementedError

    def _chars_for_indent(self, line: str, target_indent: int) -> int:
        """Calculate how many characters to skip to consume target_indent spaces."""
        col = 0
        pos = 0
        while pos < len(line) and col < target_indent:
            char = line[pos]
            if char == " ":
                col += 1
                pos += 1
            elif char == "\t":
                col += 4 - (col % 4)
                pos += 1
            else:
                break
        return pos

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end."""
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        *,
        indent: int = 0,
        marker: str = "",
    ) -> Token:
        raise NotImplementedError

    # Classifier methods (provided by classifier mixins)
    def _is_thematic_break(self, content: str) -> bool:
        raise NotImplementedError

    def _try_classify_thematic_break(self, content: str, indent: int = 0) -> Token | None:
        raise NotImplementedError

    def _try_classify_atx_heading(self, content: str, indent: int = 0) -> Token | None:
        raise NotImplementedError

    def _try_classify_fence_start(self, content: str, indent: int = 0) -> Token | None:
        raise NotImplementedError

    def _try_classify_block_quote(self, content: str, indent: int = 0) -> Token | None:
        raise NotImplementedError

    def _try_classify_list_item(self, content: str, indent: int = 0) -> Token | None:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[Token]:
        """Scan one line in block mode."""
        self._save_location()
        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]
        self._commit_to(line_end)

        indent, content_start = self._calc_indent(line)
        content = line[content_start:]

        if self._text_transformer:
            content = self._text_transformer(content)

        if not content or content.isspace():
            self._in_paragraph = False
            yield self._make_token(TokenType.BLANK_LINE, "")
            return

        token = self._classify_line(line, content, indent)
        self._in_paragraph = token.type == TokenType.PARAGRAPH_LINE
        self._in_list = token.type == TokenType.LIST_ITEM or (
            self._in_list
            and token.type == TokenType.PARAGRAPH_LINE
            and token.line_indent > 0
        )
        yield token

    def _classify_line(self, line: str, content: str, indent: int) -> Token:
        """Classify a non-blank line, in block priority order."""
        if indent >= 4:
            if self._in_list:
                return self._try_classify_list_item(content, indent) or self._paragraph_line(
                    content, indent
                )
            if self._in_paragraph:
                return self._paragraph_line(content, indent)
            code = line[self._chars_for_indent(line, 4) :]
            return self._make_token(TokenType.INDENTED_CODE, code, indent=indent)

        if self._is_thematic_break(content):
            if self._in_paragraph:
                return self._paragraph_line(content, indent)
            token = self._try_classify_thematic_break(content, indent)
            if token:
                return token

        if content.startswith("#"):
            token = self._try_classify_atx_heading(content, indent)
            if token:
                return token

        if content[0] in FENCE_CHARS:
            token = self._try_classify_fence_start(content, indent)
            if token:
                return token

        if content.startswith(">"):
            token = self._try_classify_block_quote(content, indent)
            if token:
                return token

        token = self._try_classify_list_item(content, indent)
        if token:
            return token

        return self._paragraph_line(content, indent)

    def _paragraph_line(self, content: str, indent: int) -> Token:
        """Paragraph text with its indentation removed."""
        return self._make_token(TokenType.PARAGRAPH_LINE, content, indent=indent)
