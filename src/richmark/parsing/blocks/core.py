"""Core block parsing for the richmark parser.

Provides block dispatch and basic block parsing (headings, code, quotes,
paragraphs) plus the blank-line bookkeeping that keeps empty paragraphs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from richmark.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    CodeLine,
    Heading,
    HorizontalRule,
    Image,
    Inline,
    ListBlock,
    Paragraph,
    Table,
    Text,
)
from richmark.tokens import Token, TokenType

if TYPE_CHECKING:
    from richmark.location import SourceLocation


def _breaks_blank_run(block: Block) -> bool:
    """Lists and tables never get implicit empty paragraphs next to them."""
    return isinstance(block, (ListBlock, Table))


def _trim_edge(node: Inline, *, leading: bool) -> Inline | None:
    """Strip whitespace from one end of a text leaf next to a lifted image."""
    if not isinstance(node, Text):
        return node
    text = node.text.lstrip() if leading else node.text.rstrip()
    if not text:
        return None
    return Text(location=node.location, text=text, marks=node.marks)


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _peek(offset) -> Token | None
        - _parse_inline(text, location, images=...) -> tuple[Inline | Image, ...]
        - _parse_nested_content(content, location) -> tuple[Block, ...]
        - _parse_list(parent_indent) -> ListBlock
        - _try_parse_table() -> Table | None
        - _starts_table() -> bool

    """

    def _parse_blocks(self) -> tuple[Block, ...]:
        """Parse the token stream into a sequence of blocks.

        Blank lines before the first block and at the end of input are
        dropped. Between two blocks, ``n`` blank lines become ``n - 1``
        empty paragraphs unless either block is a list or a table.
        """
        blocks: list[Block] = []
        pending_blanks = 0

        while not self._at_end():
            token = self._current
            assert token is not None

            if token.type == TokenType.BLANK_LINE:
                pending_blanks += 1
                self._advance()
                continue

            parsed = self._parse_block()
            if not parsed:
                continue

            if (
                blocks
                and pending_blanks > 1
                and not _breaks_blank_run(blocks[-1])
                and not _breaks_blank_run(parsed[0])
            ):
                blocks.extend(
                    Paragraph(location=token.location) for _ in range(pending_blanks - 1)
                )
            pending_blanks = 0
            blocks.extend(parsed)

        return tuple(blocks)

    def _parse_block(self) -> tuple[Block, ...]:
        """Parse the block starting at the current token.

        Returns a tuple because one paragraph can split into several
        blocks around lifted images.
        """
        token = self._current
        assert token is not None

        match token.type:
            case TokenType.THEMATIC_BREAK:
                self._advance()
                return (HorizontalRule(location=token.location),)

            case TokenType.ATX_HEADING:
                return (self._parse_atx_heading(),)

            case TokenType.FENCED_CODE_START:
                return (self._parse_fenced_code(),)

            case TokenType.INDENTED_CODE:
                return (self._parse_indented_code(),)

            case TokenType.BLOCK_QUOTE_LINE:
                return (self._parse_block_quote(),)

            case TokenType.LIST_ITEM:
                return (self._parse_list(),)

            case TokenType.PARAGRAPH_LINE:
                table = self._try_parse_table()
                if table is not None:
                    return (table,)
                return self._parse_paragraph()

            case _:
                # Stray fence content cannot appear in block mode
                self._advance()
                return ()

    def _parse_atx_heading(self) -> Heading:
        """Parse ATX heading (# Heading)."""
        token = self._current
        assert token is not None and token.type == TokenType.ATX_HEADING
        self._advance()

        level = len(token.marker)
        children = self._parse_inline(token.value, token.location, images=False)
        return Heading(location=token.location, level=level, children=children)  # type: ignore[arg-type]

    def _parse_fenced_code(self) -> CodeBlock:
        """Parse fenced code block. An unclosed fence runs to end of input."""
        start = self._current
        assert start is not None and start.type == TokenType.FENCED_CODE_START
        self._advance()

        lines: list[CodeLine] = []
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.FENCED_CODE_CONTENT:
                lines.append(self._code_line(token.value, token.location))
                self._advance()
            elif token.type == TokenType.FENCED_CODE_END:
                self._advance()
                break
            else:
                break

        language = start.value.split()[0] if start.value else ""
        return CodeBlock(location=start.location, children=tuple(lines), language=language)

    def _parse_indented_code(self) -> CodeBlock:
        """Parse indented code block.

        Blank lines are part of the block only when more indented lines
        follow them.
        """
        start = self._current
        assert start is not None
        lines: list[CodeLine] = []

        while not self._at_end():
            token = self._current
            assert token is not None

            if token.type == TokenType.INDENTED_CODE:
                lines.append(self._code_line(token.value, token.location))
                self._advance()
                continue

            if token.type == TokenType.BLANK_LINE:
                following, blanks = self._peek_past_blanks()
                if following is None or following.type != TokenType.INDENTED_CODE:
                    break
                lines.extend(self._code_line("", token.location) for _ in range(blanks))
                self._skip(blanks)
                continue

            break

        return CodeBlock(location=start.location, children=tuple(lines))

    def _code_line(self, text: str, location: SourceLocation) -> CodeLine:
        children = (Text(location=location, text=text),) if text else ()
        return CodeLine(location=location, children=children)

    def _parse_block_quote(self) -> BlockQuote:
        """Parse consecutive ``>`` lines as one quote with nested blocks."""
        start = self._current
        assert start is not None
        lines: list[str] = []

        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type != TokenType.BLOCK_QUOTE_LINE:
                break
            lines.append(token.value)
            self._advance()

        children = self._parse_nested_content("\n".join(lines), start.location)
        return BlockQuote(location=start.location, children=children)

    def _parse_paragraph(self) -> tuple[Block, ...]:
        """Parse consecutive paragraph lines.

        A table header line ends the paragraph so the table can start.
        """
        start = self._current
        assert start is not None
        lines: list[str] = []

        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type != TokenType.PARAGRAPH_LINE:
                break
            if lines and self._starts_table():
                break
            lines.append(token.value)
            self._advance()

        return self._parse_inline_blocks("\n".join(lines), start.location)

    def _parse_inline_blocks(self, text: str, location: SourceLocation) -> tuple[Block, ...]:
        """Parse paragraph text, lifting images out into their own blocks.

        ``a ![i](x) b`` becomes Paragraph("a"), Image, Paragraph("b").
        Whitespace at either end of a line, or touching a lifted image, is
        dropped.
        """
        text = "\n".join(line.strip() for line in text.split("\n"))
        if not text:
            return ()

        inlines = self._parse_inline(text, location, images=True)
        if not any(isinstance(node, Image) for node in inlines):
            return (Paragraph(location=location, children=inlines),) if inlines else ()

        blocks: list[Block] = []
        run: list[Inline] = []

        def flush() -> None:
            if run:
                last = _trim_edge(run[-1], leading=False)
                if last is None:
                    run.pop()
                else:
                    run[-1] = last
            if run:
                blocks.append(Paragraph(location=location, children=tuple(run)))
            run.clear()

        after_image = False
        for node in inlines:
            if isinstance(node, Image):
                flush()
                blocks.append(node)
                after_image = True
                continue
            if after_image:
                trimmed = _trim_edge(node, leading=True)
                if trimmed is None:
                    continue
                node = trimmed
                after_image = False
            run.append(node)
        flush()

        return tuple(blocks)

    def _peek_past_blanks(self) -> tuple[Token | None, int]:
        raise NotImplementedError

    def _skip(self, count: int) -> None:
        raise NotImplementedError
