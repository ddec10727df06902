"""List parsing for the richmark parser.

Handles bulleted, ordered and todo lists with nesting.

Nesting is decided by indentation alone: an item indented at least
``LIST_INDENT_WIDTH`` columns deeper than the current level opens a nested
list inside the previous item. A nested list ends at the first item that is
not deeper than its parent's level plus one column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from richmark.lexer.classifiers.list import TODO_MARKERS
from richmark.nodes import BulletedList, ListBlock, ListItem, OrderedList, TodoList
from richmark.tokens import Token, TokenType

if TYPE_CHECKING:
    from richmark.location import SourceLocation
    from richmark.nodes import Block

LIST_INDENT_WIDTH = 2

_LIST_TYPES: dict[str, type[ListBlock]] = {
    "ordered": OrderedList,
    "bulleted": BulletedList,
    "todo": TodoList,
}


def marker_family(marker: str) -> str:
    """Return the list family of a normalised item marker."""
    if marker in TODO_MARKERS:
        return "todo"
    if marker[0].isdigit():
        return "ordered"
    return "bulleted"


@dataclass(slots=True)
class _PendingItem:
    """An item whose text and nested lists are still being collected."""

    token: Token
    lines: list[str]
    nested: list[ListBlock] = field(default_factory=list)


class ListParsingMixin:
    """Mixin for list parsing.

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _peek_past_blanks() -> tuple[Token | None, int]
        - _skip(count) -> None
        - _parse_inline_blocks(text, location) -> tuple[Block, ...]

    """

    _current: Token | None

    def _parse_list(self, parent_indent: int | None = None) -> ListBlock:
        """Parse a list starting at the current LIST_ITEM token.

        The first item fixes the list kind and its level indent. A blank line
        only keeps the list open if the next non-blank line continues it.

        Args:
            parent_indent: Level indent of the enclosing list, None at top level
        """
        first = self._current
        assert first is not None and first.type == TokenType.LIST_ITEM

        family = marker_family(first.marker)
        level_indent = first.line_indent
        items: list[_PendingItem] = []

        while not self._at_end():
            token = self._current
            assert token is not None

            if token.type == TokenType.BLANK_LINE:
                following, blanks = self._peek_past_blanks()
                if following is None or not self._continues_list(
                    following, family, level_indent, parent_indent
                ):
                    break
                self._skip(blanks)
                continue

            if token.type == TokenType.LIST_ITEM:
                if not self._continues_list(token, family, level_indent, parent_indent):
                    break
                if items and token.line_indent >= level_indent + LIST_INDENT_WIDTH:
                    items[-1].nested.append(self._parse_list(parent_indent=level_indent))
                    continue
                items.append(_PendingItem(token=token, lines=[token.value]))
                self._advance()
                continue

            # Lazy continuation of the last item's text
            if (
                token.type == TokenType.PARAGRAPH_LINE
                and items
                and not items[-1].nested
                and token.line_indent > level_indent
            ):
                items[-1].lines.append(token.value)
                self._advance()
                continue

            break

        list_type = _LIST_TYPES[family]
        return list_type(
            location=first.location,
            children=tuple(self._build_list_item(item, family) for item in items),
        )

    def _continues_list(
        self,
        token: Token,
        family: str,
        level_indent: int,
        parent_indent: int | None,
    ) -> bool:
        """Check whether a token belongs to the list at this level."""
        if token.type != TokenType.LIST_ITEM:
            return False
        if parent_indent is not None and token.line_indent <= parent_indent + 1:
            return False
        if token.line_indent >= level_indent + LIST_INDENT_WIDTH:
            # Deeper items nest regardless of their kind
            return True
        return marker_family(token.marker) == family

    def _build_list_item(self, item: _PendingItem, family: str) -> ListItem:
        location = item.token.location
        text = "\n".join(line for line in item.lines if line)
        children: tuple[Block, ...] = self._parse_inline_blocks(text, location)
        children += tuple(item.nested)
        checked = item.token.marker == "[x]" if family == "todo" else None
        return ListItem(location=location, children=children, checked=checked)

    def _parse_inline_blocks(self, text: str, location: SourceLocation) -> tuple[Block, ...]:
        raise NotImplementedError
