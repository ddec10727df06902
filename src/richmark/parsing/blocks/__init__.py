"""Block parsing subsystem for the richmark parser.

Provides mixins for parsing block-level Markdown content:
- Headings (ATX)
- Code blocks (fenced and indented)
- Block quotes
- Lists (bulleted, ordered, todo)
- Tables (pipe tables)
- Paragraphs, with images lifted out as blocks

Architecture:
Block parsing is split into logical modules:
- core: Block dispatch, basic blocks and blank-line bookkeeping
- list: List parsing with nesting
- table: Pipe table parsing

"""

from richmark.parsing.blocks.core import BlockParsingCoreMixin
from richmark.parsing.blocks.list import ListParsingMixin
from richmark.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _tokens: list[Token]
        - _pos: int
        - _current: Token | None
        - _tables_enabled: bool

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _parse_inline(text, location, images=...) -> tuple[Inline, ...]
        - _parse_nested_content(content, location) -> tuple[Block, ...]

    """


__all__ = [
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
