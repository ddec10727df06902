"""Typed tree nodes for richmark.

All nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: a parsed tree is never mutated, only rebuilt
- Pattern matching: renderers dispatch with a single exhaustive match

Node Hierarchy:
Node (base)
├── Document
├── Block
│   ├── Paragraph
│   ├── Heading
│   ├── BlockQuote
│   ├── CodeBlock ── CodeLine
│   ├── HorizontalRule
│   ├── ListBlock (OrderedList, BulletedList, TodoList) ── ListItem
│   ├── Table ── TableRow ── TableCell
│   └── Image
└── Inline
    ├── Text (leaf, carries marks)
    ├── Link
    └── Hashtag

Formatting is not a node: it is a tuple of ``Mark`` values on each ``Text``
leaf, ordered outermost first. ``**_a_**`` is one leaf ``Text("a",
(Mark.BOLD, Mark.ITALIC))``.

Ownership is strictly tree-shaped and nodes hold no parent pointers; use
``richmark.visitor.find_parent`` to look a parent up.

Every node has a keyword-only ``location`` that is excluded from equality,
so ``parse(s) == hand_built_tree`` compares content only.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from richmark.location import SourceLocation

_UNKNOWN = SourceLocation.unknown()


class Mark(Enum):
    """Inline formatting attribute applied to a whole text leaf."""

    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    INSERTED = "inserted"
    DELETED = "deleted"
    UNDERLINED = "underlined"


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes."""

    location: SourceLocation = field(
        default=_UNKNOWN, kw_only=True, compare=False, repr=False
    )


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """A run of literal text and the marks applied to all of it.

    Marks are unique and ordered outermost first.

    """

    text: str
    marks: tuple[Mark, ...] = ()


@dataclass(frozen=True, slots=True)
class Hashtag(Node):
    """A ``#tag``. Its children hold the tag text, ``#`` included."""

    children: tuple[Text, ...] = ()


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink ``[text](href)``."""

    href: str
    children: tuple[Text | Hashtag, ...] = ()


type Inline = Text | Link | Hashtag


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph of inline content. An empty paragraph is a blank line."""

    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading (``#`` to ``######``)."""

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeLine(Node):
    """One verbatim line of a code block."""

    children: tuple[Text, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced or indented code block.

    Line content is never escaped or interpreted for marks.

    """

    children: tuple[CodeLine, ...] = ()
    language: str = ""


@dataclass(frozen=True, slots=True)
class HorizontalRule(Node):
    """Thematic break (``---``)."""


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Block-level image ``![alt](src "title")``."""

    src: str
    alt: str = ""
    title: str | None = None


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote (``>`` prefixed lines)."""

    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """Item of any list kind.

    ``checked`` is only meaningful inside a ``TodoList``; it stays None for
    ordered and bulleted items.

    """

    children: tuple[Block, ...] = ()
    checked: bool | None = None


@dataclass(frozen=True, slots=True)
class ListBlock(Node):
    """Common base of the three list kinds."""

    children: tuple[ListItem, ...] = ()


@dataclass(frozen=True, slots=True)
class OrderedList(ListBlock):
    """Numbered list (``1.``)."""


@dataclass(frozen=True, slots=True)
class BulletedList(ListBlock):
    """Unordered list (``*`` or ``-``)."""


@dataclass(frozen=True, slots=True)
class TodoList(ListBlock):
    """Checklist (``[ ]`` / ``[x]``)."""


@dataclass(frozen=True, slots=True)
class TableCell(Node):
    """Table cell. ``align`` comes from the delimiter row; None means no alignment."""

    children: tuple[Inline, ...] = ()
    align: Literal["left", "center", "right"] | None = None


@dataclass(frozen=True, slots=True)
class TableRow(Node):
    """Table row."""

    children: tuple[TableCell, ...] = ()


@dataclass(frozen=True, slots=True)
class Table(Node):
    """Pipe table. The first row is the header row."""

    children: tuple[TableRow, ...] = ()


type Block = (
    Paragraph
    | Heading
    | BlockQuote
    | CodeBlock
    | HorizontalRule
    | OrderedList
    | BulletedList
    | TodoList
    | Table
    | Image
)


# =============================================================================
# Document Root
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of a parsed document."""

    children: tuple[Block, ...] = ()
