"""Markdown renderer: serializes a typed tree back to Markdown source.

Rendering is bottom-up: each node's children are serialized first and the
parent's rule wraps or reshapes their output. Quotes and lists prefix the
lines of their rendered children, so block rules return strings instead of
writing into a shared buffer.

Marks are not nodes. Within a run of sibling inlines, a mark's opening
delimiter is written only where the previous sibling lacks the mark and its
closing delimiter only where the next sibling lacks it, so
``Text("a ", (BOLD,)), Text("b", (BOLD, ITALIC))`` renders as ``**a _b_**``.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single MarkdownRenderer
instance and call render() concurrently without synchronization.

"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from richmark.errors import RenderError
from richmark.nodes import (
    BlockQuote,
    BulletedList,
    CodeBlock,
    CodeLine,
    Document,
    Hashtag,
    Heading,
    HorizontalRule,
    Image,
    Inline,
    Link,
    ListBlock,
    ListItem,
    Mark,
    Node,
    OrderedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    TodoList,
)
from richmark.renderers.protocol import RenderRule
from richmark.stringbuilder import StringBuilder
from richmark.utils.logger import get_logger
from richmark.utils.text import encode_url, escape_markdown

logger = get_logger(__name__)

# Indent applied to every line of a list nested in a list item
NESTED_LIST_INDENT = "   "

_MARK_DELIMITERS: dict[Mark, str] = {
    Mark.BOLD: "**",
    Mark.ITALIC: "_",
    Mark.DELETED: "~~",
    Mark.INSERTED: "++",
    Mark.UNDERLINED: "__",
}

# Italic used where an underscore would touch a letter or digit
_INTRAWORD_ITALIC = "*"

_ALIGN_DELIMITERS: dict[str | None, str] = {
    "left": "|:--- ",
    "center": "|:---:",
    "right": "| ---:",
    None: "| --- ",
}

_BACKTICK_RUN = re.compile(r"`+")
_FENCE_LINES: dict[str, re.Pattern[str]] = {
    "`": re.compile(r"^[ \t]*(`{3,})", re.MULTILINE),
    "~": re.compile(r"^[ \t]*(~{3,})", re.MULTILINE),
}


def _code_span(code: str) -> str:
    """Wrap code in a backtick run longer than any run it contains."""
    if not code:
        return ""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(code)), default=0)
    fence = "`" * (longest + 1)
    if code.startswith("`") or code.endswith("`"):
        code = f" {code} "
    return f"{fence}{code}{fence}"


def _code_fence(body: str, language: str = "") -> str:
    """Return a fence longer than any fence line of its kind inside ``body``.

    A language containing a backtick cannot follow a backtick fence, so
    those blocks are fenced with tildes.
    """
    char = "~" if "`" in language else "`"
    longest = max((len(run) for run in _FENCE_LINES[char].findall(body)), default=0)
    return char * max(3, longest + 1)


def _leaves(nodes: Sequence[Inline]) -> list[Text]:
    leaves: list[Text] = []
    for node in nodes:
        match node:
            case Text():
                leaves.append(node)
            case Link() | Hashtag():
                leaves.extend(_leaves(node.children))
    return leaves


def _common_marks(nodes: Sequence[Inline]) -> tuple[Mark, ...]:
    """Non-code marks shared by every leaf under ``nodes``, in first-leaf order."""
    leaves = _leaves(nodes)
    if not leaves:
        return ()
    return tuple(
        mark
        for mark in leaves[0].marks
        if mark is not Mark.CODE and all(mark in leaf.marks for leaf in leaves[1:])
    )


def _without_marks(node: Inline, marks: tuple[Mark, ...]) -> Inline:
    """Copy ``node`` with ``marks`` removed from all of its leaves."""
    if not marks:
        return node
    match node:
        case Text():
            return replace(node, marks=tuple(m for m in node.marks if m not in marks))
        case Link() | Hashtag():
            return replace(
                node, children=tuple(_without_marks(child, marks) for child in node.children)
            )
    return node


@dataclass(slots=True)
class _Piece:
    """One sibling inline, rendered without the marks it shares with neighbours."""

    body: str
    marks: tuple[Mark, ...]


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call, ensuring thread safety when
    sharing MarkdownRenderer instances across threads.

    Attributes:
        ancestors: Nodes whose children are being rendered, root first
        table_header: Alignment cells collected from the header row of the
            table being rendered, written once after that row

    """

    ancestors: list[Node] = field(default_factory=list)
    table_header: list[str] = field(default_factory=list)

    @property
    def parent(self) -> Node | None:
        """Parent of the node being rendered."""
        return self.ancestors[-1] if self.ancestors else None

    def in_code_block(self) -> bool:
        """Whether rendering happens inside a code block."""
        return any(isinstance(node, CodeBlock) for node in self.ancestors)


class MarkdownRenderer:
    """Render a tree to Markdown.

    Usage:
        >>> from richmark import parse
        >>> renderer = MarkdownRenderer()
        >>> renderer.render(parse("# Hello **World**"))
        '# Hello **World**'

    Custom rules map a node type to a callable
    ``(renderer, node, children, ctx) -> str | None`` where ``children`` is
    the node's rendered content. Rules run before the built-in rendering;
    returning None falls through to it.

    Thread Safety:
        Multiple threads can safely share a single MarkdownRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[type[Node], RenderRule] | None = None) -> None:
        """Initialize renderer.

        Args:
            rules: Optional custom render rules keyed by node type
        """
        self._rules: dict[type[Node], RenderRule] = dict(rules or {})

    def render(self, node: Document) -> str:
        """Render document to Markdown.

        Args:
            node: Document root

        Returns:
            Markdown source with leading and trailing whitespace removed

        Raises:
            RenderError: If the tree holds an object that is not a node
        """
        return self.render_node(node, RenderContext())

    def render_node(self, node: Node, ctx: RenderContext) -> str:
        """Render any node, consulting custom rules first.

        Useful from inside a custom rule to render a child with the
        built-in behaviour.
        """
        custom = self._apply_rule(node, ctx)
        if custom is not None:
            return custom
        return self._render_builtin(node, ctx)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _apply_rule(self, node: Node, ctx: RenderContext) -> str | None:
        rule = self._rules.get(type(node))
        if rule is None:
            return None

        children = self._render_children(node, ctx)
        try:
            result = rule(self, node, children, ctx)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"custom rule failed: {e}", node) from e

        if result is not None:
            logger.debug("Custom rule rendered %s", type(node).__name__)
        return result

    def _render_builtin(self, node: Node, ctx: RenderContext) -> str:
        """Render a node with the built-in rules."""
        match node:
            case Document():
                return self._join_blocks(node, ctx).strip()
            case Paragraph():
                inlines = self._render_children(node, ctx)
                return f"{inlines}\n" if inlines else ""
            case Heading():
                return self._render_heading(node, ctx)
            case HorizontalRule():
                return "---\n"
            case CodeBlock():
                return self._render_code_block(node, ctx)
            case CodeLine():
                return self._render_children(node, ctx)
            case BlockQuote():
                return self._render_block_quote(node, ctx)
            case ListBlock():
                return self._render_list(node, ctx)
            case ListItem():
                return self._render_list_item(node, "*", ctx)
            case Table():
                ctx.table_header = []
                return f"{self._render_children(node, ctx).strip()}\n"
            case TableRow():
                return self._render_table_row(node, ctx)
            case TableCell():
                return self._render_table_cell(node, ctx)
            case Image():
                title = f' "{node.title}"' if node.title else ""
                return f"![{node.alt}]({encode_url(node.src)}{title})\n"
            case Text() | Link() | Hashtag():
                return self._render_inlines((node,), ctx)
            case _:
                logger.warning("Cannot render object of type %s", type(node).__name__)
                raise RenderError("not a renderable node", node)

    def _render_children(self, node: Node, ctx: RenderContext) -> str:
        """Render the content of ``node`` as its rule receives it."""
        match node:
            case Text():
                if Mark.CODE in node.marks or ctx.in_code_block():
                    return node.text
                return escape_markdown(node.text)
            case CodeLine():
                return "".join(leaf.text for leaf in node.children)
            case HorizontalRule() | Image():
                return ""
            case Document() | BlockQuote():
                return self._join_blocks(node, ctx)

        children = getattr(node, "children", None)
        if children is None:
            logger.warning("Cannot render object of type %s", type(node).__name__)
            raise RenderError("not a renderable node", node)

        ctx.ancestors.append(node)
        try:
            match node:
                case Paragraph() | Heading() | TableCell():
                    return self._render_inlines(children, ctx)
                case Link() | Hashtag():
                    return self._render_inlines(children, ctx, line_start=False)
                case CodeBlock():
                    return "\n".join(self.render_node(line, ctx) for line in children)
                case _:
                    return "".join(self.render_node(child, ctx) for child in children)
        finally:
            ctx.ancestors.pop()

    def _join_blocks(self, node: Document | BlockQuote, ctx: RenderContext) -> str:
        """Render child blocks, one blank line apart."""
        ctx.ancestors.append(node)
        try:
            return "\n".join(self.render_node(child, ctx) for child in node.children)
        finally:
            ctx.ancestors.pop()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_heading(self, heading: Heading, ctx: RenderContext) -> str:
        content = self._render_children(heading, ctx)
        # A trailing run of "#" would be read as a closing sequence
        if not content or content.endswith("#"):
            content = f"{content} #".lstrip()
        return f"{'#' * heading.level} {content}\n"

    def _render_code_block(self, block: CodeBlock, ctx: RenderContext) -> str:
        body = self._render_children(block, ctx)
        fence = _code_fence(body, block.language)
        sb = StringBuilder()
        sb.append(fence).append_line(block.language)
        if block.children:
            sb.append_line(body)
        sb.append_line(fence)
        return sb.build()

    def _render_block_quote(self, quote: BlockQuote, ctx: RenderContext) -> str:
        inner = self._join_blocks(quote, ctx).rstrip("\n")
        return StringBuilder().append_prefixed(inner, "> ", blank=">").build()

    def _render_list(self, block: ListBlock, ctx: RenderContext) -> str:
        nested = isinstance(ctx.parent, ListItem)

        ctx.ancestors.append(block)
        try:
            sb = StringBuilder()
            for item in block.children:
                sb.append(self._render_item_in(block, item, ctx))
        finally:
            ctx.ancestors.pop()

        output = sb.build().rstrip("\n")
        if nested:
            return StringBuilder().append_prefixed(output, NESTED_LIST_INDENT).build()
        return f"{output}\n"

    def _render_item_in(self, block: ListBlock, item: ListItem, ctx: RenderContext) -> str:
        custom = self._apply_rule(item, ctx)
        if custom is not None:
            return custom

        match block:
            case OrderedList():
                marker = "1."
            case TodoList():
                marker = "[x]" if item.checked else "[ ]"
            case BulletedList():
                marker = "*"
            case _:
                marker = "*"
        return self._render_list_item(item, marker, ctx)

    def _render_list_item(self, item: ListItem, marker: str, ctx: RenderContext) -> str:
        """Render an item: text lines after the marker, then nested lists.

        Continuation lines are padded to the marker width so they stay
        inside the item.
        """
        lines: list[str] = []
        nested: list[str] = []

        ctx.ancestors.append(item)
        try:
            for child in item.children:
                rendered = self.render_node(child, ctx)
                if isinstance(child, ListBlock):
                    nested.append(rendered)
                elif rendered:
                    lines.extend(rendered.rstrip("\n").split("\n"))
        finally:
            ctx.ancestors.pop()

        pad = " " * (len(marker) + 1)
        sb = StringBuilder()
        sb.append(marker)
        if lines:
            sb.append(" ").append(lines[0])
        for line in lines[1:]:
            sb.append("\n")
            if line:
                sb.append(pad).append(line)
        sb.append_line()
        sb.extend(nested)
        return sb.build()

    def _render_table_row(self, row: TableRow, ctx: RenderContext) -> str:
        cells = self._render_children(row, ctx)
        sb = StringBuilder()
        sb.append(cells).append_line("|")
        if ctx.table_header:
            sb.extend(ctx.table_header).append_line("|")
            ctx.table_header = []
        return sb.build()

    def _render_table_cell(self, cell: TableCell, ctx: RenderContext) -> str:
        # ancestors end with the row, then the table
        row = ctx.parent
        table = ctx.ancestors[-2] if len(ctx.ancestors) > 1 else None
        if isinstance(table, Table) and table.children and table.children[0] is row:
            ctx.table_header.append(_ALIGN_DELIMITERS.get(cell.align, _ALIGN_DELIMITERS[None]))

        content = self._render_children(cell, ctx).replace("|", "\\|")
        return f"| {content} "

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(
        self, nodes: Sequence[Inline], ctx: RenderContext, *, line_start: bool = True
    ) -> str:
        """Render a run of sibling inlines, writing mark delimiters at edges.

        ``line_start`` tells whether the first node begins a line; later
        nodes begin one only after a newline.
        """
        pieces: list[_Piece] = []
        for node in nodes:
            at_line_start = pieces[-1].body.endswith("\n") if pieces else line_start
            pieces.append(self._piece(node, ctx, line_start=at_line_start))
        _escape_image_bangs(pieces)
        italics = self._italic_delimiters(pieces)

        sb = StringBuilder()
        for i, piece in enumerate(pieces):
            before = pieces[i - 1].marks if i > 0 else ()
            after = pieces[i + 1].marks if i + 1 < len(pieces) else ()
            sb.append(self._wrap(piece, before, after, italics[i]))
        return sb.build()

    def _piece(self, node: Inline, ctx: RenderContext, *, line_start: bool) -> _Piece:
        custom = self._apply_rule(node, ctx)
        if custom is not None:
            return _Piece(custom, ())

        match node:
            case Text():
                if Mark.CODE in node.marks:
                    body = _code_span(node.text)
                elif ctx.in_code_block():
                    body = node.text
                else:
                    body = escape_markdown(node.text, line_start=line_start)
                return _Piece(body, tuple(m for m in node.marks if m is not Mark.CODE))
            case Link():
                shared = _common_marks(node.children)
                inner = self._render_children(_without_marks(node, shared), ctx).strip()
                href = encode_url(node.href)
                return _Piece(f"[{inner or href}]({href})", shared)
            case Hashtag():
                shared = _common_marks(node.children)
                return _Piece(self._render_children(_without_marks(node, shared), ctx), shared)
            case _:
                logger.warning("Cannot render inline of type %s", type(node).__name__)
                raise RenderError("not a renderable inline node", node)

    def _italic_delimiters(self, pieces: list[_Piece]) -> list[str]:
        """Pick the italic delimiter for each piece.

        An underscore cannot open after, or close before, a letter or digit,
        so a span touching one on the outside uses ``*``. Neither can an
        outermost ``_`` touch an underline delimiter, which would merge
        into one run with it.
        """
        delimiters = [_MARK_DELIMITERS[Mark.ITALIC]] * len(pieces)
        i = 0
        while i < len(pieces):
            if Mark.ITALIC not in pieces[i].marks:
                i += 1
                continue
            start = i
            while i < len(pieces) and Mark.ITALIC in pieces[i].marks:
                i += 1
            end = i - 1

            touches = False
            if start > 0:
                touches = _touches_underscore(pieces, start, start - 1)
            if end + 1 < len(pieces) and not touches:
                touches = _touches_underscore(pieces, end, end + 1)

            if touches:
                for j in range(start, end + 1):
                    delimiters[j] = _INTRAWORD_ITALIC
        return delimiters

    def _wrap(
        self,
        piece: _Piece,
        before: tuple[Mark, ...],
        after: tuple[Mark, ...],
        italic: str,
    ) -> str:
        """Write the delimiters that open or close at this piece.

        Marks apply innermost first; marks continuing from the previous
        piece are moved outermost (stable sort) so the spans nest.
        Whitespace at an opening or closing edge goes outside the delimiters.
        """
        order = sorted(reversed(piece.marks), key=lambda mark: mark in before)
        opens = [mark for mark in order if mark not in before]
        closes = [mark for mark in order if mark not in after]
        if not opens and not closes:
            return piece.body

        core = piece.body
        lead = trail = ""
        if opens:
            stripped = core.lstrip()
            lead, core = core[: len(core) - len(stripped)], stripped
        if closes:
            stripped = core.rstrip()
            trail, core = core[len(stripped) :], stripped

        # A whitespace-only span has nothing to mark
        if not core and len(opens) == len(closes) == len(order):
            return piece.body

        for mark in order:
            delimiter = italic if mark is Mark.ITALIC else _MARK_DELIMITERS[mark]
            if mark in opens:
                core = delimiter + core
            if mark in closes:
                core = core + delimiter
        return f"{lead}{core}{trail}"


def _escape_image_bangs(pieces: list[_Piece]) -> None:
    """Escape a ``!`` written right before a link so it does not read as an image."""
    for i in range(1, len(pieces)):
        prev, piece = pieces[i - 1], pieces[i]
        if (
            piece.body.startswith("[")
            and prev.body.endswith("!")
            and _outer_mark(pieces, i - 1, last=True) is None
            and _outer_mark(pieces, i, last=False) is None
        ):
            prev.body = f"{prev.body[:-1]}\\!"


def _outer_mark(pieces: list[_Piece], index: int, *, last: bool) -> Mark | None:
    """The mark whose delimiter is written outermost at one edge of a piece."""
    piece = pieces[index]
    before = pieces[index - 1].marks if index > 0 else ()
    after = pieces[index + 1].marks if index + 1 < len(pieces) else ()
    neighbour = after if last else before
    order = sorted(reversed(piece.marks), key=lambda mark: mark in before)
    edge = [mark for mark in order if mark not in neighbour]
    return edge[-1] if edge else None


def _edge_char(pieces: list[_Piece], index: int, *, last: bool) -> str:
    """The character written at one edge of a piece, delimiters included.

    Italic is reported as an empty string since its delimiter is still
    being chosen. Edge whitespace is written outside the delimiters.
    """
    body = pieces[index].body
    edge = body[-1:] if last else body[:1]
    outer = _outer_mark(pieces, index, last=last)
    if outer is None or edge.isspace():
        return edge
    if outer is Mark.ITALIC:
        return ""
    return _MARK_DELIMITERS[outer][0]


def _touches_underscore(pieces: list[_Piece], italic: int, neighbour: int) -> bool:
    """Whether an ``_`` at the italic piece's edge would touch the neighbour badly."""
    last = neighbour < italic
    outside = _edge_char(pieces, neighbour, last=last)
    if outside.isalnum():
        return True
    inside = _edge_char(pieces, italic, last=not last)
    return outside == "_" and inside == ""


__all__ = ["MarkdownRenderer", "RenderContext", "RenderRule"]
