"""Tree visitor, transformer and parent lookup for richmark.

Provides a base visitor class with match-based dispatch, an immutable
transform function for rewriting frozen trees, and parent lookup helpers
(nodes hold no parent pointers).

Example: collect all hashtags:

    class TagCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.tags: list[str] = []

        def visit_hashtag(self, node: Hashtag) -> None:
            self.tags.append(extract_text(node))

    collector = TagCollector()
    collector.visit(doc)

Example: demote headings:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=min(node.level + 1, 6))
        return node

    new_doc = transform(doc, demote)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    and the parent lookups are pure, safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable, Iterator

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
    Link,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    TodoList,
)


def iter_children(node: Node) -> tuple[Node, ...]:
    """Return the direct children of a node (empty for leaves)."""
    match node:
        case (
            Document(children=children)
            | Paragraph(children=children)
            | Heading(children=children)
            | BlockQuote(children=children)
            | CodeBlock(children=children)
            | CodeLine(children=children)
            | OrderedList(children=children)
            | BulletedList(children=children)
            | TodoList(children=children)
            | ListItem(children=children)
            | Table(children=children)
            | TableRow(children=children)
            | TableCell(children=children)
            | Link(children=children)
            | Hashtag(children=children)
        ):
            return children
        case _:
            return ()


class BaseVisitor[T]:
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        for child in iter_children(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_code_line(self, node: CodeLine) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    def visit_ordered_list(self, node: OrderedList) -> T:
        return self.visit_default(node)

    def visit_bulleted_list(self, node: BulletedList) -> T:
        return self.visit_default(node)

    def visit_todo_list(self, node: TodoList) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_hashtag(self, node: Hashtag) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Heading():
                return self.visit_heading(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case CodeLine():
                return self.visit_code_line(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case OrderedList():
                return self.visit_ordered_list(node)
            case BulletedList():
                return self.visit_bulleted_list(node)
            case TodoList():
                return self.visit_todo_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case Image():
                return self.visit_image(node)
            case Text():
                return self.visit_text(node)
            case Link():
                return self.visit_link(node)
            case Hashtag():
                return self.visit_hashtag(node)
            case _:
                return self.visit_default(node)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied. The original tree
        is untouched.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    children = iter_children(node)
    if children:
        new_children = tuple(
            result for c in children if (result := _transform_node(c, fn)) is not None
        )
        if new_children != children:
            node = dataclasses.replace(node, children=new_children)  # type: ignore[call-arg]
    return fn(node)


def iter_ancestors(root: Node, node: Node) -> Iterator[Node]:
    """Yield the ancestors of ``node`` within ``root``, nearest first.

    Nodes are matched by identity, since equal subtrees can appear more
    than once in a document. Yields nothing when ``node`` is ``root`` or is
    not in the tree.

    """
    path = _find_path(root, node)
    if path is not None:
        yield from reversed(path)


def find_parent(root: Node, node: Node) -> Node | None:
    """Return the parent of ``node`` within ``root``, or None."""
    return next(iter_ancestors(root, node), None)


def _find_path(current: Node, target: Node) -> list[Node] | None:
    if current is target:
        return []
    for child in iter_children(current):
        path = _find_path(child, target)
        if path is not None:
            path.insert(0, current)
            return path
    return None


__all__ = [
    "BaseVisitor",
    "find_parent",
    "iter_ancestors",
    "iter_children",
    "transform",
]
