"""Extract plain text from richmark nodes.

Provides a public API for extracting text content from any node type, for
previews, search indexing and editor adapters that need the visible text.

Example:
    >>> from richmark import parse, extract_text
    >>> doc = parse("# Hello **World**")
    >>> extract_text(doc.children[0])
    'Hello World'
"""

from richmark.nodes import (
    BlockQuote,
    CodeBlock,
    CodeLine,
    Document,
    Hashtag,
    Heading,
    HorizontalRule,
    Image,
    Link,
    ListBlock,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
)


def extract_text(node: Node) -> str:
    """Extract plain text from any node.

    Inline content is concatenated as is. Blocks, list items, rows and
    cells are joined with a space; code lines are joined with a newline.
    Marks are dropped and an image contributes its alt text.

    Args:
        node: Any node (block or inline).

    Returns:
        Concatenated plain text from the node and its descendants.

    """
    match node:
        case Text():
            return node.text
        case Image():
            return node.alt
        case HorizontalRule():
            return ""
        case Link() | Hashtag() | Paragraph() | Heading() | CodeLine() | TableCell():
            return "".join(extract_text(c) for c in node.children)
        case CodeBlock():
            return "\n".join(extract_text(line) for line in node.children)
        case Document() | BlockQuote() | ListBlock() | ListItem() | Table() | TableRow():
            return " ".join(
                text for c in node.children if (text := extract_text(c))
            )
        case _:
            return ""
