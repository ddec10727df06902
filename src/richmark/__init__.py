"""
richmark: lossless Markdown for rich-text editors

Converts Markdown source into a typed, immutable rich-text tree (blocks,
links, hashtags and text leaves carrying formatting marks) and renders the
tree back to Markdown so that re-parsing gives the same tree.

Quick Start:
    >>> from richmark import parse, render
    >>> doc = parse("Some **bold** text")
    >>> doc.children[0].children[1]
    Text(text='bold', marks=(<Mark.BOLD: 'bold'>,))
    >>> render(doc)
    'Some **bold** text'

    >>> # Or use the high-level Markdown class
    >>> from richmark import Markdown
    >>> md = Markdown(hashtags=False)
    >>> md("#not-a-tag *and* more")
    '#not-a-tag _and_ more'

Editor adapters walk the tree with ``richmark.visitor`` and move it across
process boundaries with ``richmark.serialization``.
"""

from collections.abc import Iterable, Mapping

from richmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from richmark.errors import RenderError, RichmarkError
from richmark.lexer import Lexer
from richmark.location import SourceLocation
from richmark.nodes import (
    Block,
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
from richmark.parser import Parser
from richmark.renderers import ASTRenderer, MarkdownRenderer, RenderContext, RenderRule
from richmark.serialization import from_dict, from_json, to_dict, to_json
from richmark.text import extract_text
from richmark.tokens import Token, TokenType
from richmark.utils.text import escape_markdown
from richmark.visitor import BaseVisitor, find_parent, iter_ancestors, transform

__version__ = "0.1.0"

_DEFAULT_RENDERER = MarkdownRenderer()


def _build_document(source: str, source_file: str | None) -> Document:
    blocks = Parser(source, source_file=source_file).parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        end_lineno=source.count("\n") + 1,
        source_file=source_file,
    )
    return Document(location=loc, children=blocks)


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse Markdown source into a typed tree.

    Uses the parse configuration of the current context (see
    ``richmark.config``). Never raises on string input: anything that is not
    recognised markup is text.

    Args:
        source: Markdown source text
        source_file: Optional source file path, recorded in node locations

    Returns:
        Document root node

    Example:
        >>> doc = parse("# Hello **World**")
        >>> doc.children[0].level
        1
    """
    return _build_document(source, source_file)


def render(doc: Document) -> str:
    """Render a tree back to Markdown.

    Raises:
        RenderError: If the tree holds an object that is not a richmark node

    Example:
        >>> render(parse("* one\\n* two"))
        '* one\\n* two'
    """
    return _DEFAULT_RENDERER.render(doc)


def escape(text: str) -> str:
    """Escape literal text so that it re-parses as the same text.

    Example:
        >>> escape("1. not a list")
        '1\\\\. not a list'
    """
    return escape_markdown(text)


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("* one\\n\\n\\n* two")
        '* one\\n* two'

        >>> # Access the tree
        >>> doc = md.parse("# Heading")
        >>> doc.children[0].level
        1

        >>> # Plain pipes instead of tables
        >>> md = Markdown(tables=False)

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Markdown instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        tables: bool = True,
        hashtags: bool = True,
        todo_lists: bool = True,
        rules: Mapping[type[Node], RenderRule] | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            tables: Recognise pipe tables
            hashtags: Recognise #hashtags in inline text
            todo_lists: Recognise [ ] / [x] todo list items
            rules: Custom render rules by node type (see MarkdownRenderer)
        """
        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig(
            tables_enabled=tables,
            hashtags_enabled=hashtags,
            todo_lists_enabled=todo_lists,
        )
        self._renderer = MarkdownRenderer(rules=rules) if rules else _DEFAULT_RENDERER

    def __call__(self, source: str) -> str:
        """Normalise Markdown: parse it and render it back.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into a tree with this processor's config.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        set_parse_config(self._config)
        try:
            return _build_document(source, source_file)
        finally:
            reset_parse_config()

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple Markdown sources into documents.

        Sets config once, parses all, resets once.

        Example:
            >>> md = Markdown()
            >>> docs = md.parse_many(["# Doc 1", "# Doc 2", "# Doc 3"])
        """
        set_parse_config(self._config)
        try:
            return [_build_document(source, source_file) for source in sources]
        finally:
            reset_parse_config()

    def render(self, doc: Document) -> str:
        """Render a tree to Markdown with this processor's rules."""
        return self._renderer.render(doc)


# Public API organized by category
__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "escape",
    "extract_text",
    "Markdown",
    # Parser & Lexer
    "Parser",
    "Lexer",
    "Token",
    "TokenType",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "RichmarkError",
    "RenderError",
    # Renderers
    "ASTRenderer",
    "MarkdownRenderer",
    "RenderContext",
    "RenderRule",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Visitor
    "BaseVisitor",
    "transform",
    "find_parent",
    "iter_ancestors",
    # Location
    "SourceLocation",
    # Nodes
    "Node",
    "Block",
    "Inline",
    "Mark",
    "Document",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "CodeBlock",
    "CodeLine",
    "HorizontalRule",
    "ListBlock",
    "OrderedList",
    "BulletedList",
    "TodoList",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "Image",
    "Text",
    "Link",
    "Hashtag",
]
