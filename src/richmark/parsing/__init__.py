"""Parsing subsystem for the richmark Markdown parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Inline content (marks, links, code spans, hashtags)
- `BlockParsingMixin`: Block-level content (paragraphs, lists, code blocks)

Architecture:
The parser uses a mixin-based design for separation of concerns.
Each mixin handles one aspect of the Markdown grammar.

Example:
    >>> from richmark.parsing import (
    ...     TokenNavigationMixin,
    ...     InlineParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from richmark.parsing.blocks import BlockParsingMixin
from richmark.parsing.inline import InlineParsingMixin
from richmark.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "InlineParsingMixin",
    "BlockParsingMixin",
]
