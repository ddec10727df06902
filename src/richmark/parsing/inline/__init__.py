"""Inline parsing subsystem for the richmark parser.

Provides mixins for parsing inline Markdown content:
- Marks (**, __, ~~, ++, *, _)
- Code spans (`)
- Links and images
- Hashtags (#tag)

Architecture:
A recursive left-to-right scan. Each delimited span is parsed with its mark
appended to the active mark tuple, so leaves come out with their full,
outermost-first marks and no formatting nodes are built.

"""

from __future__ import annotations

from richmark.parsing.inline.core import InlineParsingCoreMixin
from richmark.parsing.inline.emphasis import EmphasisMixin
from richmark.parsing.inline.links import LinkParsingMixin
from richmark.parsing.inline.special import SpecialInlineMixin


class InlineParsingMixin(
    InlineParsingCoreMixin,
    EmphasisMixin,
    LinkParsingMixin,
    SpecialInlineMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _hashtags_enabled: bool

    """

    pass


__all__ = [
    "InlineParsingMixin",
    "InlineParsingCoreMixin",
    "EmphasisMixin",
    "LinkParsingMixin",
    "SpecialInlineMixin",
]
