"""Block-level line classifiers for the richmark lexer.

Each classifier is a mixin that provides classification logic for
a specific block type. Classifiers look at one line and never move the
lexer position.
"""

from richmark.lexer.classifiers.fence import FenceClassifierMixin
from richmark.lexer.classifiers.heading import HeadingClassifierMixin
from richmark.lexer.classifiers.list import ListClassifierMixin
from richmark.lexer.classifiers.quote import QuoteClassifierMixin
from richmark.lexer.classifiers.thematic import ThematicClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
    "QuoteClassifierMixin",
    "ThematicClassifierMixin",
]
