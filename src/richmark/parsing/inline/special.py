"""Special inline parsing for the richmark parser.

Handles hashtags: ``#tag`` at the start of the text or after a non-word
character, followed by a word character other than ``_``. The tag runs up
to whitespace, ``-``, or a markup character.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from richmark.nodes import Hashtag, Mark, Text
from richmark.parsing.charsets import HASHTAG_TERMINATORS, WHITESPACE

if TYPE_CHECKING:
    from richmark.location import SourceLocation


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


class SpecialInlineMixin:
    """Mixin for hashtag parsing.

    Required Host Attributes: None

    Required Host Methods: None

    """

    def _try_parse_hashtag(
        self, text: str, pos: int, marks: tuple[Mark, ...], location: SourceLocation
    ) -> tuple[Hashtag, int] | None:
        """Try to parse a hashtag at position.

        The tag text keeps its ``#`` and the active marks.

        Returns (Hashtag, new_position) or None if not a hashtag.
        """
        if pos > 0 and _is_word_char(text[pos - 1]):
            return None

        end = pos + 1
        text_len = len(text)
        if end >= text_len or not text[end].isalnum():
            return None

        while (
            end < text_len
            and text[end] not in WHITESPACE
            and text[end] not in HASHTAG_TERMINATORS
        ):
            end += 1

        tag = Text(location=location, text=text[pos:end], marks=marks)
        return Hashtag(location=location, children=(tag,)), end
