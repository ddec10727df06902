"""Emphasis parsing for the richmark parser.

Mark delimiters are matched by searching forward for a closer and then
parsing the enclosed text recursively with the mark added. Delimiters are
tried longest first: ``**`` bold, ``__`` underlined, ``~~`` deleted,
``++`` inserted, then ``*`` / ``_`` italic.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from richmark.nodes import Image, Inline, Mark
from richmark.parsing.charsets import WHITESPACE
from richmark.parsing.inline.core import find_code_span_close, run_length

if TYPE_CHECKING:
    from richmark.location import SourceLocation

# Longest first, so "**" wins over "*"
_DELIMITERS: tuple[tuple[str, Mark], ...] = (
    ("**", Mark.BOLD),
    ("__", Mark.UNDERLINED),
    ("~~", Mark.DELETED),
    ("++", Mark.INSERTED),
    ("*", Mark.ITALIC),
    ("_", Mark.ITALIC),
)


class EmphasisMixin:
    """Mixin for mark delimiter matching.

    Required Host Attributes: None

    Required Host Methods:
        - _scan_inline(text, marks, location, images, in_link) -> list[Inline | Image]

    """

    def _try_parse_emphasis(
        self,
        text: str,
        pos: int,
        marks: tuple[Mark, ...],
        location: SourceLocation,
        *,
        images: bool,
        in_link: bool,
    ) -> tuple[list[Inline | Image], int] | None:
        """Try to parse a delimited span at ``pos``.

        A mark that is already active is never reopened, so ``*a *b* c*``
        keeps the inner stars literal.

        Returns (nodes, new_position) or None if no delimiter matches.
        """
        text_len = len(text)
        for delim, mark in _DELIMITERS:
            if mark in marks or not text.startswith(delim, pos):
                continue

            start = pos + len(delim)
            if start >= text_len or text[start] in WHITESPACE:
                continue
            # Intraword underscores never open
            if delim == "_" and pos > 0 and text[pos - 1].isalnum():
                continue

            close = self._find_closer(text, start, delim)
            if close == -1:
                continue

            inner = self._scan_inline(
                text[start:close],
                (*marks, mark),
                location,
                images=images,
                in_link=in_link,
            )
            return inner, close + len(delim)

        return None

    def _find_closer(self, text: str, start: int, delim: str) -> int:
        """Find the closing delimiter for a span opened before ``start``.

        Escapes and code spans are skipped. Within a run of ``k`` delimiter
        chars the closer sits at the end of the run, so ``***x***`` closes
        bold at the last two stars and leaves ``*x*`` inside. A single-char
        delimiter never closes on a run of exactly two.

        Returns the closer index, or -1 if there is none.
        """
        length = len(delim)
        char = delim[0]
        text_len = len(text)
        pos = start

        while pos < text_len:
            c = text[pos]

            if c == "\\":
                pos += 2
                continue

            if c == "`":
                count = run_length(text, pos)
                close = find_code_span_close(text, pos + count, count)
                pos = close + count if close != -1 else pos + count
                continue

            if c != char:
                pos += 1
                continue

            count = run_length(text, pos)
            if length == 1:
                candidate = pos + count - 1 if count != 2 else -1
            else:
                candidate = pos + count - length if count >= length else -1

            if (
                candidate > start
                and text[candidate - 1] not in WHITESPACE
                and not (
                    delim == "_"
                    and candidate + 1 < text_len
                    and text[candidate + 1].isalnum()
                )
            ):
                return candidate

            pos += count

        return -1

    def _scan_inline(
        self,
        text: str,
        marks: tuple[Mark, ...],
        location: SourceLocation,
        *,
        images: bool,
        in_link: bool,
    ) -> list[Inline | Image]:
        raise NotImplementedError
