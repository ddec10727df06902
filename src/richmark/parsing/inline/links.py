"""Link and image parsing for the richmark parser.

Handles inline links ``[text](href)`` and images ``![alt](src "title")``.
Destinations may contain balanced parentheses; backslash escapes work in
destinations and titles. Reference links are not supported.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from richmark.nodes import Image, Inline, Link, Mark
from richmark.parsing.inline.core import find_code_span_close, merge_text, run_length

if TYPE_CHECKING:
    from richmark.location import SourceLocation


# Pattern to find backslash escapes
_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")

# Trailing image title: src "title"
_TITLE_PATTERN = re.compile(r'^(?P<src>\S*)\s+"(?P<title>.*)"$', re.DOTALL)


def _process_escapes(text: str) -> str:
    """Process backslash escapes in link URLs and titles.

    A backslash followed by ASCII punctuation is replaced with the literal char.
    """
    return _ESCAPE_PATTERN.sub(r"\1", text)


def _find_closing_bracket(text: str, start: int) -> int:
    """Find closing bracket ] while respecting code spans and nested brackets.

    Args:
        text: Full text to search
        start: Position to start searching (should be after opening [)

    Returns:
        Position of closing ] or -1 if not found

    """
    pos = start
    text_len = len(text)
    bracket_depth = 0

    while pos < text_len:
        char = text[pos]

        if char == "`":
            count = run_length(text, pos)
            close = find_code_span_close(text, pos + count, count)
            pos = close + count if close != -1 else pos + count
            continue

        if char == "\\":
            pos += 2
            continue

        if char == "[":
            bracket_depth += 1
        elif char == "]":
            if bracket_depth == 0:
                return pos
            bracket_depth -= 1
        pos += 1

    return -1


def _find_closing_paren(text: str, start: int) -> int:
    """Find the ``)`` closing a destination that starts at ``start``.

    Nested parentheses must balance; escaped ones do not count.
    Returns -1 if the destination is unterminated.
    """
    pos = start
    text_len = len(text)
    depth = 0

    while pos < text_len:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "\n":
            return -1
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                return pos
            depth -= 1
        pos += 1

    return -1


def _parse_destination(text: str, bracket_pos: int) -> tuple[str, int] | None:
    """Parse ``(destination)`` right after the closing bracket.

    Returns (raw destination, end_pos) or None if there is none.
    """
    if bracket_pos + 1 >= len(text) or text[bracket_pos + 1] != "(":
        return None
    close = _find_closing_paren(text, bracket_pos + 2)
    if close == -1:
        return None
    return text[bracket_pos + 2 : close].strip(), close + 1


class LinkParsingMixin:
    """Mixin for link and image parsing.

    Required Host Methods:
        - _scan_inline(text, marks, location, images, in_link) -> list[Inline | Image]

    """

    def _try_parse_link(
        self, text: str, pos: int, marks: tuple[Mark, ...], location: SourceLocation
    ) -> tuple[list[Inline], int] | None:
        """Try to parse a link at position.

        The link text is parsed with the active marks, without nested links
        or hashtags. A link with an empty href degrades to its text.

        Returns (nodes, new_position) or None if not a link.
        """
        bracket_pos = _find_closing_bracket(text, pos + 1)
        if bracket_pos == -1:
            return None

        destination = _parse_destination(text, bracket_pos)
        if destination is None:
            return None
        raw_href, end_pos = destination

        children = merge_text(
            self._scan_inline(
                text[pos + 1 : bracket_pos], marks, location, images=False, in_link=True
            )
        )
        href = _process_escapes(raw_href)
        if not href:
            return list(children), end_pos  # type: ignore[arg-type]

        link = Link(location=location, href=href, children=children)  # type: ignore[arg-type]
        return [link], end_pos

    def _try_parse_image(
        self, text: str, pos: int, location: SourceLocation
    ) -> tuple[Image | None, int] | None:
        """Try to parse an image at position.

        Returns (Image, new_position), (None, new_position) when the image has
        no source and is dropped, or None if not an image.
        """
        if not text.startswith("![", pos):
            return None

        bracket_pos = _find_closing_bracket(text, pos + 2)
        if bracket_pos == -1:
            return None

        destination = _parse_destination(text, bracket_pos)
        if destination is None:
            return None
        raw_target, end_pos = destination

        title: str | None = None
        match = _TITLE_PATTERN.match(raw_target)
        if match:
            raw_target = match.group("src")
            title = _process_escapes(match.group("title"))

        src = _process_escapes(raw_target)
        if not src:
            return None, end_pos

        alt = _process_escapes(text[pos + 2 : bracket_pos])
        return Image(location=location, src=src, alt=alt, title=title), end_pos

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


__all__ = ["LinkParsingMixin"]
