"""Core inline parsing for the richmark parser.

Inline text is scanned left to right with the tuple of marks active at the
current position. Delimited spans recurse into their content with the span's
mark appended, so every Text leaf carries the full, outermost-first mark
tuple of its position.

Thread Safety:
All methods are stateless or use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from richmark.nodes import Image, Inline, Mark, Text
from richmark.parsing.charsets import ASCII_PUNCTUATION, DELIMITER_CHARS

if TYPE_CHECKING:
    from richmark.location import SourceLocation


def merge_text(nodes: list[Inline | Image]) -> tuple[Inline | Image, ...]:
    """Merge adjacent Text leaves that carry the same marks.

    Spans like ``*a*_b_`` parse to two leaves with equal marks; one leaf
    is the canonical form.
    """
    merged: list[Inline | Image] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.text:
                continue
            prev = merged[-1] if merged else None
            if isinstance(prev, Text) and prev.marks == node.marks:
                merged[-1] = Text(
                    location=prev.location, text=prev.text + node.text, marks=prev.marks
                )
                continue
        merged.append(node)
    return tuple(merged)


def find_code_span_close(text: str, start: int, backtick_count: int) -> int:
    """Find a closing backtick run of exactly ``backtick_count``.

    Returns the index of the run, or -1 if there is none.
    """
    pos = start
    text_len = len(text)
    while True:
        pos = text.find("`", pos)
        if pos == -1:
            return -1
        end = pos
        while end < text_len and text[end] == "`":
            end += 1
        if end - pos == backtick_count:
            return pos
        pos = end


def run_length(text: str, pos: int) -> int:
    """Length of the run of ``text[pos]`` starting at ``pos``."""
    char = text[pos]
    end = pos
    text_len = len(text)
    while end < text_len and text[end] == char:
        end += 1
    return end - pos


class InlineParsingCoreMixin:
    """Core inline parsing methods.

    Required Host Attributes:
        - _hashtags_enabled: bool

    Required Host Methods (from other mixins):
        - _try_parse_emphasis(text, pos, marks, location, images, in_link) -> tuple | None
        - _try_parse_link(text, pos, marks, location) -> tuple | None
        - _try_parse_image(text, pos, location) -> tuple | None
        - _try_parse_hashtag(text, pos, marks, location) -> tuple | None

    """

    def _parse_inline(
        self, text: str, location: SourceLocation, *, images: bool = True
    ) -> tuple[Inline | Image, ...]:
        """Parse inline content into nodes.

        Args:
            text: Inline source (may span several lines)
            location: Location of the enclosing block
            images: Whether ``![alt](src)`` yields Image nodes. Only blocks
                that can lift images out (paragraphs, list items) enable it.
        """
        if not text:
            return ()
        return merge_text(self._scan_inline(text, (), location, images=images, in_link=False))

    def _scan_inline(
        self,
        text: str,
        marks: tuple[Mark, ...],
        location: SourceLocation,
        *,
        images: bool,
        in_link: bool,
    ) -> list[Inline | Image]:
        """Scan ``text`` with ``marks`` active, returning unmerged nodes."""
        nodes: list[Inline | Image] = []
        buffer: list[str] = []
        pos = 0
        text_len = len(text)

        def flush() -> None:
            if buffer:
                nodes.append(Text(location=location, text="".join(buffer), marks=marks))
                buffer.clear()

        while pos < text_len:
            char = text[pos]

            if char == "\\" and pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
                buffer.append(text[pos + 1])
                pos += 2
                continue

            # Code span: handle first so delimiters inside stay literal
            if char == "`":
                span = self._try_parse_code_span(text, pos)
                if span is None:
                    count = run_length(text, pos)
                    buffer.append(text[pos : pos + count])
                    pos += count
                    continue
                code, pos = span
                flush()
                nodes.append(Text(location=location, text=code, marks=(*marks, Mark.CODE)))
                continue

            if char == "!" and images and not in_link:
                image = self._try_parse_image(text, pos, location)
                if image is not None:
                    node, pos = image
                    flush()
                    if node is not None:
                        nodes.append(node)
                    continue

            if char == "[" and not in_link:
                link = self._try_parse_link(text, pos, marks, location)
                if link is not None:
                    link_nodes, pos = link
                    flush()
                    nodes.extend(link_nodes)
                    continue

            if char in DELIMITER_CHARS:
                span = self._try_parse_emphasis(
                    text, pos, marks, location, images=images, in_link=in_link
                )
                if span is None:
                    # Unmatched run stays literal as a whole
                    count = run_length(text, pos)
                    buffer.append(text[pos : pos + count])
                    pos += count
                    continue
                inner, pos = span
                flush()
                nodes.extend(inner)
                continue

            if char == "#" and not in_link and self._hashtags_enabled:
                tag = self._try_parse_hashtag(text, pos, marks, location)
                if tag is not None:
                    hashtag, pos = tag
                    flush()
                    nodes.append(hashtag)
                    continue

            buffer.append(char)
            pos += 1

        flush()
        return nodes

    def _try_parse_code_span(self, text: str, pos: int) -> tuple[str, int] | None:
        """Try to parse a code span at ``pos``.

        One surrounding space is stripped from each side only when the
        content starts or ends with a backtick, which is how the renderer
        pads such content.

        Returns (code, new_position) or None if the run is unclosed.
        """
        count = run_length(text, pos)
        start = pos + count
        close = find_code_span_close(text, start, count)
        if close == -1:
            return None

        code = text[start:close]
        if (
            len(code) > 2
            and code[0] == " "
            and code[-1] == " "
            and (code[1] == "`" or code[-2] == "`")
        ):
            code = code[1:-1]
        return code, close + count


__all__ = ["InlineParsingCoreMixin", "find_code_span_close", "merge_text", "run_length"]
