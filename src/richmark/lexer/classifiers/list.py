"""List marker classifier mixin.

Three marker families are recognised:

- bulleted: ``-`` or ``*``
- ordered: ``<digits>.``
- todo: ``[ ]``, ``[x]`` or ``[X]`` (also after a bullet, GFM style)

Each must be followed by whitespace or the end of the line.
"""

from __future__ import annotations

from richmark.parsing.charsets import BULLET_LIST_MARKERS
from richmark.tokens import Token, TokenType

TODO_MARKERS: frozenset[str] = frozenset({"[ ]", "[x]", "[X]"})


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    _todo_lists_enabled: bool

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        *,
        indent: int = 0,
        marker: str = "",
    ) -> Token:
        """Create token at the saved line. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_list_item(self, content: str, indent: int = 0) -> Token | None:
        """Try to classify content as a list item.

        The token marker is normalised: ``-``/``*`` for bullets, ``1.`` style
        for ordered items (digits kept), ``[ ]``/``[x]`` for todo items.

        Args:
            content: Line content with leading whitespace stripped
            indent: Number of leading spaces (nesting is decided by the parser)

        Returns:
            LIST_ITEM token, or None if the line is not a list item.
        """
        if not content:
            return None

        if self._todo_lists_enabled:
            todo = self._split_todo(content)
            if todo is not None:
                marker, rest = todo
                return self._make_token(TokenType.LIST_ITEM, rest, indent=indent, marker=marker)

        if content[0] in BULLET_LIST_MARKERS:
            rest = self._after_marker(content, 1)
            if rest is None:
                return None
            if self._todo_lists_enabled:
                todo = self._split_todo(rest)
                if todo is not None:
                    marker, rest = todo
                    return self._make_token(
                        TokenType.LIST_ITEM, rest, indent=indent, marker=marker
                    )
            return self._make_token(TokenType.LIST_ITEM, rest, indent=indent, marker=content[0])

        if content[0].isdigit():
            pos = 0
            while pos < len(content) and content[pos].isdigit():
                pos += 1
            if pos > 9 or pos >= len(content) or content[pos] != ".":
                return None
            rest = self._after_marker(content, pos + 1)
            if rest is None:
                return None
            return self._make_token(
                TokenType.LIST_ITEM, rest, indent=indent, marker=content[: pos + 1]
            )

        return None

    def _split_todo(self, content: str) -> tuple[str, str] | None:
        """Split a todo marker off content, returning (normalised marker, rest)."""
        if content[:3] not in TODO_MARKERS:
            return None
        rest = self._after_marker(content, 3)
        if rest is None:
            return None
        return ("[ ]" if content[1] == " " else "[x]"), rest

    @staticmethod
    def _after_marker(content: str, end: int) -> str | None:
        """Return the item text after a marker ending at ``end``.

        The marker must be followed by whitespace or the end of the line.
        """
        if end == len(content):
            return ""
        if content[end] not in " \t":
            return None
        rest = content[end:].lstrip(" \t")
        return rest if rest.strip() else ""
