"""Thematic break classifier mixin."""

from __future__ import annotations

from richmark.parsing.charsets import THEMATIC_BREAK_CHARS
from richmark.tokens import Token, TokenType


class ThematicClassifierMixin:
    """Mixin providing thematic break classification."""

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

    def _is_thematic_break(self, content: str) -> bool:
        """Check for 3+ of the same break character with optional spaces/tabs between."""
        if not content or content[0] not in THEMATIC_BREAK_CHARS:
            return False

        char = content[0]
        count = 0
        for c in content.rstrip():
            if c == char:
                count += 1
            elif c in " \t":
                continue
            else:
                return False
        return count >= 3

    def _try_classify_thematic_break(self, content: str, indent: int = 0) -> Token | None:
        """Try to classify content as thematic break.

        Args:
            content: Line content with leading whitespace stripped
            indent: Number of leading spaces (for line_indent)

        Returns:
            Token if valid break, None otherwise.
        """
        if not self._is_thematic_break(content):
            return None
        return self._make_token(
            TokenType.THEMATIC_BREAK, "", indent=indent, marker=content.rstrip()
        )
