"""Token navigation utilities for the richmark parser.

Provides mixin for token stream navigation and lookahead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from richmark.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int
        - _current: Token | None

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def _peek_past_blanks(self) -> tuple[Token | None, int]:
        """Find the first non-blank token from the current position.

        Returns:
            (token or None, number of blank lines skipped)
        """
        offset = 0
        token = self._peek(0)
        while token is not None and token.type == TokenType.BLANK_LINE:
            offset += 1
            token = self._peek(offset)
        if token is not None and token.type == TokenType.EOF:
            token = None
        return token, offset

    def _skip(self, count: int) -> None:
        """Advance over ``count`` tokens."""
        for _ in range(count):
            self._advance()
