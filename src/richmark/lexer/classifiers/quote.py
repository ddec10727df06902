"""Block quote classifier mixin."""

from richmark.tokens import Token, TokenType


class QuoteClassifierMixin:
    """Mixin providing block quote classification."""

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

    def _try_classify_block_quote(self, content: str, indent: int = 0) -> Token | None:
        """Classify a ``>`` line.

        The marker and one following space are removed; the rest of the line
        is kept verbatim so the parser can re-lex it as nested content. A lone
        ``>`` yields an empty value (an empty line inside the quote).

        Args:
            content: Line content with leading whitespace stripped
            indent: Column of the > marker
        """
        if not content.startswith(">"):
            return None

        remaining = content[1:]
        if remaining.startswith((" ", "\t")):
            remaining = remaining[1:]

        return self._make_token(
            TokenType.BLOCK_QUOTE_LINE, remaining, indent=indent, marker=">"
        )
