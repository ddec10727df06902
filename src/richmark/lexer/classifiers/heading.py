"""ATX heading classifier mixin."""

from richmark.tokens import Token, TokenType


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

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

    def _try_classify_atx_heading(self, content: str, indent: int = 0) -> Token | None:
        """Try to classify content as ATX heading.

        ATX headings start with 1-6 # characters followed by a space or tab.
        A bare "#" line is not a heading. Trailing # sequences are removed if
        preceded by space.

        Args:
            content: Line content with leading whitespace stripped
            indent: Number of leading spaces (for line_indent)

        Returns:
            Token if valid heading, None otherwise.
        """
        level = 0
        pos = 0
        while pos < len(content) and content[pos] == "#" and level < 7:
            level += 1
            pos += 1

        if level == 0 or level > 6:
            return None

        # Must be followed by space or tab
        if pos >= len(content) or content[pos] not in " \t":
            return None

        heading_content = content[pos + 1 :].strip()

        # Remove trailing # sequence (if preceded by space)
        if heading_content.endswith("#"):
            trailing_start = len(heading_content)
            while trailing_start > 0 and heading_content[trailing_start - 1] == "#":
                trailing_start -= 1
            if trailing_start > 0 and heading_content[trailing_start - 1] in " \t":
                heading_content = heading_content[: trailing_start - 1].rstrip()
            elif trailing_start == 0:
                heading_content = ""

        return self._make_token(
            TokenType.ATX_HEADING, heading_content, indent=indent, marker="#" * level
        )
