"""Fenced code block classifier mixin."""

from richmark.lexer.modes import LexerMode
from richmark.parsing.charsets import FENCE_CHARS
from richmark.tokens import Token, TokenType


class FenceClassifierMixin:
    """Mixin providing fenced code block classification."""

    # These will be set by the Lexer class
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _mode: LexerMode

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

    def _try_classify_fence_start(self, content: str, indent: int = 0) -> Token | None:
        """Try to classify content as fenced code start.

        Fenced code blocks start with 3+ backticks or tildes. Backtick fences
        cannot have backticks in the info string. On success the lexer
        switches to CODE_FENCE mode.

        Args:
            content: Line content with leading whitespace stripped
            indent: Number of leading spaces (stripped from content lines)

        Returns:
            Token whose value is the info string, None otherwise.
        """
        if not content or content[0] not in FENCE_CHARS:
            return None

        fence_char = content[0]
        count = 0
        while count < len(content) and content[count] == fence_char:
            count += 1

        if count < 3:
            return None

        info = content[count:].strip()
        if fence_char == "`" and "`" in info:
            return None

        self._fence_char = fence_char
        self._fence_count = count
        self._fence_indent = indent
        self._mode = LexerMode.CODE_FENCE

        return self._make_token(
            TokenType.FENCED_CODE_START, info, indent=indent, marker=fence_char * count
        )

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line closes the current code block.

        Closing fences may be indented 0-3 spaces, must use the opening
        character, be at least as long as the opening fence, and carry
        nothing but whitespace after it.
        """
        if not self._fence_char:
            return False

        stripped = line.lstrip(" ")
        if len(line) - len(stripped) >= 4:
            return False

        count = 0
        while count < len(stripped) and stripped[count] == self._fence_char:
            count += 1

        if count < self._fence_count:
            return False
        return not stripped[count:].strip()
