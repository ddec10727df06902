"""StringBuilder for Markdown output.

Collects fragments in a list and joins them once, so rendering a document
is linear in its output size. Block rules that prefix every line (quotes,
nested lists) go through ``append_prefixed`` instead of splitting and
re-joining strings themselves.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations

from collections.abc import Iterable


class StringBuilder:
    """Line-aware string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("# ").append_line("Title")
            >>> sb.append_prefixed("a\\n\\nb", "> ", blank=">")
            >>> sb.build()
            '# Title\\n> a\\n>\\n> b\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string; empty strings are skipped."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def append_prefixed(self, text: str, prefix: str, *, blank: str = "") -> StringBuilder:
        """Append every line of ``text`` behind ``prefix``.

        Each line ends with a newline. Empty lines are written as ``blank``
        so that no trailing whitespace is produced.

        Args:
            text: Lines to append, without a final newline
            prefix: Written before each non-empty line
            blank: Written in place of an empty line

        Returns:
            self for method chaining
        """
        for line in text.split("\n"):
            self._parts.append(f"{prefix}{line}" if line else blank)
            self._parts.append("\n")
        return self

    def extend(self, strings: Iterable[str]) -> StringBuilder:
        """Append multiple strings at once, skipping empty ones."""
        self._parts.extend(s for s in strings if s)
        return self

    def build(self) -> str:
        return "".join(self._parts)
