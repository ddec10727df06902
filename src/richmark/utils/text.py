"""Text processing utilities for richmark.

Provides the Markdown escaper applied to literal text leaves and the URL
encoder applied to link and image targets.

Example:
    >>> from richmark.utils.text import escape_markdown
    >>> escape_markdown("# not a heading")
    '\\\\# not a heading'
"""

from __future__ import annotations

import re
from urllib.parse import quote as url_quote

# Rules run in this order; each sees the output of the previous one.
_DOUBLED_MARK = re.compile(r"\+\+|~~")
_HASH_BEFORE_SPACE = re.compile(r"(#\s)")

# Line-start rules, as (pattern at any line start, pattern after a newline only)
_PERIOD_AFTER_WORD = (
    re.compile(r"^([ \t]*\w+)\.", re.MULTILINE),
    re.compile(r"(?<=\n)([ \t]*\w+)\."),
)
_LEADING_QUOTE = (
    re.compile(r"^([ \t]*)>", re.MULTILINE),
    re.compile(r"(?<=\n)([ \t]*)>"),
)
_LEADING_LIST_DASH = (
    re.compile(r"^([ \t]*)([-+])", re.MULTILINE),
    re.compile(r"(?<=\n)([ \t]*)([-+])"),
)
_EQUALS_LINE = (
    re.compile(r"^([ \t]*)(?=(?:=[ \t]*){3,}$)", re.MULTILINE),
    re.compile(r"(?<=\n)([ \t]*)(?=(?:=[ \t]*){3,}$)", re.MULTILINE),
)
_TABLE_DELIMITER_DASH = (
    re.compile(r"^([ \t:|]*)-(?=[-:| \t]*$)", re.MULTILINE),
    re.compile(r"(?<=\n)([ \t:|]*)-(?=[-:| \t]*$)", re.MULTILINE),
)
_IMAGE_SYNTAX = re.compile(r"!\[(.*)\]\((.*)\)")
_LINK_SYNTAX = re.compile(r"\[(.*)\]\((.*)\)")
_MARKUP_CHARS = re.compile(r"([`*{}\[\]_])")

# Characters left alone when percent-encoding URLs ('%' keeps encoded input intact)
_URL_SAFE = "/:?#[]@!$&'()*+,;=-_.~%"


def escape_markdown(text: str, *, line_start: bool = True) -> str:
    """Escape Markdown syntax in literal text.

    Applied by the renderer to text leaves outside code. Not idempotent:
    escaping twice escapes the backslashes of the first pass.

    Rules marked "at a line start" look at the start of every line in
    ``text``. With ``line_start=False`` the start of ``text`` itself does
    not count, for leaves that continue a line after other inline content.

    Rules, in order:

    1. ``\\`` becomes ``\\\\``
    2. ``++`` and ``~~`` get both characters escaped
    3. ``word.`` at a line start gets its period escaped (ordered lists)
    4. ``#`` followed by whitespace is escaped (``#tag`` is left alone)
    5. ``>`` at a line start is escaped
    6. ``-`` or ``+`` at a line start is escaped
    7. A line of three or more ``=`` gets its first ``=`` escaped
    8. The first ``-`` of a line that could be a table delimiter row is
       escaped
    9. ``![alt](url)`` gets its ``!`` escaped
    10. ``[text](url)`` gets its parentheses escaped
    11. Any remaining backtick, ``*``, ``{``, ``}``, ``[``, ``]``, ``_`` is escaped

    Args:
        text: Literal text
        line_start: Whether ``text`` begins at the start of a line

    Returns:
        Text that parses back to the same literal string

    Examples:
        >>> escape_markdown("this is **not bold**")
        'this is \\\\*\\\\*not bold\\\\*\\\\*'
        >>> escape_markdown("this is a #hashtag")
        'this is a #hashtag'
    """
    variant = 0 if line_start else 1
    result = text.replace("\\", "\\\\")
    result = _DOUBLED_MARK.sub(lambda m: f"\\{m[0][0]}\\{m[0][1]}", result)
    result = _PERIOD_AFTER_WORD[variant].sub(r"\1\\.", result)
    result = _HASH_BEFORE_SPACE.sub(r"\\\1", result)
    result = _LEADING_QUOTE[variant].sub(r"\1\\>", result)
    result = _LEADING_LIST_DASH[variant].sub(r"\1\\\2", result)
    result = _EQUALS_LINE[variant].sub(r"\1\\", result)
    result = _TABLE_DELIMITER_DASH[variant].sub(r"\1\\-", result)
    result = _IMAGE_SYNTAX.sub(r"\\![\1](\2)", result)
    result = _LINK_SYNTAX.sub(r"[\1]\\(\2\\)", result)
    return _MARKUP_CHARS.sub(r"\\\1", result)


def encode_url(url: str) -> str:
    """Percent-encode a link or image target.

    Spaces, backslashes and non-ASCII characters are encoded. ``%`` is
    treated as safe, so already-encoded URLs pass through unchanged.

    Examples:
        >>> encode_url("http://example.com/a b")
        'http://example.com/a%20b'
        >>> encode_url("http://example.com/a%20b")
        'http://example.com/a%20b'
    """
    return url_quote(url, safe=_URL_SAFE)
