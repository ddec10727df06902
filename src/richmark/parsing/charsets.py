"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from richmark.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:  # O(1) lookup
        ...
"""

# Characters a backslash can escape
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# ASCII whitespace for flanking checks
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Characters that can start a mark delimiter run
DELIMITER_CHARS: frozenset[str] = frozenset("*_~+")

# Characters that end a hashtag
HASHTAG_TERMINATORS: frozenset[str] = frozenset("\\`*_~+[]()!#-")

# Valid fence characters
FENCE_CHARS: frozenset[str] = frozenset("`~")

# Bullet list marker characters
BULLET_LIST_MARKERS: frozenset[str] = frozenset("-*")

# Thematic break characters ("=" covers Setext-style rules written alone)
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_=")

# Characters allowed in a table delimiter cell
TABLE_DELIMITER_CHARS: frozenset[str] = frozenset("-: \t")
