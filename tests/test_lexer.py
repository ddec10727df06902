"""Tests for the line-classifying lexer."""

from __future__ import annotations

import pytest

from richmark.lexer import Lexer, LexerMode
from richmark.tokens import Token, TokenType


def tokens(source: str, **kwargs: object) -> list[Token]:
    """Tokenize without the trailing EOF."""
    result = list(Lexer(source, **kwargs).tokenize())  # type: ignore[arg-type]
    assert result[-1].type == TokenType.EOF
    return result[:-1]


def types(source: str, **kwargs: object) -> list[TokenType]:
    return [t.type for t in tokens(source, **kwargs)]


class TestHeadings:
    @pytest.mark.parametrize("level", range(1, 7))
    def test_levels(self, level: int) -> None:
        (token,) = tokens("#" * level + " Heading")
        assert token.type == TokenType.ATX_HEADING
        assert token.marker == "#" * level
        assert token.value == "Heading"

    @pytest.mark.parametrize("source", ["#", "#tag", "####### seven"])
    def test_not_headings(self, source: str) -> None:
        assert types(source) == [TokenType.PARAGRAPH_LINE]

    def test_closing_sequence_removed(self) -> None:
        (token,) = tokens("## Title ##")
        assert token.value == "Title"

    def test_closing_sequence_needs_space(self) -> None:
        (token,) = tokens("# C#")
        assert token.value == "C#"


class TestThematicBreaks:
    @pytest.mark.parametrize("source", ["---", "***", "___", "===", "- - -", "-----  "])
    def test_breaks(self, source: str) -> None:
        assert types(source) == [TokenType.THEMATIC_BREAK]

    def test_not_after_paragraph_line(self) -> None:
        assert types("not a heading\n---") == [TokenType.PARAGRAPH_LINE] * 2
        assert types("not a heading\n===") == [TokenType.PARAGRAPH_LINE] * 2

    def test_after_blank_line(self) -> None:
        assert types("text\n\n---") == [
            TokenType.PARAGRAPH_LINE,
            TokenType.BLANK_LINE,
            TokenType.THEMATIC_BREAK,
        ]


class TestFencedCode:
    def test_backtick_fence(self) -> None:
        result = tokens("```python\ncode\n```")
        assert [t.type for t in result] == [
            TokenType.FENCED_CODE_START,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_END,
        ]
        assert result[0].value == "python"
        assert result[0].marker == "```"
        assert result[1].value == "code"

    def test_tilde_fence(self) -> None:
        assert types("~~~\ncode\n~~~") == [
            TokenType.FENCED_CODE_START,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_END,
        ]

    def test_closing_fence_at_least_as_long(self) -> None:
        result = tokens("````\nx\n```\n````")
        assert [t.value for t in result[1:3]] == ["x", "```"]
        assert result[3].type == TokenType.FENCED_CODE_END

    def test_content_is_verbatim(self) -> None:
        result = tokens("```\n# not a heading\n  - not a list\n```")
        assert [t.value for t in result[1:3]] == ["# not a heading", "  - not a list"]

    def test_unclosed_fence_runs_to_end(self) -> None:
        assert types("```\ncode") == [
            TokenType.FENCED_CODE_START,
            TokenType.FENCED_CODE_CONTENT,
        ]

    def test_state_reset_after_close(self) -> None:
        lexer = Lexer("```python\ncode\n```")
        list(lexer.tokenize())
        assert lexer._mode == LexerMode.BLOCK
        assert lexer._fence_char == ""
        assert lexer._fence_count == 0


class TestIndentedCode:
    def test_spaces(self) -> None:
        (token,) = tokens("    code")
        assert token.type == TokenType.INDENTED_CODE
        assert token.value == "code"

    def test_tab(self) -> None:
        (token,) = tokens("\tcode")
        assert token.type == TokenType.INDENTED_CODE
        assert token.value == "code"

    def test_extra_indent_kept(self) -> None:
        (token,) = tokens("      return x")
        assert token.value == "  return x"

    def test_cannot_interrupt_paragraph(self) -> None:
        assert types("text\n    more") == [TokenType.PARAGRAPH_LINE] * 2


class TestBlockQuotes:
    def test_marker_and_space_removed(self) -> None:
        (token,) = tokens("> this is a quote")
        assert token.type == TokenType.BLOCK_QUOTE_LINE
        assert token.value == "this is a quote"

    def test_lone_marker(self) -> None:
        (token,) = tokens(">")
        assert token.type == TokenType.BLOCK_QUOTE_LINE
        assert token.value == ""

    def test_nested_marker_kept(self) -> None:
        (token,) = tokens("> > inner")
        assert token.value == "> inner"


class TestListItems:
    @pytest.mark.parametrize(
        ("source", "marker", "value"),
        [
            ("- one", "-", "one"),
            ("* one", "*", "one"),
            ("1. one", "1.", "one"),
            ("12. one", "12.", "one"),
            ("[ ] todo", "[ ]", "todo"),
            ("[x] done", "[x]", "done"),
            ("[X] done", "[x]", "done"),
            ("- [x] done", "[x]", "done"),
            ("-", "-", ""),
        ],
    )
    def test_markers(self, source: str, marker: str, value: str) -> None:
        (token,) = tokens(source)
        assert token.type == TokenType.LIST_ITEM
        assert token.marker == marker
        assert token.value == value

    @pytest.mark.parametrize("source", ["-one", "1.one", "1) one", "[y] no", "+ plus"])
    def test_not_list_items(self, source: str) -> None:
        assert types(source) == [TokenType.PARAGRAPH_LINE]

    def test_indent_recorded(self) -> None:
        result = tokens("* one\n   * nested")
        assert [t.line_indent for t in result] == [0, 3]

    def test_deep_items_are_not_code(self) -> None:
        result = tokens("- a\n    - b\n        c")
        assert [t.type for t in result] == [
            TokenType.LIST_ITEM,
            TokenType.LIST_ITEM,
            TokenType.PARAGRAPH_LINE,
        ]
        assert result[2].line_indent == 8

    def test_todo_disabled(self) -> None:
        assert types("[ ] todo", todo_lists_enabled=False) == [TokenType.PARAGRAPH_LINE]
        (token,) = tokens("- [ ] todo", todo_lists_enabled=False)
        assert token.marker == "-"
        assert token.value == "[ ] todo"


class TestEscapedLineStarts:
    @pytest.mark.parametrize("source", ["\\# text", "\\- text", "\\* text", "\\> text", "1\\. text"])
    def test_fall_through_to_paragraph(self, source: str) -> None:
        assert types(source) == [TokenType.PARAGRAPH_LINE]


class TestLocations:
    def test_line_numbers(self) -> None:
        result = tokens("# a\n\nb")
        assert [t.lineno for t in result] == [1, 2, 3]

    def test_start_lineno(self) -> None:
        result = tokens("a\nb", start_lineno=5)
        assert [t.lineno for t in result] == [5, 6]

    def test_token_location(self) -> None:
        (token,) = tokens("  - item", source_file="notes.md")
        loc = token.location
        assert (loc.lineno, loc.col_offset, loc.source_file) == (1, 3, "notes.md")

    def test_crlf_normalised(self) -> None:
        result = tokens("a\r\nb\rc")
        assert [t.value for t in result] == ["a", "b", "c"]

    def test_eof_token(self) -> None:
        result = list(Lexer("").tokenize())
        assert [t.type for t in result] == [TokenType.EOF]


class TestTextTransformer:
    def test_applied_to_lines(self) -> None:
        (token,) = tokens("hello", text_transformer=str.upper)
        assert token.value == "HELLO"

    def test_not_applied_to_fenced_code(self) -> None:
        result = tokens("```\ncode\n```", text_transformer=str.upper)
        assert result[1].value == "code"


class TestTokenRepr:
    def test_long_values_truncated(self) -> None:
        token = Token(TokenType.PARAGRAPH_LINE, "x" * 30, 1)
        assert repr(token) == f"Token(PARAGRAPH_LINE, {'x' * 17 + '...'!r}, 1:0)"
