"""Tests for escape_markdown and encode_url."""

from __future__ import annotations

import pytest

from richmark import escape, parse
from richmark.nodes import Paragraph, Text
from richmark.utils.text import encode_url, escape_markdown


class TestEscapeRules:
    """Each escaping rule in isolation."""

    def test_headings(self) -> None:
        assert escape_markdown("# text") == "\\# text"

    def test_unordered_list_items(self) -> None:
        assert escape_markdown("- text") == "\\- text"
        assert escape_markdown("* text") == "\\* text"
        assert escape_markdown("+ text") == "\\+ text"

    def test_bold(self) -> None:
        assert escape_markdown("this is **not bold**") == "this is \\*\\*not bold\\*\\*"

    def test_italic(self) -> None:
        assert escape_markdown("this is *not italic*") == "this is \\*not italic\\*"
        assert escape_markdown("snake_case") == "snake\\_case"

    def test_hash_before_space_only(self) -> None:
        assert escape_markdown("this not a # hashtag") == "this not a \\# hashtag"
        assert escape_markdown("this is a #hashtag") == "this is a #hashtag"

    def test_links(self) -> None:
        assert escape_markdown("this is [not](a link)") == "this is \\[not\\]\\(a link\\)"

    def test_images(self) -> None:
        assert (
            escape_markdown("this is ![not](an image)")
            == "this is \\!\\[not\\]\\(an image\\)"
        )

    def test_exclamation_points_untouched(self) -> None:
        assert escape_markdown("do not escape!") == "do not escape!"

    def test_ordered_list_items(self) -> None:
        assert escape_markdown(" 1a. item.") == " 1a\\. item."
        assert escape_markdown("1. item") == "1\\. item"

    def test_blockquotes(self) -> None:
        assert escape_markdown(" > quote") == " \\> quote"
        assert escape_markdown("a > b") == "a > b"

    def test_urls_untouched(self) -> None:
        url = "https://github.com/slate-md-serializer"
        assert escape_markdown(url) == url

    def test_html_untouched(self) -> None:
        assert escape_markdown("<br>") == "<br>"

    def test_backslashes_first(self) -> None:
        assert escape_markdown("back\\slash") == "back\\\\slash"
        assert escape_markdown("\\*") == "\\\\\\*"

    def test_braces_and_backticks(self) -> None:
        assert escape_markdown("{`x`}") == "\\{\\`x\\`\\}"

    def test_doubled_mark_characters(self) -> None:
        assert escape_markdown("a ~~b~~") == "a \\~\\~b\\~\\~"
        assert escape_markdown("a ++b++") == "a \\+\\+b\\+\\+"
        assert escape_markdown("a ~ b + c") == "a ~ b + c"

    def test_equals_line(self) -> None:
        assert escape_markdown("===") == "\\==="
        assert escape_markdown("a\n = = =") == "a\n \\= = ="
        assert escape_markdown("a == b") == "a == b"

    def test_table_delimiter_row(self) -> None:
        assert escape_markdown("a | b\n:--|--:") == "a | b\n:\\--|--:"
        assert escape_markdown("|---|") == "|\\---|"
        assert escape_markdown("a | b") == "a | b"
        assert escape_markdown("key: value") == "key: value"
        assert escape_markdown("| : |") == "| : |"

    def test_every_line_start(self) -> None:
        assert escape_markdown("one\n- two\n> three") == "one\n\\- two\n\\> three"

    def test_not_idempotent(self) -> None:
        once = escape_markdown("*")
        assert escape_markdown(once) != once


class TestLineStart:
    """Leaves that continue a line skip the line-start rules at their start."""

    @pytest.mark.parametrize("text", ["- a", "+ a", "> a", "1. a"])
    def test_start_of_text_skipped(self, text: str) -> None:
        assert escape_markdown(text, line_start=False) == text

    def test_later_lines_still_escaped(self) -> None:
        assert escape_markdown("-a\n-b", line_start=False) == "-a\n\\-b"

    def test_later_delimiter_lines_still_escaped(self) -> None:
        assert escape_markdown("===\n===", line_start=False) == "===\n\\==="
        assert escape_markdown("|-|\n|-|", line_start=False) == "|-|\n|\\-|"

    def test_other_rules_unaffected(self) -> None:
        assert escape_markdown("# a *b*", line_start=False) == "\\# a \\*b\\*"


class TestEscapeInverse:
    """Escaped text parses back to the literal text."""

    @pytest.mark.parametrize(
        "text",
        [
            "# text",
            "- text",
            "* text",
            "1. text",
            "> text",
            "this is **not bold**",
            "this is [not](a link)",
            "this is ![not](an image)",
            "back\\slash",
            "a ~~b~~ c ++d++",
            "under_score and {braces}",
            "===",
            "a\n===",
            "a | b\n|---|---|",
            "a | b\n:--|--:",
            "| a |\n| - |",
        ],
    )
    def test_parses_back(self, text: str) -> None:
        doc = parse(escape(text))
        assert doc.children == (Paragraph(children=(Text(text),)),)


class TestEncodeUrl:
    """Link and image targets are percent-encoded."""

    def test_spaces(self) -> None:
        assert encode_url("http://example.com/a b") == "http://example.com/a%20b"

    def test_already_encoded(self) -> None:
        url = "http://example.com/a%20b?x=%28y%29"
        assert encode_url(url) == url

    def test_lone_percent(self) -> None:
        url = "https://example.com/app/kibana#/visualize/edit/Requests-%"
        assert encode_url(url) == url

    def test_reserved_characters_kept(self) -> None:
        url = "https://example.com/p?a=1&b=!f,(x):*;@$'+~"
        assert encode_url(url) == url

    def test_non_ascii(self) -> None:
        assert encode_url("http://example.com/café") == "http://example.com/caf%C3%A9"
