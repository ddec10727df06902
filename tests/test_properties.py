"""Property-based tests for parsing, rendering, escaping and serialization."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from richmark import escape, parse, render
from richmark.nodes import Node, Paragraph, Text
from richmark.serialization import from_dict, from_json, to_dict, to_json
from richmark.visitor import iter_children

# Symbols are always followed by a space or the end, so "#" never starts a tag
_escape_tokens = st.one_of(
    st.from_regex(r"[a-z]{1,5}", fullmatch=True),
    st.sampled_from(
        ["#", "-", "*", "_", "[", "]", "(", ")", "\\", "`", ">", "~~", "++", "1.", "!"]
    ),
    st.sampled_from(["===", "|", ":--", "--:", "|---|"]),
)
literal_lines = st.lists(_escape_tokens, min_size=1, max_size=12).map(" ".join)
literal_blocks = st.lists(literal_lines, min_size=1, max_size=4).map("\n".join)

_SNIPPETS = [
    "# Title",
    "## Sub **bold**",
    "* item",
    "   * nested",
    "1. one",
    "[ ] todo",
    "[x] done",
    "> quote _it_",
    "---",
    "```py\nprint(1)\n```",
    "    indented",
    "plain text with #tag",
    "see [google](http://google.com) now",
    "![alt](http://x.com/i.png)",
    "| a | b |\n|---|---|\n| 1 | 2 |",
    "~~del~~ ++ins++ __under__",
    "`code`",
    "## #",
    "# Use C# ",
    "a\n\\===",
    "a | b\n:\\--|--:",
    "wow\\![a](http://x.com)",
    "__a__*b* *c*__d__",
    "~~~a`b\ncode\n~~~",
    "",
]
documents = st.lists(st.sampled_from(_SNIPPETS), min_size=1, max_size=8).map("\n".join)


def walk(node: Node):
    yield node
    for child in iter_children(node):
        yield from walk(child)


class TestTotality:
    @given(st.text())
    @settings(max_examples=300)
    def test_any_text_parses_and_renders(self, source: str) -> None:
        assert isinstance(render(parse(source)), str)

    @given(st.text(alphabet="#*_~+`[]()!>-|\\ \n\tab1.:"))
    @settings(max_examples=300)
    def test_markup_heavy_text_parses_and_renders(self, source: str) -> None:
        assert isinstance(render(parse(source)), str)


class TestTreeShape:
    @given(st.text(alphabet="#*_~+`[]()!>-|\\ \nab"))
    def test_marks_unique(self, source: str) -> None:
        for node in walk(parse(source)):
            if isinstance(node, Text):
                assert len(set(node.marks)) == len(node.marks)

    @given(st.text(alphabet="#*_~+`[]()!>-|\\ \nab"))
    def test_adjacent_leaves_differ_in_marks(self, source: str) -> None:
        for node in walk(parse(source)):
            children = iter_children(node)
            for left, right in zip(children, children[1:], strict=False):
                if isinstance(left, Text) and isinstance(right, Text):
                    assert left.marks != right.marks


class TestEscapeInverse:
    @given(literal_lines)
    def test_escaped_text_parses_back(self, text: str) -> None:
        assert parse(escape(text)).children == (Paragraph(children=(Text(text),)),)

    @given(literal_blocks)
    def test_escaped_lines_parse_back(self, text: str) -> None:
        assert parse(escape(text)).children == (Paragraph(children=(Text(text),)),)


class TestStability:
    @given(documents)
    def test_second_render_is_fixed_point(self, source: str) -> None:
        once = render(parse(source))
        assert render(parse(once)) == once

    @given(st.text(alphabet="#*_~+`[]()!>-|=:\\ \n\tab1."))
    @settings(max_examples=300)
    def test_markup_text_second_render_is_fixed_point(self, source: str) -> None:
        once = render(parse(source))
        assert render(parse(once)) == once

    @given(documents)
    def test_parse_is_deterministic(self, source: str) -> None:
        assert parse(source) == parse(source)


class TestSerializationRoundTrip:
    @given(documents)
    def test_dict_round_trip(self, source: str) -> None:
        doc = parse(source)
        assert from_dict(to_dict(doc)) == doc

    @given(st.text(alphabet="#*_~+`[]()!>-|\\ \nab"))
    def test_json_round_trip(self, source: str) -> None:
        doc = parse(source)
        restored = from_json(to_json(doc))
        assert restored == doc
        assert [n.location for n in walk(restored)] == [n.location for n in walk(doc)]
