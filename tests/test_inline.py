"""Tests for inline parsing: marks, code spans, links, images, hashtags."""

from __future__ import annotations

import pytest

from richmark import Markdown, parse
from richmark.nodes import (
    Hashtag,
    Heading,
    Image,
    Inline,
    Link,
    Mark,
    Paragraph,
    TableCell,
    Text,
)

B, I, C = Mark.BOLD, Mark.ITALIC, Mark.CODE
D, N, U = Mark.DELETED, Mark.INSERTED, Mark.UNDERLINED


def inlines(source: str) -> tuple[Inline, ...]:
    (block,) = parse(source).children
    assert isinstance(block, Paragraph)
    return block.children


class TestMarks:
    @pytest.mark.parametrize(
        ("source", "mark"),
        [
            ("**this is bold**", B),
            ("*this is italic*", I),
            ("_this is italic_", I),
            ("~~this is strikethrough~~", D),
            ("++inserted text++", N),
            ("__underlined text__", U),
        ],
    )
    def test_single_mark(self, source: str, mark: Mark) -> None:
        (leaf,) = inlines(source)
        assert leaf == Text(source.strip("*_~+"), (mark,))

    def test_bold_inside_italic(self) -> None:
        assert inlines("nothing _italic and **bold** and_ nothing") == (
            Text("nothing "),
            Text("italic and ", (I,)),
            Text("bold", (I, B)),
            Text(" and", (I,)),
            Text(" nothing"),
        )

    def test_italic_inside_bold(self) -> None:
        assert inlines("nothing **bold and _italic_ and** nothing") == (
            Text("nothing "),
            Text("bold and ", (B,)),
            Text("italic", (B, I)),
            Text(" and", (B,)),
            Text(" nothing"),
        )

    def test_triple_star_nests(self) -> None:
        assert inlines("***both***") == (Text("both", (B, I)),)

    def test_three_marks(self) -> None:
        assert inlines("~~a **b _c_**~~") == (
            Text("a ", (D,)),
            Text("b ", (D, B)),
            Text("c", (D, B, I)),
        )

    def test_active_mark_not_reopened(self) -> None:
        assert inlines("*a *b* c*") == (Text("a *b", (I,)), Text(" c*"))

    def test_unterminated_is_literal(self) -> None:
        assert inlines("**not closed") == (Text("**not closed"),)
        assert inlines("a ~~ b") == (Text("a ~~ b"),)

    def test_opener_needs_non_space(self) -> None:
        assert inlines("a * b * c") == (Text("a * b * c"),)

    def test_closer_needs_non_space_before(self) -> None:
        assert inlines("*a *") == (Text("*a *"),)

    def test_lone_double_star_is_literal(self) -> None:
        assert inlines("a ** b") == (Text("a ** b"),)

    def test_intraword_underscore(self) -> None:
        assert inlines("snake_case_name") == (Text("snake_case_name"),)

    def test_intraword_star(self) -> None:
        assert inlines("a*b*c") == (Text("a"), Text("b", (I,)), Text("c"))

    def test_single_star_skips_double_run(self) -> None:
        assert inlines("*a **b** c*") == (
            Text("a ", (I,)),
            Text("b", (I, B)),
            Text(" c", (I,)),
        )

    def test_adjacent_spans_merge(self) -> None:
        assert inlines("*a*_b_") == (Text("ab", (I,)),)

    def test_span_across_lines(self) -> None:
        assert inlines("**a\nb**") == (Text("a\nb", (B,)),)


class TestEscapes:
    def test_escaped_marks(self) -> None:
        assert inlines("this is \\*\\*not bold\\*\\*") == (Text("this is **not bold**"),)
        assert inlines("this is \\*not italic\\*") == (Text("this is *not italic*"),)

    def test_escaped_link(self) -> None:
        assert inlines("this is \\[not\\]\\(a link\\)") == (Text("this is [not](a link)"),)

    def test_escaped_image(self) -> None:
        assert inlines("this is \\!\\[not\\]\\(an image\\)") == (
            Text("this is ![not](an image)"),
        )

    def test_backslash_before_letter_kept(self) -> None:
        assert inlines("C:\\path") == (Text("C:\\path"),)

    def test_escaped_backslash(self) -> None:
        assert inlines("a\\\\*b*") == (Text("a\\"), Text("b", (I,)))

    def test_escaped_closer_skipped(self) -> None:
        assert inlines("*a\\*b*") == (Text("a*b", (I,)),)


class TestCodeSpans:
    def test_code_mark(self) -> None:
        assert inlines("`const foo = 123;`") == (Text("const foo = 123;", (C,)),)

    def test_content_not_interpreted(self) -> None:
        assert inlines("`<script>alert('*foo*')</script>`") == (
            Text("<script>alert('*foo*')</script>", (C,)),
        )

    def test_longer_fence(self) -> None:
        assert inlines("``a`b``") == (Text("a`b", (C,)),)

    def test_padding_stripped_around_backticks(self) -> None:
        assert inlines("`` `x` ``") == (Text("`x`", (C,)),)

    def test_padding_kept_otherwise(self) -> None:
        assert inlines("` a `") == (Text(" a ", (C,)),)

    def test_unclosed_is_literal(self) -> None:
        assert inlines("a `b") == (Text("a `b"),)

    def test_code_inside_bold(self) -> None:
        assert inlines("**a `b` c**") == (
            Text("a ", (B,)),
            Text("b", (B, C)),
            Text(" c", (B,)),
        )

    def test_delimiter_inside_code_does_not_close(self) -> None:
        assert inlines("*a `*` b*") == (
            Text("a ", (I,)),
            Text("*", (I, C)),
            Text(" b", (I,)),
        )


class TestLinks:
    def test_link(self) -> None:
        assert inlines("[google](http://google.com)") == (
            Link("http://google.com", (Text("google"),)),
        )

    def test_link_within_mark(self) -> None:
        assert inlines("**[google](http://google.com)**") == (
            Link("http://google.com", (Text("google", (B,)),)),
        )

    def test_marks_inside_link(self) -> None:
        assert inlines("[a **b**](x)") == (Link("x", (Text("a "), Text("b", (B,)))),)

    def test_balanced_parentheses(self) -> None:
        assert inlines("[w](http://en.wikipedia.org/wiki/A_(b))") == (
            Link("http://en.wikipedia.org/wiki/A_(b)", (Text("w"),)),
        )

    def test_nested_brackets(self) -> None:
        assert inlines("[a [b] c](x)") == (Link("x", (Text("a [b] c"),)),)

    def test_escapes_in_href(self) -> None:
        assert inlines("[a](x\\)y)") == (Link("x)y", (Text("a"),)),)

    def test_empty_link_keeps_text(self) -> None:
        assert inlines("[empty]()") == (Text("empty"),)

    def test_no_hashtags_in_link_text(self) -> None:
        assert inlines("[#tag](x)") == (Link("x", (Text("#tag"),)),)

    def test_no_nested_links(self) -> None:
        assert inlines("[[a](b)](c)") == (Link("c", (Text("[a](b)"),)),)

    def test_not_a_link(self) -> None:
        assert inlines("[a] (b)") == (Text("[a] (b)"),)
        assert inlines("[a](b") == (Text("[a](b"),)


class TestImages:
    def test_image_becomes_block(self) -> None:
        assert parse("![example](http://example.com/logo.png)").children == (
            Image("http://example.com/logo.png", "example"),
        )

    def test_image_title(self) -> None:
        (image,) = parse('![a](http://x.com/i.png "The title")').children
        assert image == Image("http://x.com/i.png", "a", "The title")

    def test_empty_src_dropped(self) -> None:
        assert parse("before ![a]() after").children == (
            Paragraph(children=(Text("before  after"),)),
        )

    def test_image_in_heading_is_text(self) -> None:
        (heading,) = parse("# ![a](b)").children
        assert isinstance(heading, Heading)
        assert heading.children == (Text("!"), Link("b", (Text("a"),)))

    def test_image_in_link_text_is_text(self) -> None:
        assert inlines("[![a](b)](c)") == (Link("c", (Text("![a](b)"),)),)


class TestHashtags:
    def test_hashtag(self) -> None:
        assert inlines("this is a #hashtag example") == (
            Text("this is a "),
            Hashtag((Text("#hashtag"),)),
            Text(" example"),
        )

    def test_dash_ends_tag(self) -> None:
        assert inlines("dash should end #hashtag-dash") == (
            Text("dash should end "),
            Hashtag((Text("#hashtag"),)),
            Text("-dash"),
        )

    def test_markup_ends_tag(self) -> None:
        assert inlines("#a*b*") == (Hashtag((Text("#a"),)), Text("b", (I,)))

    def test_hashtag_keeps_marks(self) -> None:
        assert inlines("**#bold**") == (Hashtag((Text("#bold", (B,)),)),)

    @pytest.mark.parametrize("source", ["a#b", "# ", "#_x", "#", "x_#y"])
    def test_not_hashtags(self, source: str) -> None:
        doc = parse(source)
        assert not any(
            isinstance(node, Hashtag)
            for block in doc.children
            for node in getattr(block, "children", ())
        )

    def test_disabled(self) -> None:
        doc = Markdown(hashtags=False).parse("a #tag")
        assert doc.children == (Paragraph(children=(Text("a #tag"),)),)


class TestInlineContexts:
    def test_heading_marks(self) -> None:
        (heading,) = parse("# Heading *italic* not italic").children
        assert heading == Heading(
            level=1,
            children=(Text("Heading "), Text("italic", (I,)), Text(" not italic")),
        )

    def test_table_cell_marks(self) -> None:
        (table,) = parse("| **a** | b |\n|---|---|").children
        cell = table.children[0].children[0]
        assert cell == TableCell(children=(Text("a", (B,)),))
