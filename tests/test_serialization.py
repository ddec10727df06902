"""Tests for richmark.serialization: tree JSON round-trip."""

import json

import pytest

from richmark import parse
from richmark.location import SourceLocation
from richmark.nodes import (
    BulletedList,
    Document,
    Hashtag,
    Heading,
    Image,
    ListItem,
    Mark,
    Paragraph,
    TableCell,
    Text,
    TodoList,
)
from richmark.serialization import from_dict, from_json, to_dict, to_json

_LOC = SourceLocation(lineno=1, col_offset=1)


class TestToDict:
    def test_type_discriminator(self) -> None:
        """Every node dict names its class."""
        data = to_dict(Paragraph(children=(Text("a"),)))
        assert data["_type"] == "Paragraph"
        assert data["children"][0]["_type"] == "Text"

    def test_marks_as_values(self) -> None:
        data = to_dict(Text("a", (Mark.BOLD, Mark.ITALIC)))
        assert data["marks"] == ["bold", "italic"]

    def test_location_included(self) -> None:
        data = to_dict(Text("a", location=SourceLocation(3, 1, source_file="n.md")))
        assert data["location"] == {
            "_type": "SourceLocation",
            "lineno": 3,
            "col_offset": 1,
            "end_lineno": None,
            "source_file": "n.md",
        }

    def test_optional_fields(self) -> None:
        """None-valued and boolean fields serialize as JSON primitives."""
        assert to_dict(Image("x.png", "alt"))["title"] is None
        assert to_dict(ListItem(checked=True))["checked"] is True
        assert to_dict(TableCell(align="center"))["align"] == "center"


class TestFromDict:
    def test_round_trip(self) -> None:
        doc = Document(
            location=_LOC,
            children=(
                Heading(level=2, children=(Text("h", (Mark.BOLD,)),), location=_LOC),
                TodoList(children=(ListItem(checked=False),)),
                Paragraph(children=(Hashtag((Text("#tag"),)),)),
            ),
        )
        assert from_dict(to_dict(doc)) == doc

    def test_children_become_tuples(self) -> None:
        node = from_dict(to_dict(BulletedList(children=(ListItem(),))))
        assert isinstance(node.children, tuple)

    def test_missing_fields_use_defaults(self) -> None:
        node = from_dict({"_type": "Text", "text": "a"})
        assert node == Text("a")
        assert node.location == SourceLocation.unknown()

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"text": "a"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type: 'Emphasis'"):
            from_dict({"_type": "Emphasis"})

    def test_unknown_mark(self) -> None:
        with pytest.raises(ValueError):
            from_dict({"_type": "Text", "text": "a", "marks": ["blink"]})


class TestJson:
    def test_round_trip_parsed_document(self) -> None:
        doc = parse("# Title\n\n* one **bold**\n\n| a |\n|:-:|\n\n![i](x.png)", source_file="n.md")
        restored = from_json(to_json(doc))
        assert restored == doc
        assert restored.location == doc.location

    def test_deterministic(self) -> None:
        doc = parse("some *text* #tag")
        assert to_json(doc) == to_json(parse("some *text* #tag"))

    def test_sorted_keys(self) -> None:
        data = json.loads(to_json(Document()))
        assert list(data) == sorted(data)

    def test_indent(self) -> None:
        assert "\n" in to_json(Document(), indent=2)
        assert "\n" not in to_json(Document())

    def test_rejects_non_object(self) -> None:
        with pytest.raises(ValueError, match="Expected a JSON object, got list"):
            from_json("[]")

    def test_rejects_non_document_root(self) -> None:
        with pytest.raises(ValueError, match="Expected Document, got Paragraph"):
            from_json(json.dumps(to_dict(Paragraph())))
