"""Tests for flattening doc comments into records."""

import pytest

from blenodoc.markdown import render_markdown
from blenodoc.models import (
    CodeContext,
    ErrorEntry,
    Property,
    Record,
    SourceLocation,
    Tag,
)
from blenodoc.parse import FLATTENERS, flatten_tag, parse_comment


def test_marker_and_property():
    record = parse_comment(
        "@bleno getTxStatus\n@property {Hash} Request Hex prefixed tx hash"
    )
    assert record.name == "getTxStatus"
    assert record.properties == (
        Property(
            name="Request",
            line_number=1,
            description=render_markdown("Hex prefixed tx hash"),
            type="Hash",
        ),
    )
    assert record.errors == ()
    assert record.to_dict() == {
        "name": "getTxStatus",
        "properties": [
            {
                "name": "Request",
                "lineNumber": 1,
                "description": "<p>Hex prefixed tx hash</p>\n",
                "type": "Hash",
            }
        ],
        "loc": None,
        "context": None,
        "errors": [],
    }


class TestMarkerGate:
    """Comments without @bleno produce no record at all."""

    def test_property_only(self):
        assert parse_comment("@property {Foo} bar baz") is None

    def test_other_tags_only(self):
        assert parse_comment("/**\n * Helper.\n * @param {string} x\n * @oops\n */") is None

    def test_empty_comment(self):
        assert parse_comment("/** */") is None

    def test_marker_anywhere(self):
        record = parse_comment("@property {A} a\n@bleno late")
        assert record.name == "late"
        assert len(record.properties) == 1


def test_marker_only_has_no_properties_key():
    record = parse_comment("@bleno reset")
    assert record.name == "reset"
    assert record.properties is None
    assert "properties" not in record.to_dict()
    assert "description" not in record.to_dict()


def test_properties_keep_source_order():
    record = parse_comment(
        "@bleno h\n@property {A} first\n@property {B} second one\n@property {C} third"
    )
    assert [p.name for p in record.properties] == ["first", "second", "third"]
    assert [p.line_number for p in record.properties] == [1, 2, 3]


def test_property_optional_fields_absent():
    record = parse_comment("@bleno h\n@property {A} bare")
    (prop,) = record.properties
    assert prop.description is None
    assert prop.to_dict() == {"name": "bare", "lineNumber": 1, "type": "A"}


def test_property_description_rendered_as_markdown():
    record = parse_comment("@bleno h\n@property {A} p uses **bold** text")
    assert record.properties[0].description == "<p>uses <strong>bold</strong> text</p>\n"


def test_leading_description_rendered():
    record = parse_comment("/**\n * Reads the `value`.\n * @bleno read\n */")
    assert record.description == "<p>Reads the <code>value</code>.</p>\n"


def test_unknown_tag():
    record = parse_comment("@bleno x\n@unknown y")
    assert record.name == "x"
    assert record.properties is None
    assert record.errors == (ErrorEntry("unknown tag @unknown", 1),)
    assert record.to_dict()["errors"] == [
        {"message": "unknown tag @unknown", "commentLineNumber": 1}
    ]


def test_synonyms_are_not_recognized():
    record = parse_comment("@bleno x\n@prop {A} a")
    assert record.properties is None
    assert record.errors == (ErrorEntry("unknown tag @prop", 1),)


def test_syntax_errors_become_entries():
    record = parse_comment("@bleno x\n@property {A\n@property {B} ok")
    assert record.errors == (ErrorEntry("Braces are not balanced", 1),)
    assert [p.name for p in record.properties] == ["ok"]


def test_one_entry_per_parser_message():
    record = parse_comment("@bleno x\n@property")
    assert [e.message for e in record.errors] == [
        "Missing or invalid tag type",
        "Missing or invalid tag name",
    ]
    assert all(e.comment_line_number == 1 for e in record.errors)
    assert record.properties is None


def test_duplicate_marker_last_wins():
    record = parse_comment("@bleno first\n@bleno second")
    assert record.name == "second"
    assert record.errors == ()


def test_loc_and_context_attached_verbatim():
    loc = SourceLocation(10, 0, 13, 3)
    context = CodeContext(file="lib/a.js", code="function a() {", line=14)
    record = parse_comment("@bleno a", loc, context)
    assert record.loc is loc
    assert record.context is context
    assert record.to_dict()["loc"] == {
        "start": {"line": 10, "column": 0},
        "end": {"line": 13, "column": 3},
    }

    opaque = {"anything": [1, 2]}
    assert parse_comment("@bleno a", opaque, "ctx").to_dict()["context"] == "ctx"


def test_parsing_is_repeatable():
    comment = "/**\n * Desc.\n * @bleno h\n * @property {A} a text\n * @nope\n */"
    assert parse_comment(comment, "loc", "ctx") == parse_comment(comment, "loc", "ctx")


def test_flatteners_table_is_read_only():
    assert set(FLATTENERS) == {"bleno", "property"}
    with pytest.raises(TypeError):
        FLATTENERS["param"] = FLATTENERS["property"]


def test_flatten_tag_does_not_mutate_input():
    record = Record()
    updated = flatten_tag(record, Tag(title="property", line_number=0, name="a", type="A"))
    assert record.properties is None
    assert updated.properties[0].name == "a"


def test_untyped_param_is_unknown_not_malformed():
    record = parse_comment("@bleno h\n@param name the name")
    assert record.errors == (ErrorEntry("unknown tag @param", 1),)


def test_untyped_type_tag_is_malformed():
    record = parse_comment("@bleno h\n@type foo")
    assert record.errors == (ErrorEntry("Missing or invalid tag type", 1),)


def test_unicode_property_name():
    record = parse_comment("@bleno h\n@property {A} élan the value")
    assert record.errors == ()
    assert [p.name for p in record.properties] == ["élan"]


def test_marker_dash_dropped():
    assert parse_comment("@bleno - getTxStatus").name == "getTxStatus"
