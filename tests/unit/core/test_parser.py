"""Unit tests for core/parser.py (the parse facade)"""

import pytest

from mdschema.config import Settings
from mdschema.core.parser import MarkdownParser, parse, parse_to_object
from mdschema.core.result import SectionMap
from mdschema.errors import (
    NumericParseError,
    SchemaMismatchError,
    UnexpectedArrayTypeError,
    UnknownContentTypeError,
    ValidationError,
)


def test_title_and_description(md, simple_schema):
    """Each top-level heading fills the property it names."""
    result = md.parse("# Title\nfoo\n\n# Description\nbar\n", simple_schema)
    assert result == {"Title": "foo", "Description": "bar"}


def test_module_level_parse(simple_schema):
    assert parse("# Title\nfoo\n", simple_schema) == {"Title": "foo"}


def test_sub_headings_fill_one_array_element(md, items_schema):
    result = md.parse("# Items\n## A\nfirst\n\n## B\nsecond\n", items_schema)
    assert result == {"Items": [{"A": "first", "B": "second"}]}


def test_repeated_field_headings_start_new_elements(md, items_schema):
    result = md.parse("# Items\n## A\n1\n## B\n2\n## A\n3\n## B\n4\n", items_schema)
    assert result == {"Items": [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]}


def test_array_elements_follow_document_order(md, people_schema):
    doc = "# People\n## Zed\n### Role\nz\n## Amy\n### Role\na\n## Mia\n### Role\nm\n"
    result = md.parse(doc, people_schema)
    assert [p["Role"] for p in result["People"]] == ["z", "a", "m"]


def test_duplicate_labels_keep_every_element(md, people_schema):
    doc = "# People\n## Sam\n### Role\nfirst\n## Sam\n### Role\nsecond\n"
    result = md.parse(doc, people_schema)
    assert result == {"People": [{"Role": "first"}, {"Role": "second"}]}


def test_parse_to_object_returns_raw_sections(people_schema):
    raw = parse_to_object("# People\n## Sam\n### Role\nx\n", people_schema)
    assert isinstance(raw["People"], SectionMap)
    assert raw["People"].items() == [("Sam", {"Role": "x"})]


def test_array_of_strings_from_sections(md):
    schema = {"type": "object", "properties": {"Notes": {"type": "array", "items": {"type": "string"}}}}
    result = md.parse("# Notes\n## One\nfirst\n## Two\nsecond\n", schema)
    assert result == {"Notes": ["first", "second"]}


@pytest.mark.parametrize("text, expected", [
    ("True", True),
    ("true", True),
    ("false", False),
    ("enabled", False),
])
def test_boolean_field(md, text, expected):
    schema = {"type": "object", "properties": {"Active": {"type": "boolean"}}}
    assert md.parse(f"# Active\n{text}\n", schema) == {"Active": expected}


def test_number_field(md):
    schema = {"type": "object", "properties": {"Count": {"type": "number"}}}
    assert md.parse("# Count\n42\n", schema) == {"Count": 42}
    with pytest.raises(NumericParseError) as exc:
        md.parse("# Count\nmany\n", schema)
    assert exc.value.path == ("Count",)


def test_missing_required_field_fails_validation(md, simple_schema):
    with pytest.raises(ValidationError) as exc:
        md.parse("# Description\nbar\n", simple_schema)
    assert len(exc.value.violations) == 1
    assert "Title" in exc.value.violations[0].message


def test_validation_can_be_disabled(simple_schema):
    md = MarkdownParser(Settings(validate_result=False))
    assert md.parse("# Description\nbar\n", simple_schema) == {"Description": "bar"}


def test_absent_nullable_fields_resolve_to_null(md):
    schema = {
        "type": "object",
        "properties": {
            "Title": {"type": "string"},
            "Summary": {"type": ["string", "null"]},
            "Tags": {"type": ["array", "null"], "items": {"type": "string"}},
        },
    }
    result = md.parse("# Title\nfoo\n", schema)
    assert result == {"Title": "foo", "Summary": None, "Tags": None}


def test_nullable_field_with_content(md):
    schema = {"type": "object", "properties": {"Tags": {"type": ["array", "null"], "items": {"type": "string"}}}}
    assert md.parse("# Tags\n- a\n", schema) == {"Tags": ["a"]}


def test_heading_depth_need_not_match_schema_depth(md):
    schema = {
        "type": "object",
        "properties": {
            "Meta": {"type": "object", "properties": {"Author": {"type": "string"}, "Year": {"type": "number"}}},
        },
    }
    result = md.parse("# Meta\n### Author\nJo\n## Year\n2020\n", schema)
    assert result == {"Meta": {"Author": "Jo", "Year": 2020}}


def test_unknown_heading_raises(md, simple_schema):
    with pytest.raises(SchemaMismatchError) as exc:
        md.parse("# Unknown\nx\n", simple_schema)
    assert exc.value.label == "Unknown"
    assert exc.value.path == ()


def test_case_sensitive_by_default(md):
    schema = {"type": "object", "properties": {"title": {"type": "string"}}}
    with pytest.raises(SchemaMismatchError):
        md.parse("# Title\nfoo\n", schema)


def test_lower_first_casing(md):
    schema = {"type": "object", "properties": {"title": {"type": "string"}}}
    md = MarkdownParser(Settings(heading_key_casing="lower_first"))
    assert md.parse("# Title\nfoo\n", schema) == {"title": "foo"}


def test_array_field_requires_list(md):
    schema = {"type": "object", "properties": {"Tags": {"type": "array", "items": {"type": "string"}}}}
    with pytest.raises(UnexpectedArrayTypeError) as exc:
        md.parse("# Tags\nplain text\n", schema)
    assert exc.value.path == ("Tags",)


def test_unsupported_block_raises(md):
    schema = {"type": "object", "properties": {"Quote": {"type": "string"}}}
    with pytest.raises(UnknownContentTypeError) as exc:
        md.parse("# Quote\n> said\n", schema)
    assert exc.value.node_kind == "blockquote"


def test_front_matter_kept_into_string_root():
    md = MarkdownParser(Settings(strip_front_matter=False))
    assert md.parse("---\na: 1\n---\n", {"type": "string"}) == "a: 1"


def test_inline_markup_flattens_to_text(md):
    schema = {"type": "object", "properties": {"Title": {"type": "string"}}}
    assert md.parse("# Title\n**bold** text\n", schema) == {"Title": "bold text"}


def test_leading_rule_does_not_drop_first_section(simple_schema):
    """A document opening with --- fails loudly instead of losing its first section."""
    md = MarkdownParser(Settings(validate_result=False))
    with pytest.raises(UnknownContentTypeError) as exc:
        md.parse("---\n# Title\nfoo\n---\n# Description\nbar\n", simple_schema)
    assert exc.value.node_kind == "thematic-break"


def test_front_matter_mapping_still_stripped(md, simple_schema):
    assert md.parse("---\nauthor: Jo\n---\n# Title\nfoo\n", simple_schema) == {"Title": "foo"}
