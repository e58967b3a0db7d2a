"""Shared fixtures for core unit tests"""

import pytest

from mdschema.core.parser import MarkdownParser


@pytest.fixture(name="md")
def md_fixture():
    return MarkdownParser()


@pytest.fixture(name="simple_schema")
def simple_schema_fixture():
    return {
        "type": "object",
        "properties": {
            "Title": {"type": "string"},
            "Description": {"type": "string"},
        },
        "required": ["Title"],
    }


@pytest.fixture(name="items_schema")
def items_schema_fixture():
    """Array whose elements are objects written as one sub-heading per field."""
    return {
        "type": "object",
        "properties": {
            "Items": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "A": {"type": "string"},
                        "B": {"type": "string"},
                    },
                },
            },
        },
    }


@pytest.fixture(name="people_schema")
def people_schema_fixture():
    """Array whose elements are labelled sections with object bodies."""
    return {
        "type": "object",
        "properties": {
            "People": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {"Role": {"type": "string"}},
                    "required": ["Role"],
                },
            },
        },
    }
