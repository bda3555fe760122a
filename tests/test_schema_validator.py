import pytest
from typing import List, Optional

from pydantic import BaseModel, Field

from chat_tools.core.exceptions import ToolValidationError
from chat_tools.core.tools import SchemaValidator


def test_assert_no_recursive_refs_no_recursion() -> None:
    schema = {
        "type": "object",
        "properties": {
            "prop1": {"type": "string"},
            "prop2": {"type": "object", "properties": {"subprop": {"type": "integer"}}},
        },
    }
    # Should not raise
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion() -> None:
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_removes_metadata() -> None:
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "MySchema",
        "type": "object",
        "properties": {"field": {"type": "string", "title": "FieldTitle"}},
        "definitions": {"SomeDef": {}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert "$schema" not in sanitized
    assert "$id" not in sanitized
    assert "title" not in sanitized
    assert "definitions" not in sanitized
    assert "title" not in sanitized["properties"]["field"]
    assert sanitized["additionalProperties"] is False


def test_sanitize_schema_keeps_property_called_title() -> None:
    schema = {"type": "object", "properties": {"title": {"type": "string", "title": "Title"}}}

    sanitized = SchemaValidator.sanitize_schema(schema)

    assert sanitized["properties"] == {"title": {"type": "string"}}


def test_sanitize_schema_simplifies_optional() -> None:
    schema = {
        "type": "object",
        "properties": {
            "maybe": {"anyOf": [{"type": "integer"}, {"type": "null"}], "description": "Optional int"},
        },
    }

    sanitized = SchemaValidator.sanitize_schema(schema)

    assert sanitized["properties"]["maybe"] == {"type": "integer", "description": "Optional int"}


class Item(BaseModel):
    name: str


class Order(BaseModel):
    items: List[Item] = Field(description="Ordered items.")
    note: Optional[str] = None


class Node(BaseModel):
    children: List["Node"] = []


def test_build_parameters_inlines_refs() -> None:
    parameters = SchemaValidator.build_parameters(Order)

    assert "$defs" not in parameters
    items = parameters["properties"]["items"]
    assert items["type"] == "array"
    assert items["items"]["properties"]["name"] == {"type": "string"}
    assert parameters["properties"]["note"]["type"] == "string"


def test_build_parameters_rejects_recursive_models() -> None:
    with pytest.raises(ToolValidationError):
        SchemaValidator.build_parameters(Node)
