from typing import Any, Dict, Set, Type

import jsonref  # type: ignore
from pydantic import BaseModel

from ..exceptions import ToolValidationError
from ..logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Helper class for building, validating and sanitizing JSON schemas of tool inputs.
    """

    @classmethod
    def build_parameters(cls, args_model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Derive the JSON schema advertised to the model from a tool's argument model.

        Field aliases are used as property names so the schema matches the wire
        arguments (e.g. ``targetLanguage``).

        Args:
            args_model: The pydantic model validating the tool input.

        Returns:
            A self-contained, sanitized JSON schema.

        Raises:
            ToolValidationError: If the model contains recursive structures.
        """
        raw_schema = args_model.model_json_schema(by_alias=True)
        cls.assert_no_recursive_refs(raw_schema)

        # proxies=False ensures we get a plain dict back, not JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return cls.sanitize_schema(resolved)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not allowed in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3 and parts[-1] in defs:
                            check(defs[parts[-1]], path | {ref})
                    return

                for value in node.values():
                    check(value, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up the schema for LLM providers.

        Removes $defs, $schema, $id, title. Simplifies Optional fields (anyOf
        with null) and enforces ``additionalProperties: false`` for objects.
        Property names are never treated as metadata, so a field called
        ``title`` survives.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = {k: v for k, v in schema.items() if k not in _METADATA_KEYS}

        if "anyOf" in new_schema:
            non_null = [x for x in new_schema["anyOf"] if not (isinstance(x, dict) and x.get("type") == "null")]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                merged = {k: v for k, v in new_schema.items() if k != "anyOf"}
                merged.update(non_null[0])
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                return SchemaValidator.sanitize_schema(merged)

        if new_schema.get("type") == "object" and "additionalProperties" not in new_schema:
            new_schema["additionalProperties"] = False

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema
