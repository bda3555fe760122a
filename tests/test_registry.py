import pytest
from typing import Any
from unittest.mock import AsyncMock

from pydantic import BaseModel, Field

from chat_tools.core.exceptions import ToolNotFoundError, ToolRegistrationError
from chat_tools.core.tools import ToolDefinition, ToolRegistry
from chat_tools.tools import build_default_registry, create_http_client


class EchoArgs(BaseModel):
    value: str = Field(description="Value to echo.")


def make_tool(name: str = "echo") -> ToolDefinition:
    return ToolDefinition(name=name, description="Echo a value.", func=AsyncMock(), args_model=EchoArgs)


def test_register_and_get() -> None:
    registry = ToolRegistry()
    tool = make_tool()

    registry.register(tool)

    assert "echo" in registry
    assert registry.get("echo") is tool
    assert registry.get("missing") is None


def test_duplicate_registration_fails() -> None:
    registry = ToolRegistry()
    registry.register(make_tool())

    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register(make_tool())


def test_unregister() -> None:
    registry = ToolRegistry()
    registry.register(make_tool())

    registry.unregister("echo")

    assert "echo" not in registry
    with pytest.raises(ToolNotFoundError):
        registry.unregister("echo")


def test_tool_object_is_none_without_tools() -> None:
    assert ToolRegistry().tool_object is None


def test_tool_object_openai_format() -> None:
    registry = ToolRegistry()
    registry.register(make_tool())

    tool_obj = registry.tool_object

    assert tool_obj is not None
    assert len(tool_obj) == 1
    tool_def = tool_obj[0]
    assert tool_def["type"] == "function"
    assert tool_def["function"]["name"] == "echo"
    assert tool_def["function"]["description"] == "Echo a value."
    assert tool_def["function"]["parameters"] == {
        "type": "object",
        "properties": {"value": {"type": "string", "description": "Value to echo."}},
        "required": ["value"],
        "additionalProperties": False,
    }


@pytest.mark.asyncio
async def test_default_registry(mock_model: Any) -> None:
    async with create_http_client() as client:
        registry = build_default_registry(client, mock_model)

    assert sorted(registry.tools) == ["summarizeUrl", "translateText"]
