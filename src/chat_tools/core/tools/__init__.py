"""Tool contract, registry and execution."""

from .models import ToolDefinition, ToolSuccess, ToolFailure, ToolResult, parse_result_payload
from .call_protocol import ToolCallRequest
from .invocation import InvocationState, ToolInvocationEvent
from .registry import ToolRegistry
from .executor import ToolExecutor
from .schema_validator import SchemaValidator

__all__ = [
    "ToolDefinition",
    "ToolSuccess",
    "ToolFailure",
    "ToolResult",
    "parse_result_payload",
    "ToolCallRequest",
    "InvocationState",
    "ToolInvocationEvent",
    "ToolRegistry",
    "ToolExecutor",
    "SchemaValidator",
]
