"""Public exports for the core tool pipeline abstractions and utilities."""

from .config import Settings, load_settings
from .exceptions import (
    ChatToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    InvalidTransitionError,
    UnknownLanguageError,
    ToolRecoverableError,
)
from .language import Language, LanguageContext, DEFAULT_LANGUAGES
from .llm import TextModel, GenerationResult
from .logger import get_logger, setup_logging
from .messages import ChatRequest, StreamMessage, TextPart, ToolInvocationPart, encode_stream_line
from .tools import (
    ToolDefinition,
    ToolSuccess,
    ToolFailure,
    ToolResult,
    ToolCallRequest,
    ToolInvocationEvent,
    InvocationState,
    ToolRegistry,
    ToolExecutor,
    SchemaValidator,
)

__all__ = [
    "Settings",
    "load_settings",
    "ChatToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "InvalidTransitionError",
    "UnknownLanguageError",
    "ToolRecoverableError",
    "Language",
    "LanguageContext",
    "DEFAULT_LANGUAGES",
    "TextModel",
    "GenerationResult",
    "get_logger",
    "setup_logging",
    "ChatRequest",
    "StreamMessage",
    "TextPart",
    "ToolInvocationPart",
    "encode_stream_line",
    "ToolDefinition",
    "ToolSuccess",
    "ToolFailure",
    "ToolResult",
    "ToolCallRequest",
    "ToolInvocationEvent",
    "InvocationState",
    "ToolRegistry",
    "ToolExecutor",
    "SchemaValidator",
]
