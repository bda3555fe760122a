"""Export the exception hierarchy used across tool registration, validation and execution."""

from .exceptions import (
    ChatToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    InvalidTransitionError,
    UnknownLanguageError,
    ToolRecoverableError,
    NetworkError,
    HttpStatusError,
    ContentTypeError,
    EmptyContentError,
    ModelInvocationError,
    ModelQualityError,
)

__all__ = [
    "ChatToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "InvalidTransitionError",
    "UnknownLanguageError",
    "ToolRecoverableError",
    "NetworkError",
    "HttpStatusError",
    "ContentTypeError",
    "EmptyContentError",
    "ModelInvocationError",
    "ModelQualityError",
]
