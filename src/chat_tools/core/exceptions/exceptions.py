"""
Custom exception classes for the chat tool pipeline.

The first group describes programming and wiring errors (registration,
unknown tools, invalid input, illegal lifecycle transitions). The second group,
rooted at ``ToolRecoverableError``, describes failures of a single tool call.
Those are raised inside a tool's steps and converted into a ``ToolFailure``
result at the tool boundary, so they never reach the caller.
"""


class ChatToolError(Exception):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(ChatToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(ChatToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(ChatToolError):
    """Raised when a tool call cannot be prepared or executed."""

    pass


class ToolValidationError(ChatToolError):
    """Raised when tool input or a tool definition does not satisfy its schema."""

    pass


class InvalidTransitionError(ChatToolError):
    """Raised when a tool invocation event is resolved more than once."""

    pass


class UnknownLanguageError(ChatToolError, ValueError):
    """Raised when selecting a language code that is not in the catalog."""

    pass


class ToolRecoverableError(ChatToolError):
    """Base class for failures that are reported back as a tool error result."""

    pass


class NetworkError(ToolRecoverableError):
    """The page could not be fetched (DNS, connection, timeout)."""


class HttpStatusError(ToolRecoverableError):
    """The page responded with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Failed to fetch page: HTTP status {status_code}")
        self.status_code = status_code


class ContentTypeError(ToolRecoverableError):
    """The fetched payload is not HTML."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Content is not HTML (type: {content_type}). Cannot summarize.")
        self.content_type = content_type


class EmptyContentError(ToolRecoverableError):
    """No text is left after stripping markup."""


class ModelInvocationError(ToolRecoverableError):
    """The completion call itself raised."""


class ModelQualityError(ToolRecoverableError):
    """The completion succeeded but its output is unusable."""
