"""Chat tools - tool invocation, execution and rendering pipeline for a chat assistant."""

from .core import (
    Settings,
    load_settings,
    Language,
    LanguageContext,
    ChatRequest,
    StreamMessage,
    ToolDefinition,
    ToolFailure,
    ToolInvocationEvent,
    ToolRegistry,
    ToolExecutor,
    get_logger,
    setup_logging,
)
from .tools import SummarizeUrlTool, TranslateTextTool, build_default_registry, create_http_client
from .translation import TranslatedMessage, translate_message
from .rendering import MessageRenderer, RenderedView, RenderedText, ViewState
from .llm_impl import ChatSession, OpenAITextModel

__all__ = [
    "Settings",
    "load_settings",
    "Language",
    "LanguageContext",
    "ChatRequest",
    "StreamMessage",
    "ToolDefinition",
    "ToolFailure",
    "ToolInvocationEvent",
    "ToolRegistry",
    "ToolExecutor",
    "get_logger",
    "setup_logging",
    "SummarizeUrlTool",
    "TranslateTextTool",
    "build_default_registry",
    "create_http_client",
    "TranslatedMessage",
    "translate_message",
    "MessageRenderer",
    "RenderedView",
    "RenderedText",
    "ViewState",
    "ChatSession",
    "OpenAITextModel",
]
