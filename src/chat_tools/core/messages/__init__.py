"""Expose chat history models and the conversation-stream wire shapes."""

from .models import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    TextPart,
    ToolInvocationPart,
    MessagePart,
    StreamMessage,
    ChatRequest,
    new_message_id,
    encode_stream_line,
    decode_stream_line,
)

__all__ = [
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "TextPart",
    "ToolInvocationPart",
    "MessagePart",
    "StreamMessage",
    "ChatRequest",
    "new_message_id",
    "encode_stream_line",
    "decode_stream_line",
]
