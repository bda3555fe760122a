"""Message models: provider-agnostic chat history and the conversation-stream wire shapes."""

import json
import uuid
from abc import ABC
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..language import LanguageContext


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with an LLM.

    Attributes:
        author: Role associated with the message.
        content: Text payload of the message.
    """

    author: str
    content: str


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior."""

    author: str = "system"


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    author: str = "user"


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally containing tool calls."""

    author: str = "assistant"
    tool_calls: Optional[List[Any]] = None


class ToolMessage(BaseMessage):
    """Message emitted by a tool invocation."""

    author: str = "tool"
    tool_call_id: str
    name: str


def new_message_id(prefix: str = "msg") -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TextPart(_WireModel):
    """Plain text part of an assistant message."""

    type: Literal["text"] = "text"
    text: str


class ToolInvocationPart(_WireModel):
    """``tool-invocation`` part; ``result`` is only present once ``state`` is ``result``."""

    type: Literal["tool-invocation"] = "tool-invocation"
    tool_name: str = Field(alias="toolName")
    tool_call_id: str = Field(alias="toolCallId")
    args: Dict[str, Any] = Field(default_factory=dict)
    state: Literal["call", "result"]
    result: Optional[Dict[str, Any]] = None


MessagePart = Annotated[Union[TextPart, ToolInvocationPart], Field(discriminator="type")]


class StreamMessage(_WireModel):
    """
    Assistant message as delivered to the rendering layer.

    Translated answers additionally carry ``originalText``, ``targetLanguage``
    and ``translationError`` next to the displayed text part.
    """

    id: str = Field(default_factory=new_message_id)
    role: Literal["assistant"] = "assistant"
    parts: List[MessagePart] = Field(default_factory=list)
    original_text: Optional[str] = Field(default=None, alias="originalText")
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")
    translation_error: Optional[str] = Field(default=None, alias="translationError")

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))


class ChatRequest(_WireModel):
    """Body of a chat request sent by the UI.

    Attributes:
        id: Conversation id.
        message: The user's message text.
        selected_language: Language code the answer should be shown in.
    """

    id: str = Field(default_factory=lambda: new_message_id("chat"))
    message: str = Field(min_length=1)
    selected_language: str = Field(default="en", alias="selectedLanguage", min_length=2)

    @classmethod
    def from_context(cls, message: str, language: "LanguageContext", chat_id: Optional[str] = None) -> "ChatRequest":
        """Build a request carrying the language currently selected in ``language``."""
        kwargs: Dict[str, Any] = {"message": message, "selected_language": language.selected.code}
        if chat_id is not None:
            kwargs["id"] = chat_id
        return cls(**kwargs)


def encode_stream_line(message: StreamMessage) -> str:
    """Encode a message as one data-stream line: ``0:[<json>]\\n``."""
    return f"0:{json.dumps([message.to_wire()], ensure_ascii=False)}\n"


def decode_stream_line(line: str) -> List[StreamMessage]:
    """Parse a line produced by ``encode_stream_line``.

    Raises:
        ValueError: If the line does not use the ``0:`` data prefix or holds invalid JSON.
        pydantic.ValidationError: If a message does not match the wire shape.
    """
    prefix, sep, body = line.rstrip("\n").partition(":")
    if not sep or prefix != "0":
        raise ValueError(f"Unsupported stream line: {line[:40]!r}")
    return [StreamMessage.model_validate(item) for item in json.loads(body)]
