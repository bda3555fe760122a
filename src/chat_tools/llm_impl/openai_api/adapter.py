from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion
from typing import Any, Dict, Iterable, List, Optional, Sequence, cast
import json

from chat_tools.core.tools import ToolCallRequest, ToolInvocationEvent


class OpenAIToolAdapter:
    """Translates between OpenAI chat completions and the generic tool pipeline."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]],
        temperature: float,
        max_tokens: int,
    ):
        """Initialize the OpenAI tool adapter.

        Args:
            client: The OpenAI client instance.
            model: The name of the model to use.
            messages: The conversation so far; updated in place.
            tools: Tool declarations, or None.
            temperature: Sampling temperature.
            max_tokens: Maximum number of tokens to generate.
        """
        self.client = client
        self.model = model
        self.messages = messages
        self.tools = tools
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def create_completion(self) -> ChatCompletion:
        kwargs: Dict[str, Any] = {}
        if self.tools:
            kwargs["tools"] = self.tools
        # messages is List[Dict[str, Any]], structurally compatible with the SDK's message params.
        return await self.client.chat.completions.create(
            model=self.model,
            messages=cast(Iterable[Any], self.messages),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            **kwargs,
        )

    @staticmethod
    def get_tool_calls(response: ChatCompletion) -> Sequence[ToolCallRequest]:
        """Extract function tool calls from a chat completion."""
        if not response.choices:
            return []

        tool_calls = response.choices[0].message.tool_calls
        if not tool_calls:
            return []

        return [
            ToolCallRequest(name=call.function.name, arguments=call.function.arguments, call_id=call.id)
            for call in tool_calls
            if call.type == "function"
        ]

    def record_assistant_message(self, response: ChatCompletion) -> Dict[str, Any]:
        """Append the assistant message (including its tool calls) to the conversation and return it."""
        message = response.choices[0].message.model_dump(exclude_none=True)
        self.messages.append(message)
        return message

    @staticmethod
    def build_tool_response_message(event: ToolInvocationEvent) -> Dict[str, Any]:
        """Build the ``tool`` message reporting a resolved invocation back to the model."""
        payload = event.result.payload() if event.result is not None else {}
        return {
            "role": "tool",
            "tool_call_id": event.call_id,
            "content": json.dumps(payload, ensure_ascii=False),
        }

    async def send_tool_responses(self, tool_messages: Sequence[Dict[str, Any]]) -> ChatCompletion:
        """Append tool messages and request the next completion."""
        self.messages.extend(tool_messages)
        return await self.create_completion()
