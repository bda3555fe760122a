from typing import Any, AsyncIterator, Dict, List, Optional

from openai import AsyncOpenAI

from chat_tools.core.logger import get_logger
from chat_tools.core.messages import (
    AssistantMessage,
    BaseMessage,
    ChatRequest,
    StreamMessage,
    SystemMessage,
    TextPart,
    ToolMessage,
    UserMessage,
    encode_stream_line,
    new_message_id,
)
from chat_tools.core.tools import ToolExecutor, ToolInvocationEvent, ToolRegistry
from chat_tools.tools.translate_text import TranslateTextTool
from chat_tools.translation import translate_message
from .adapter import OpenAIToolAdapter

logger = get_logger(__name__)


class ChatSession:
    """
    Runs one chat turn against an OpenAI model with tool calling.

    Every tool invocation is emitted twice on the stream, once pending and once
    resolved. The final answer is translated into the request's selected
    language when a translator is configured.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        sys_instruction: str,
        registry: Optional[ToolRegistry] = None,
        translator: Optional[TranslateTextTool] = None,
        temp: float = 1.0,
        max_tokens: int = 3000,
        max_function_loops: int = 5,
    ):
        """
        Args:
            client: The initialized AsyncOpenAI client.
            model_name: The identifier for the OpenAI model to use.
            sys_instruction: A system-level instruction or persona for the LLM.
            registry: Tools the model may call.
            translator: Tool used to translate the final answer. Answers stay untranslated if None.
            temp: The temperature for text generation.
            max_tokens: The maximum number of tokens to generate in the response.
            max_function_loops: The maximum number of consecutive tool rounds per turn.
        """
        self.client = client
        self.model = model_name
        self.sys_instruction = sys_instruction
        self.registry = registry if registry is not None else ToolRegistry()
        self.translator = translator
        self.temperature = temp
        self.max_tokens = max_tokens
        self.max_function_loops = max_function_loops
        self._executor = ToolExecutor(registry=self.registry, argument_error_formatter=self._format_argument_error)

    async def stream(
        self, request: ChatRequest, history: Optional[List[BaseMessage]] = None
    ) -> AsyncIterator[StreamMessage]:
        """
        Process one user turn and yield the assistant messages as they happen.

        Args:
            request: The chat request, carrying the selected language.
            history: Earlier turns in provider-agnostic form. Extended in place
                with this turn's messages, so passing the same list again
                continues the conversation. The final answer is recorded
                untranslated.

        Yields:
            One message per tool invocation event, then the final answer (if any).
        """
        history = history if history is not None else []
        messages = self._convert_history(history)
        if not messages and self.sys_instruction:
            messages.append({"role": "system", "content": self.sys_instruction})
            history.append(SystemMessage(content=self.sys_instruction))
        messages.append({"role": "user", "content": request.message})
        history.append(UserMessage(content=request.message))

        adapter = OpenAIToolAdapter(
            client=self.client,
            model=self.model,
            messages=messages,
            tools=self.registry.tool_object,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        response = await adapter.create_completion()

        for loop_index in range(self.max_function_loops):
            tool_calls = adapter.get_tool_calls(response)
            if not tool_calls:
                break

            logger.info(f"Loop {loop_index + 1}/{self.max_function_loops}: Processing {len(tool_calls)} tool call(s).")
            recorded = adapter.record_assistant_message(response)
            history.append(AssistantMessage(content=recorded.get("content") or "", tool_calls=recorded.get("tool_calls")))

            resolved: List[ToolInvocationEvent] = []
            async for event in self._executor.stream(tool_calls):
                yield StreamMessage(id=new_message_id("asst"), parts=[event.to_part()])
                if not event.is_pending:
                    resolved.append(event)

            tool_messages = [adapter.build_tool_response_message(event) for event in resolved]
            history.extend(
                ToolMessage(content=tool_message["content"], tool_call_id=event.call_id, name=event.tool_name)
                for event, tool_message in zip(resolved, tool_messages)
            )
            response = await adapter.send_tool_responses(tool_messages)
        else:
            if adapter.get_tool_calls(response):
                logger.warning(f"Max tool loops ({self.max_function_loops}) reached. Stopping execution.")

        content = response.choices[0].message.content if response.choices else None
        if content:
            history.append(AssistantMessage(content=content))
            yield await self._final_message(content, request.selected_language)

    async def stream_lines(self, request: ChatRequest, history: Optional[List[BaseMessage]] = None) -> AsyncIterator[str]:
        """Same as ``stream`` but encoded as data-stream lines."""
        async for message in self.stream(request, history):
            yield encode_stream_line(message)

    async def collect(self, request: ChatRequest, history: Optional[List[BaseMessage]] = None) -> List[StreamMessage]:
        return [message async for message in self.stream(request, history)]

    async def _final_message(self, text: str, selected_language: str) -> StreamMessage:
        if self.translator is None or selected_language == self.translator.source_language:
            return StreamMessage(id=new_message_id("asst"), parts=[TextPart(text=text)])

        translated = await translate_message(text, selected_language, self.translator)
        return translated.to_wire()

    @staticmethod
    def _convert_history(history: List[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts generic BaseMessage history to OpenAI specific dictionary history.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = msg.tool_calls
                openai_history.append(openai_msg)
            elif isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, ToolMessage):
                openai_history.append({"role": "tool", "content": msg.content, "tool_call_id": msg.tool_call_id})
        return openai_history

    @staticmethod
    def _format_argument_error(tool_name: str, error: Exception) -> str:
        return f"Failed to decode function arguments: {error}"
