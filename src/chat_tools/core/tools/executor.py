"""Concurrent execution of the tool calls of one model turn."""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Sequence, Tuple

from ..exceptions import ToolExecutionError, ToolValidationError
from ..logger import get_logger
from .call_protocol import ToolCallRequest
from .invocation import ToolInvocationEvent
from .models import ToolFailure
from .registry import ToolRegistry

logger = get_logger(__name__)


class ToolExecutor:
    """Runs tool calls and reports their lifecycle as ``ToolInvocationEvent`` objects.

    For a batch of calls every pending event is yielded first, then the
    calls run concurrently and their resolved events are yielded in completion
    order. Unknown tools, undecodable arguments and schema violations resolve
    to a ``ToolFailure`` without running the tool. An exception raised by a
    tool resolves its own call to a ``ToolFailure``. Nothing is retried and no
    timeout is added on top of what the tools' own clients enforce.
    """

    def __init__(
        self,
        *,
        registry: Optional[ToolRegistry],
        argument_error_formatter: Optional[Callable[[str, Exception], str]] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            registry: Tool registry used to resolve tool definitions.
            argument_error_formatter: Optional formatter for argument parsing errors.
        """
        self._registry = registry
        self._argument_error_formatter = argument_error_formatter or self._default_argument_error

    async def stream(self, tool_calls: Sequence[ToolCallRequest]) -> AsyncIterator[ToolInvocationEvent]:
        """Execute ``tool_calls`` and yield their pending, then resolved, events.

        Args:
            tool_calls: Calls requested by the model in one turn.

        Yields:
            One pending event per call, followed by one resolved event per call.
        """
        prepared: List[Tuple[ToolInvocationEvent, Dict[str, Any], Optional[str]]] = []
        for tool_call in tool_calls:
            try:
                args = self._normalize_function_args(tool_call.name, tool_call.arguments)
                argument_error = None
            except ToolExecutionError as exc:
                args, argument_error = {}, str(exc)
                logger.warning(f"Argument normalization failed for '{tool_call.name}': {argument_error}")

            event = ToolInvocationEvent.pending(tool_call.name, tool_call.call_id, args)
            prepared.append((event, args, argument_error))
            yield event

        if not prepared:
            return

        logger.info(f"Processing {len(prepared)} tool call(s).")
        # Started calls run to completion even if the consumer stops iterating.
        tasks = [asyncio.create_task(self._handle_tool_call(*item)) for item in prepared]
        for finished in asyncio.as_completed(tasks):
            yield await finished

    async def run(self, tool_calls: Sequence[ToolCallRequest]) -> List[ToolInvocationEvent]:
        """Execute ``tool_calls`` and return the resolved events in request order."""
        resolved = {event.call_id: event async for event in self.stream(tool_calls) if not event.is_pending}
        return [resolved[call.call_id] for call in tool_calls]

    async def _handle_tool_call(
        self, event: ToolInvocationEvent, args: Dict[str, Any], argument_error: Optional[str]
    ) -> ToolInvocationEvent:
        """Handle a single pending call.

        Validates the tool existence and the arguments, then executes the tool.

        Returns:
            The resolved event, carrying either the tool's result or a failure.
        """
        logger.debug(f"Handling tool call: {event.tool_name} (ID: {event.call_id})")

        if argument_error is not None:
            return event.resolve(ToolFailure(error=argument_error))

        tool_def = self._registry.get(event.tool_name) if self._registry else None
        if tool_def is None:
            msg = f"Tool '{event.tool_name}' not found in registry."
            logger.warning(msg)
            return event.resolve(ToolFailure(error=msg))

        try:
            validated_args = tool_def.validate_args(args)
        except ToolValidationError as exc:
            return event.resolve(ToolFailure(error=str(exc)))

        try:
            logger.info(f"Executing tool '{event.tool_name}'...")
            result = await tool_def.func(validated_args)
        except Exception as exc:
            msg = f"Error executing '{event.tool_name}': {exc}"
            logger.error(msg, exc_info=True)
            return event.resolve(ToolFailure(error=msg))

        logger.info(f"Tool '{event.tool_name}' finished with a {result.kind} result.")
        return event.resolve(result)

    def _normalize_function_args(self, tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, dictionaries, or None values.

        Raises:
            ToolExecutionError: If arguments cannot be parsed or are invalid.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise ToolExecutionError(self._argument_error_formatter(tool_name, exc)) from exc

            if parsed is None:
                return {}

            if not isinstance(parsed, dict):
                error = ValueError("Function arguments must decode to a JSON object.")
                raise ToolExecutionError(self._argument_error_formatter(tool_name, error))

            return parsed

        try:
            return dict(raw_args)
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(self._argument_error_formatter(tool_name, exc)) from exc

    @staticmethod
    def _default_argument_error(tool_name: str, error: Exception) -> str:
        return f"Failed to parse arguments for tool '{tool_name}': {error}"
