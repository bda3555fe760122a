"""Lifecycle record of a single tool call, and its conversation-stream representation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..exceptions import InvalidTransitionError
from ..logger import get_logger
from ..messages.models import ToolInvocationPart
from .models import ToolResult, ToolSuccess, parse_result_payload

logger = get_logger(__name__)


class InvocationState(str, Enum):
    """Wire values of the invocation lifecycle."""

    PENDING = "call"
    RESULT = "result"


class ToolInvocationEvent(BaseModel):
    """
    One tool call as seen by the conversation stream.

    An event is created ``PENDING`` when the model decides to call a tool and is
    resolved exactly once into a new ``RESULT`` event carrying the outcome.
    Events are immutable, so a resolved event never goes back to pending.

    Attributes:
        tool_name: Name of the called tool.
        call_id: Provider call id, unique within the conversation.
        args: Arguments as sent by the model.
        state: Lifecycle state.
        result: Outcome; present iff ``state`` is ``RESULT``.
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str
    call_id: str
    args: Dict[str, Any] = Field(default_factory=dict)
    state: InvocationState = InvocationState.PENDING
    result: Optional[ToolResult] = None

    @model_validator(mode="after")
    def _check_state(self) -> "ToolInvocationEvent":
        if self.state is InvocationState.PENDING and self.result is not None:
            raise ValueError("A pending tool invocation cannot carry a result.")
        if self.state is InvocationState.RESULT and self.result is None:
            raise ValueError("A resolved tool invocation must carry a result.")
        return self

    @classmethod
    def pending(cls, tool_name: str, call_id: str, args: Optional[Dict[str, Any]] = None) -> "ToolInvocationEvent":
        return cls(tool_name=tool_name, call_id=call_id, args=dict(args or {}))

    @property
    def is_pending(self) -> bool:
        return self.state is InvocationState.PENDING

    def resolve(self, result: ToolResult) -> "ToolInvocationEvent":
        """Return the ``RESULT`` counterpart of this pending event.

        Raises:
            InvalidTransitionError: If the event is already resolved.
        """
        if not self.is_pending:
            msg = f"Tool invocation '{self.call_id}' ({self.tool_name}) is already resolved."
            logger.error(msg)
            raise InvalidTransitionError(msg)
        return ToolInvocationEvent(
            tool_name=self.tool_name,
            call_id=self.call_id,
            args=self.args,
            state=InvocationState.RESULT,
            result=result,
        )

    def to_part(self) -> ToolInvocationPart:
        """Build the ``tool-invocation`` message part for the conversation stream."""
        return ToolInvocationPart(
            tool_name=self.tool_name,
            tool_call_id=self.call_id,
            args=self.args,
            state=self.state.value,
            result=self.result.payload() if self.result is not None else None,
        )

    @classmethod
    def from_part(
        cls, part: ToolInvocationPart, success_model: Type[ToolSuccess] = ToolSuccess
    ) -> "ToolInvocationEvent":
        """Rebuild an event from a wire part.

        Raises:
            ToolValidationError: If the result payload is not exactly one variant.
            pydantic.ValidationError: If state and result disagree.
        """
        result = parse_result_payload(part.result, success_model) if part.result is not None else None
        return cls(
            tool_name=part.tool_name,
            call_id=part.tool_call_id,
            args=part.args,
            state=InvocationState(part.state),
            result=result,
        )
