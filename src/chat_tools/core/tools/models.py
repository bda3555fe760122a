"""Tool contract: definitions and the tagged success/error results they return."""

from typing import Any, Awaitable, Callable, Dict, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ToolValidationError
from ..logger import get_logger
from .schema_validator import SchemaValidator

logger = get_logger(__name__)


class ToolSuccess(BaseModel):
    """Base class of the success variant of a tool result.

    Each tool subclasses it with its own payload fields. The base class itself
    accepts arbitrary payload keys and is used for tools it knows nothing about.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    kind: Literal["success"] = "success"

    def payload(self) -> Dict[str, Any]:
        """Wire representation, e.g. ``{"summary": ...}``."""
        return self.model_dump(by_alias=True, exclude={"kind"})


class ToolFailure(BaseModel):
    """Error variant of a tool result.

    Attributes:
        error: Human-readable error message shown next to the tool call.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    error: str

    def payload(self) -> Dict[str, Any]:
        return {"error": self.error}


ToolResult = Union[ToolSuccess, ToolFailure]


def parse_result_payload(payload: Mapping[str, Any], success_model: Type[ToolSuccess] = ToolSuccess) -> ToolResult:
    """Read a wire result payload back into a typed result.

    Args:
        payload: The ``result`` object of a tool-invocation part.
        success_model: Success variant of the tool that produced the payload.

    Returns:
        A ``ToolFailure`` if the payload carries ``error``, the success variant otherwise.

    Raises:
        ToolValidationError: If the payload carries both variants, neither, or invalid fields.
    """
    success_keys = {
        field.alias or name for name, field in success_model.model_fields.items() if name != "kind"
    }
    has_error = "error" in payload
    if success_keys:
        has_success = any(key in payload for key in success_keys)
    else:
        has_success = any(key != "error" for key in payload)

    if has_error == has_success:
        expected = " / ".join(sorted(success_keys)) or "a success payload"
        msg = f"Tool result must carry exactly one of {expected} or 'error', got keys {sorted(payload)}."
        logger.error(msg)
        raise ToolValidationError(msg)

    try:
        if has_error:
            return ToolFailure(error=payload["error"])
        return success_model.model_validate(dict(payload))
    except ValidationError as exc:
        raise ToolValidationError(f"Malformed tool result payload: {exc}") from exc


class ToolDefinition(BaseModel):
    """
    Represents a tool the model may call.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: Async callable receiving the validated ``args_model`` instance.
        args_model: Pydantic model validating and coercing the tool input.
        success_model: Success variant of the tool's result type.
        parameters: JSON schema sent to the model. Derived from ``args_model`` when omitted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    func: Callable[[Any], Awaitable[ToolResult]]
    args_model: Type[BaseModel]
    success_model: Type[ToolSuccess] = ToolSuccess
    parameters: Optional[Dict[str, Any]] = None

    def model_post_init(self, __context: Any) -> None:
        if self.parameters is None:
            self.parameters = SchemaValidator.build_parameters(self.args_model)

    def validate_args(self, raw_args: Mapping[str, Any]) -> BaseModel:
        """Validate raw call arguments.

        Args:
            raw_args: Arguments as sent by the model.

        Returns:
            The validated argument model.

        Raises:
            ToolValidationError: If the arguments do not satisfy ``args_model``.
        """
        try:
            return self.args_model.model_validate(dict(raw_args))
        except ValidationError as exc:
            msg = f"Invalid arguments for tool '{self.name}': {exc}"
            logger.warning(msg)
            raise ToolValidationError(msg) from exc

    async def invoke(self, raw_args: Mapping[str, Any]) -> ToolResult:
        """Validate ``raw_args`` and run the tool; ``func`` only ever sees valid input."""
        validated = self.validate_args(raw_args)
        return await self.func(validated)
