"""Tool registry holding the tools exposed to the model."""

from typing import Any, Dict, List, Optional

from ..exceptions import ToolNotFoundError, ToolRegistrationError
from ..logger import get_logger
from .models import ToolDefinition

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry to manage and access all available LLM tools.

    It holds the declarations sent to the model and maps tool names to their
    definitions for execution.
    """

    def __init__(self) -> None:
        """Initialize the ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a new tool.

        Args:
            tool: The tool definition.

        Raises:
            ToolRegistrationError: If a tool with the same name already exists.
        """
        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")

    def unregister(self, tool_name: str) -> None:
        """Unregister a tool from the registry.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        if tool_name not in self.tools:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in the registry.")
        del self.tools[tool_name]
        logger.info(f"Successfully unregistered tool: '{tool_name}'")

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        return self.tools.get(tool_name)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    @property
    def tool_object(self) -> List[Dict[str, Any]] | None:
        """
        Tool declarations in the OpenAI chat-completions ``tools`` format.

        Returns:
            A list of tool dictionaries, or None if no tools are registered.
        """
        if not self.tools:
            return None

        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters or {"type": "object", "properties": {}},
                },
            }
            for tool in self.tools.values()
        ]
