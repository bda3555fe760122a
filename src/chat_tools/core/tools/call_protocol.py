"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from an LLM response.

    ``arguments`` is whatever the provider sent: a JSON string, a dict or None.
    """

    name: str
    arguments: Any
    call_id: str
