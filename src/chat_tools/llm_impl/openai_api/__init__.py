"""Expose the OpenAI-backed text model and chat session."""

from .adapter import OpenAIToolAdapter
from .core import ChatSession
from .model import OpenAITextModel

__all__ = ["ChatSession", "OpenAITextModel", "OpenAIToolAdapter"]
