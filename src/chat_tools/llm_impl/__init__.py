"""Collect concrete LLM provider implementations."""

from .openai_api import ChatSession, OpenAITextModel

__all__ = ["ChatSession", "OpenAITextModel"]
