"""Core abstraction for text generation providers."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from pydantic import BaseModel

STOP_FINISH_REASON = "stop"


class GenerationResult(BaseModel):
    """Normalized completion returned by a ``TextModel``.

    Attributes:
        text: Generated text. Empty when the provider returned no content.
        finish_reason: Why generation stopped (``stop`` for a natural end,
            ``length`` when truncated, ...). None if the provider did not say.
    """

    text: str
    finish_reason: Optional[str] = None


# Providers may hand back a bare string instead of a structured result.
Generation = Union[GenerationResult, str]


def coerce_generation(generation: Generation) -> GenerationResult:
    """Normalize a provider result; a bare string counts as a natural ``stop``."""
    if isinstance(generation, str):
        return GenerationResult(text=generation, finish_reason=STOP_FINISH_REASON)
    return generation


class TextModel(ABC):
    """Abstract single-prompt text generation capability.

    Implementations are bound to a concrete model (``model_name``) and must raise
    on transport or provider errors; the tools turn those into error results.
    """

    model_name: str

    @abstractmethod
    async def generate(self, prompt: str) -> Generation:
        """Generate a completion for ``prompt``."""
        pass
