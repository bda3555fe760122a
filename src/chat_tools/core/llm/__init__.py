"""Language-model capability used by the tools."""

from .base import TextModel, GenerationResult, Generation, coerce_generation

__all__ = ["TextModel", "GenerationResult", "Generation", "coerce_generation"]
