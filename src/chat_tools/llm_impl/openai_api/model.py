from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from chat_tools.core.llm import GenerationResult, TextModel
from chat_tools.core.logger import get_logger

logger = get_logger(__name__)


class OpenAITextModel(TextModel):
    """``TextModel`` backed by OpenAI chat completions (single user prompt)."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        """
        Args:
            client: The initialized AsyncOpenAI client.
            model_name: Identifier of the model (e.g. 'gpt-4o-mini').
            temperature: Optional sampling temperature.
            max_tokens: Optional completion token limit.
        """
        self.client = client
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> GenerationResult:
        """Run one completion. Provider errors propagate to the calling tool."""
        kwargs: Dict[str, Any] = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens

        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        if not response.choices:
            logger.warning("Completion for model '%s' returned no choices.", self.model_name)
            return GenerationResult(text="", finish_reason=None)

        choice = response.choices[0]
        return GenerationResult(text=choice.message.content or "", finish_reason=choice.finish_reason)
