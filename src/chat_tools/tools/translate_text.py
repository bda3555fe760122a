"""``translateText``: ask the model to translate text into a target language."""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import ModelInvocationError, ModelQualityError, ToolRecoverableError
from ..core.llm import TextModel, coerce_generation
from ..core.llm.base import STOP_FINISH_REASON
from ..core.logger import get_logger
from ..core.tools import ToolDefinition, ToolFailure, ToolSuccess

logger = get_logger(__name__)

TOOL_NAME = "translateText"
DEFAULT_SOURCE_LANGUAGE = "en"


class TranslateTextArgs(BaseModel):
    """Input of ``translateText``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    text: str = Field(min_length=1, description="The text to be translated.")
    target_language: str = Field(
        min_length=2,
        alias="targetLanguage",
        description='The target language code (e.g., "es", "fr", "de").',
    )


class TranslateSuccess(ToolSuccess):
    """Successful translation."""

    model_config = ConfigDict(extra="ignore")

    translated_text: str = Field(alias="translatedText")


TranslateTextResult = Union[TranslateSuccess, ToolFailure]


class TranslateTextTool:
    """
    Translates text from one language to another.

    A completion counts as a translation only if it finished with ``stop`` and
    is non-blank. If it merely echoes the input while the target differs from
    the source language, the call is reported as failed. That check is a
    heuristic and misfires on text that is spelled the same in both languages.
    """

    name = TOOL_NAME
    description = "Translates text from one language to another."

    def __init__(self, model: TextModel, source_language: str = DEFAULT_SOURCE_LANGUAGE):
        self.model = model
        self.source_language = source_language

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            func=self.execute,
            args_model=TranslateTextArgs,
            success_model=TranslateSuccess,
        )

    async def execute(self, args: TranslateTextArgs) -> TranslateTextResult:
        """Translate ``args.text`` into ``args.target_language``.

        Args:
            args: Validated tool input.

        Returns:
            ``TranslateSuccess`` or ``ToolFailure``.
        """
        try:
            translated = await self._translate(args.text, args.target_language)
        except ToolRecoverableError as exc:
            logger.warning("translateText to '%s' failed: %s", args.target_language, exc)
            return ToolFailure(error=str(exc))

        return TranslateSuccess(translated_text=translated)

    async def _translate(self, text: str, target_language: str) -> str:
        prompt = f'Translate the following text to {target_language}: "{text}"'
        try:
            generation = coerce_generation(await self.model.generate(prompt))
        except Exception as exc:
            logger.error("Error during translation: %s", exc, exc_info=True)
            raise ModelInvocationError(f"Translation failed due to an internal error: {exc}") from exc

        translated = generation.text.strip()
        if generation.finish_reason != STOP_FINISH_REASON or not translated:
            raise ModelQualityError(
                "Translation failed. AI model did not provide a valid translation. "
                f"Reason: {generation.finish_reason}"
            )

        if translated.lower() == text.strip().lower() and target_language != self.source_language:
            raise ModelQualityError(
                f"Translation to {target_language} might have failed or returned original text. "
                "The language might be unsupported or the text too short/ambiguous."
            )

        return translated
