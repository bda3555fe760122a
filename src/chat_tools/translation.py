"""Translation of assistant answers into the language selected by the user."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .core.logger import get_logger
from .core.messages import StreamMessage, TextPart, new_message_id
from .core.tools import ToolFailure
from .tools.translate_text import DEFAULT_SOURCE_LANGUAGE, TranslateSuccess, TranslateTextArgs, TranslateTextTool

logger = get_logger(__name__)


class TranslatedMessage(BaseModel):
    """
    An assistant answer together with its translation outcome.

    When the target differs from the source language exactly one of
    ``translated_text`` and ``translation_error`` is set; when they are equal
    neither is.
    """

    model_config = ConfigDict(frozen=True)

    original_text: str
    target_language_code: str
    source_language_code: str = DEFAULT_SOURCE_LANGUAGE
    translated_text: Optional[str] = None
    translation_error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "TranslatedMessage":
        has_translation = self.translated_text is not None
        has_error = self.translation_error is not None
        if self.target_language_code == self.source_language_code:
            if has_translation or has_error:
                raise ValueError("No translation outcome expected when target equals source language.")
        elif has_translation == has_error:
            raise ValueError("Exactly one of translated_text and translation_error must be set.")
        return self

    @property
    def display_text(self) -> str:
        return self.translated_text if self.translated_text is not None else self.original_text

    def to_wire(self, message_id: Optional[str] = None) -> StreamMessage:
        """Assistant message with the displayed text and the translation fields."""
        message = StreamMessage(id=message_id or new_message_id("asst"), parts=[TextPart(text=self.display_text)])
        if self.target_language_code == self.source_language_code:
            return message
        return message.model_copy(
            update={
                "original_text": self.original_text if self.translated_text is not None else None,
                "target_language": self.target_language_code,
                "translation_error": self.translation_error,
            }
        )

    @classmethod
    def from_wire(cls, message: StreamMessage, source_language_code: str = DEFAULT_SOURCE_LANGUAGE) -> "TranslatedMessage":
        """Read the translation fields back from a wire message."""
        if message.target_language is None or message.target_language == source_language_code:
            return cls(
                original_text=message.text,
                target_language_code=source_language_code,
                source_language_code=source_language_code,
            )
        if message.translation_error is not None:
            return cls(
                original_text=message.text,
                target_language_code=message.target_language,
                source_language_code=source_language_code,
                translation_error=message.translation_error,
            )
        return cls(
            original_text=message.original_text if message.original_text is not None else message.text,
            target_language_code=message.target_language,
            source_language_code=source_language_code,
            translated_text=message.text,
        )


async def translate_message(text: str, target_language: str, translator: TranslateTextTool) -> TranslatedMessage:
    """Translate an assistant answer with ``translator``.

    Args:
        text: The answer in the source language. Must not be empty.
        target_language: Code of the selected language.
        translator: The ``translateText`` tool; its source language is used.

    Returns:
        The derived ``TranslatedMessage``.

    Raises:
        pydantic.ValidationError: If ``text`` is empty or ``target_language`` is too short.
    """
    source = translator.source_language
    if target_language == source:
        return TranslatedMessage(original_text=text, target_language_code=target_language, source_language_code=source)

    args = TranslateTextArgs(text=text, target_language=target_language)
    result = await translator.execute(args)

    if isinstance(result, ToolFailure):
        logger.warning("Showing untranslated answer, translation to '%s' failed.", target_language)
        return TranslatedMessage(
            original_text=text,
            target_language_code=target_language,
            source_language_code=source,
            translation_error=result.error,
        )
    if isinstance(result, TranslateSuccess):
        return TranslatedMessage(
            original_text=text,
            target_language_code=target_language,
            source_language_code=source,
            translated_text=result.translated_text,
        )
    raise TypeError(f"Unexpected translation result: {type(result).__name__}")
