import pytest
from typing import Any

from pydantic import ValidationError

from chat_tools.core.llm import GenerationResult
from chat_tools.tools import TranslateTextTool
from chat_tools.translation import TranslatedMessage, translate_message

ORIGINAL = "Hello from mock AI, I can assist you."
SPANISH = "Hola desde la IA simulada, puedo ayudarte."


@pytest.mark.asyncio
async def test_same_language_skips_translation(mock_model: Any) -> None:
    message = await translate_message(ORIGINAL, "en", TranslateTextTool(mock_model))

    mock_model.generate.assert_not_awaited()
    assert message.translated_text is None
    assert message.translation_error is None
    assert message.to_wire("asst_1").to_wire() == {
        "id": "asst_1",
        "role": "assistant",
        "parts": [{"type": "text", "text": ORIGINAL}],
    }


@pytest.mark.asyncio
async def test_successful_translation(mock_model: Any) -> None:
    mock_model.generate.return_value = GenerationResult(text=SPANISH, finish_reason="stop")

    message = await translate_message(ORIGINAL, "es", TranslateTextTool(mock_model))

    assert message.translated_text == SPANISH
    assert message.display_text == SPANISH
    assert message.to_wire("asst_1").to_wire() == {
        "id": "asst_1",
        "role": "assistant",
        "parts": [{"type": "text", "text": SPANISH}],
        "originalText": ORIGINAL,
        "targetLanguage": "es",
    }


@pytest.mark.asyncio
async def test_failed_translation_keeps_original(mock_model: Any) -> None:
    mock_model.generate.return_value = GenerationResult(text="", finish_reason="content_filter")

    message = await translate_message(ORIGINAL, "ko", TranslateTextTool(mock_model))

    assert message.translated_text is None
    assert message.translation_error == (
        "Translation failed. AI model did not provide a valid translation. Reason: content_filter"
    )
    assert message.to_wire("asst_1").to_wire() == {
        "id": "asst_1",
        "role": "assistant",
        "parts": [{"type": "text", "text": ORIGINAL}],
        "targetLanguage": "ko",
        "translationError": message.translation_error,
    }


def test_outcome_invariants() -> None:
    with pytest.raises(ValidationError):
        TranslatedMessage(original_text="Hi", target_language_code="es")
    with pytest.raises(ValidationError):
        TranslatedMessage(original_text="Hi", target_language_code="es", translated_text="Hola", translation_error="x")
    with pytest.raises(ValidationError):
        TranslatedMessage(original_text="Hi", target_language_code="en", translated_text="Hi")


def test_from_wire_reads_translation_fields() -> None:
    translated = TranslatedMessage(original_text=ORIGINAL, target_language_code="es", translated_text=SPANISH)

    assert TranslatedMessage.from_wire(translated.to_wire("asst_1")) == translated


def test_from_wire_reads_errors() -> None:
    failed = TranslatedMessage(original_text=ORIGINAL, target_language_code="xx", translation_error="Mock failure.")

    assert TranslatedMessage.from_wire(failed.to_wire("asst_1")) == failed
