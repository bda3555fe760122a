import pytest

from chat_tools.core.exceptions import UnknownLanguageError
from chat_tools.core.language import DEFAULT_LANGUAGES, Language, LanguageContext


def test_defaults_to_english() -> None:
    context = LanguageContext()

    assert context.selected == Language(code="en", display_name="English")
    assert [lang.code for lang in context.available] == ["en", "es", "fr", "de", "ja", "ko"]


def test_select_changes_selection() -> None:
    context = LanguageContext()

    selected = context.select("ja")

    assert selected.display_name == "Japanese"
    assert context.selected is selected


def test_select_unknown_code_keeps_previous_selection() -> None:
    context = LanguageContext()
    context.select("es")

    with pytest.raises(UnknownLanguageError, match="Unknown language code 'xx'"):
        context.select("xx")
    assert context.selected.code == "es"


def test_custom_catalog_and_default() -> None:
    languages = [Language(code="it", display_name="Italian"), Language(code="pt", display_name="Portuguese")]

    context = LanguageContext(languages, default_code="pt")

    assert context.selected.code == "pt"
    assert context.lookup("es") is None
    assert context.display_name("it") == "Italian"
    assert context.display_name("zz") == "zz"


def test_invalid_default_is_rejected() -> None:
    with pytest.raises(UnknownLanguageError):
        LanguageContext(DEFAULT_LANGUAGES, default_code="xx")


def test_language_accepts_wire_alias() -> None:
    assert Language.model_validate({"code": "de", "displayName": "German"}).display_name == "German"
