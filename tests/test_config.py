import logging
import pytest

from pydantic import ValidationError

from chat_tools.core.config import Settings, load_settings
from chat_tools.core.logger import get_logger, setup_logging


def test_defaults_without_environment() -> None:
    settings = load_settings(environ={})

    assert settings == Settings()
    assert settings.model_name == "gpt-4o-mini"
    assert settings.source_language == "en"
    assert settings.summary_char_limit == 4000


def test_reads_environment() -> None:
    settings = load_settings(
        environ={
            "OPENAI_API_KEY": "sk-test",
            "CHAT_TOOLS_MODEL": "gpt-4o",
            "CHAT_TOOLS_SUMMARY_CHAR_LIMIT": "2000",
            "CHAT_TOOLS_FETCH_TIMEOUT": "2.5",
            "CHAT_TOOLS_MAX_FUNCTION_LOOPS": "",
        }
    )

    assert settings.openai_api_key == "sk-test"
    assert settings.model_name == "gpt-4o"
    assert settings.summary_char_limit == 2000
    assert settings.fetch_timeout == 2.5
    assert settings.max_function_loops == 5


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        load_settings(environ={"CHAT_TOOLS_SUMMARY_CHAR_LIMIT": "0"})


def test_loggers_live_under_package_namespace() -> None:
    assert get_logger().name == "chat_tools"
    assert get_logger("tools").name == "chat_tools.tools"
    assert get_logger("chat_tools.tools.summarize_url").name == "chat_tools.tools.summarize_url"


def test_setup_logging_is_idempotent() -> None:
    logger = logging.getLogger("chat_tools")
    before = list(logger.handlers)
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        added = [h for h in logger.handlers if h not in before]
        assert len(added) <= 1
    finally:
        for handler in logger.handlers[:]:
            if handler not in before:
                logger.removeHandler(handler)
