"""Runtime configuration loaded from the environment (and an optional ``.env`` file)."""

import os
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .logger import get_logger

logger = get_logger(__name__)

_ENV_PREFIX = "CHAT_TOOLS_"


class Settings(BaseModel):
    """
    Settings shared by the tool pipeline and the chat session.

    Attributes:
        openai_api_key: API key for the OpenAI client. Optional so tests can run offline.
        openai_base_url: Optional override for OpenAI-compatible endpoints.
        model_name: Chat model used for completions and by the tools.
        source_language: Language code the assistant answers in before translation.
        summary_char_limit: Number of extracted characters sent to the summarizer.
        fetch_timeout: Timeout in seconds handed to the HTTP client.
        max_function_loops: Maximum number of tool rounds per chat turn.
    """

    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model_name: str = "gpt-4o-mini"
    source_language: str = Field(default="en", min_length=2)
    summary_char_limit: int = Field(default=4000, gt=0)
    fetch_timeout: float = Field(default=10.0, gt=0)
    max_function_loops: int = Field(default=5, ge=1)


def load_settings(environ: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    """Build ``Settings`` from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.
        use_dotenv: Whether to load a ``.env`` file (searched upwards from the cwd) first.

    Returns:
        The validated settings.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    if use_dotenv and environ is None:
        env_file = find_dotenv(usecwd=True)
        if env_file:
            logger.debug("Loading .env from: %s", env_file)
            load_dotenv(env_file)

    env = os.environ if environ is None else environ

    values = {
        "openai_api_key": env.get("OPENAI_API_KEY"),
        "openai_base_url": env.get("OPENAI_BASE_URL"),
        "model_name": env.get(f"{_ENV_PREFIX}MODEL"),
        "source_language": env.get(f"{_ENV_PREFIX}SOURCE_LANGUAGE"),
        "summary_char_limit": env.get(f"{_ENV_PREFIX}SUMMARY_CHAR_LIMIT"),
        "fetch_timeout": env.get(f"{_ENV_PREFIX}FETCH_TIMEOUT"),
        "max_function_loops": env.get(f"{_ENV_PREFIX}MAX_FUNCTION_LOOPS"),
    }
    # Unset variables fall back to the model defaults.
    return Settings(**{key: value for key, value in values.items() if value not in (None, "")})
