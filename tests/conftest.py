from typing import Any, Callable, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import AsyncOpenAI

from chat_tools.core.llm import TextModel

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def mock_model() -> Any:
    """A TextModel whose ``generate`` is an AsyncMock."""
    model = MagicMock(spec=TextModel)
    model.model_name = "test-chat-model"
    model.generate = AsyncMock()
    return model


@pytest.fixture
def requested_urls() -> List[str]:
    return []


@pytest.fixture
def make_http_client(requested_urls: List[str]) -> Callable[[Handler], httpx.AsyncClient]:
    """Builds an httpx client whose transport is served by ``handler``."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requested_urls.append(str(request.url))
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))

    return factory


@pytest.fixture
def mock_openai_client() -> Any:
    client = MagicMock(spec=AsyncOpenAI)
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client
