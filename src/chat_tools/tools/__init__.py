"""Built-in tools and the helpers wiring them into a registry."""

from typing import Optional

import httpx

from ..core.config import Settings
from ..core.llm import TextModel
from ..core.tools import ToolRegistry
from .summarize_url import SummarizeSuccess, SummarizeUrlArgs, SummarizeUrlTool, strip_html_tags
from .translate_text import TranslateSuccess, TranslateTextArgs, TranslateTextTool


def create_http_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    """HTTP client used by ``summarizeUrl``; redirects are followed."""
    settings = settings or Settings()
    return httpx.AsyncClient(timeout=settings.fetch_timeout, follow_redirects=True)


def build_default_registry(
    http_client: httpx.AsyncClient,
    model: TextModel,
    settings: Optional[Settings] = None,
    registry: Optional[ToolRegistry] = None,
) -> ToolRegistry:
    """Register ``summarizeUrl`` and ``translateText``.

    Args:
        http_client: Client used by the summarizer to fetch pages.
        model: Language model shared by both tools.
        settings: Source language and summary limit. Defaults apply when omitted.
        registry: Registry to fill. A new one is created when omitted.

    Returns:
        The populated registry.
    """
    settings = settings or Settings()
    registry = registry if registry is not None else ToolRegistry()
    registry.register(SummarizeUrlTool(http_client, model, char_limit=settings.summary_char_limit).definition())
    registry.register(TranslateTextTool(model, source_language=settings.source_language).definition())
    return registry


__all__ = [
    "SummarizeUrlTool",
    "SummarizeUrlArgs",
    "SummarizeSuccess",
    "TranslateTextTool",
    "TranslateTextArgs",
    "TranslateSuccess",
    "strip_html_tags",
    "create_http_client",
    "build_default_registry",
]
