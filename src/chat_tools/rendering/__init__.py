"""Views for tool calls and translated answers."""

from .views import (
    ViewState,
    RenderedView,
    RenderedText,
    ToolRenderer,
    SummarizeUrlRenderer,
    TranslateTextRenderer,
    MessageRenderer,
)

__all__ = [
    "ViewState",
    "RenderedView",
    "RenderedText",
    "ToolRenderer",
    "SummarizeUrlRenderer",
    "TranslateTextRenderer",
    "MessageRenderer",
]
