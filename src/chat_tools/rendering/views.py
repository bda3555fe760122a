"""Projection of tool invocation events and translated answers into display views.

Everything here is a pure function of its input: views never trigger tool
calls and never modify the events they are built from.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict

from ..core.language import Language, LanguageContext
from ..core.logger import get_logger
from ..core.messages import StreamMessage, TextPart, ToolInvocationPart
from ..core.tools import ToolFailure, ToolInvocationEvent, ToolSuccess
from ..tools.summarize_url import TOOL_NAME as SUMMARIZE_URL, SummarizeSuccess
from ..tools.translate_text import TOOL_NAME as TRANSLATE_TEXT, TranslateSuccess
from ..translation import TranslatedMessage

logger = get_logger(__name__)


class ViewState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class RenderedView(BaseModel):
    """What the message UI shows for one tool call.

    Attributes:
        state: Which of the three displays to use.
        tool_name: The tool that was called.
        call_id: Call the view belongs to.
        heading: First line of the view.
        body: Main text (summary, translation or error message).
        link: URL to show as a link, if any.
        annotation: Secondary note under the body.
    """

    model_config = ConfigDict(frozen=True)

    state: ViewState
    tool_name: str
    call_id: str
    heading: str
    body: Optional[str] = None
    link: Optional[str] = None
    annotation: Optional[str] = None


class RenderedText(BaseModel):
    """Display of an assistant text answer, with its translation note if any."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    text: str
    annotation: Optional[str] = None
    error_notice: Optional[str] = None


class ToolRenderer:
    """Generic renderer, used for tools without a dedicated view."""

    success_model: Type[ToolSuccess] = ToolSuccess

    def pending(self, event: ToolInvocationEvent) -> RenderedView:
        return self._view(event, ViewState.PENDING, f"Running {event.tool_name}...")

    def success(self, event: ToolInvocationEvent, result: ToolSuccess) -> RenderedView:
        body = json.dumps(result.payload(), ensure_ascii=False)
        return self._view(event, ViewState.SUCCESS, f"Result of {event.tool_name}:", body=body)

    def error(self, event: ToolInvocationEvent, failure: ToolFailure) -> RenderedView:
        return self._view(event, ViewState.ERROR, f"Error running {event.tool_name}:", body=failure.error)

    @staticmethod
    def _view(event: ToolInvocationEvent, state: ViewState, heading: str, **fields: Any) -> RenderedView:
        return RenderedView(state=state, tool_name=event.tool_name, call_id=event.call_id, heading=heading, **fields)


class SummarizeUrlRenderer(ToolRenderer):
    success_model = SummarizeSuccess

    @staticmethod
    def _url(event: ToolInvocationEvent) -> str:
        return str(event.args.get("url") or "Unknown URL")

    def pending(self, event: ToolInvocationEvent) -> RenderedView:
        return self._view(event, ViewState.PENDING, f"Summarizing URL: {self._url(event)}...")

    def success(self, event: ToolInvocationEvent, result: ToolSuccess) -> RenderedView:
        if not isinstance(result, SummarizeSuccess):
            raise TypeError(f"summarizeUrl produced {type(result).__name__}")
        url = self._url(event)
        return self._view(event, ViewState.SUCCESS, f"Summary for: {url}", body=result.summary, link=url)

    def error(self, event: ToolInvocationEvent, failure: ToolFailure) -> RenderedView:
        url = self._url(event)
        return self._view(event, ViewState.ERROR, "Error summarizing URL:", body=failure.error, link=url)


class TranslateTextRenderer(ToolRenderer):
    success_model = TranslateSuccess

    def __init__(self, source_language: Language):
        self.source_language = source_language

    @staticmethod
    def _target(event: ToolInvocationEvent) -> str:
        return str(event.args.get("targetLanguage") or event.args.get("target_language") or "unknown")

    def pending(self, event: ToolInvocationEvent) -> RenderedView:
        return self._view(event, ViewState.PENDING, f"Translating to {self._target(event)}...")

    def success(self, event: ToolInvocationEvent, result: ToolSuccess) -> RenderedView:
        if not isinstance(result, TranslateSuccess):
            raise TypeError(f"translateText produced {type(result).__name__}")
        annotation = f"Translated from {self.source_language.display_name} to {self._target(event)}."
        return self._view(
            event, ViewState.SUCCESS, "Translation:", body=result.translated_text, annotation=annotation
        )

    def error(self, event: ToolInvocationEvent, failure: ToolFailure) -> RenderedView:
        return self._view(event, ViewState.ERROR, f"Translation to {self._target(event)} failed: {failure.error}")


class MessageRenderer:
    """Turns tool invocation events and wire messages into views."""

    def __init__(self, languages: Optional[LanguageContext] = None, source_language_code: str = "en"):
        """
        Args:
            languages: Catalog used to name languages in annotations.
            source_language_code: Language the assistant answers in before translation.
        """
        self.languages = languages or LanguageContext()
        self.source_language_code = source_language_code
        source = self.languages.lookup(source_language_code) or Language(
            code=source_language_code, display_name=source_language_code
        )
        self._fallback = ToolRenderer()
        self._renderers: Dict[str, ToolRenderer] = {
            SUMMARIZE_URL: SummarizeUrlRenderer(),
            TRANSLATE_TEXT: TranslateTextRenderer(source),
        }

    def renderer_for(self, tool_name: str) -> ToolRenderer:
        return self._renderers.get(tool_name, self._fallback)

    def render_invocation(self, event: ToolInvocationEvent) -> RenderedView:
        """Project one event into its pending, success or error view."""
        renderer = self.renderer_for(event.tool_name)
        result = event.result
        if event.is_pending:
            return renderer.pending(event)
        if isinstance(result, ToolFailure):
            return renderer.error(event, result)
        if isinstance(result, ToolSuccess):
            return renderer.success(event, result)
        raise TypeError(f"Unexpected tool result: {type(result).__name__}")

    def render_part(self, part: ToolInvocationPart) -> RenderedView:
        """Render a ``tool-invocation`` wire part."""
        renderer = self.renderer_for(part.tool_name)
        return self.render_invocation(ToolInvocationEvent.from_part(part, renderer.success_model))

    def render_translated(self, message: TranslatedMessage, message_id: str) -> RenderedText:
        """Render an assistant answer together with its translation note."""
        if message.translated_text is not None:
            source = self.languages.display_name(message.source_language_code)
            return RenderedText(
                message_id=message_id,
                text=message.translated_text,
                annotation=f"Translated from {source} to {message.target_language_code}.",
            )
        if message.translation_error is not None:
            return RenderedText(
                message_id=message_id,
                text=message.original_text,
                error_notice=f"Translation to {message.target_language_code} failed: {message.translation_error}",
            )
        return RenderedText(message_id=message_id, text=message.original_text)

    def render_message(self, message: StreamMessage) -> List[Any]:
        """Render every part of a wire message, in order.

        Tool-invocation parts become ``RenderedView`` objects. The text of the
        message becomes a single ``RenderedText``, placed where its first text
        part appears.
        """
        rendered: List[Any] = []
        text_rendered = False
        for part in message.parts:
            if isinstance(part, ToolInvocationPart):
                rendered.append(self.render_part(part))
            elif isinstance(part, TextPart) and not text_rendered:
                translated = TranslatedMessage.from_wire(message, self.source_language_code)
                rendered.append(self.render_translated(translated, message.id))
                text_rendered = True
        return rendered

    def render_wire(self, payload: Mapping[str, Any]) -> List[Any]:
        """Render a raw wire message dictionary."""
        return self.render_message(StreamMessage.model_validate(payload))
