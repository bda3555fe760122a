"""``summarizeUrl``: fetch a web page and let the model summarize its text."""

import re
from typing import Annotated, Optional, Union

import httpx
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import AnyUrl

from ..core.exceptions import (
    ContentTypeError,
    EmptyContentError,
    HttpStatusError,
    ModelInvocationError,
    NetworkError,
    ToolRecoverableError,
)
from ..core.llm import TextModel
from ..core.logger import get_logger
from ..core.tools import ToolDefinition, ToolFailure, ToolSuccess

logger = get_logger(__name__)

TOOL_NAME = "summarizeUrl"
DEFAULT_CHAR_LIMIT = 4000

_URL_ADAPTER = TypeAdapter(AnyUrl)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>?")


def _absolute_url(value: str) -> str:
    # Validate only; the caller's spelling of the URL is what gets fetched.
    _URL_ADAPTER.validate_python(value)
    return value


class SummarizeUrlArgs(BaseModel):
    """Input of ``summarizeUrl``."""

    model_config = ConfigDict(extra="forbid")

    url: Annotated[
        str,
        AfterValidator(_absolute_url),
        Field(description="The URL of the web page to summarize.", json_schema_extra={"format": "uri"}),
    ]


class SummarizeSuccess(ToolSuccess):
    """Successful summary."""

    model_config = ConfigDict(extra="ignore")

    summary: str


SummarizeUrlResult = Union[SummarizeSuccess, ToolFailure]


def strip_html_tags(html: str) -> str:
    """Remove comments and markup tags, leaving the raw text content."""
    return _TAG_RE.sub("", _COMMENT_RE.sub("", html))


class SummarizeUrlTool:
    """
    Summarizes the content of a web page.

    One GET request, one model completion, no retries. Every failure is
    returned as a ``ToolFailure`` whose message names the failing step.
    """

    name = TOOL_NAME
    description = "Summarizes the content of a web page."

    def __init__(self, http_client: httpx.AsyncClient, model: TextModel, char_limit: int = DEFAULT_CHAR_LIMIT):
        """
        Args:
            http_client: Client used to fetch pages.
            model: Language model producing the summary.
            char_limit: Number of extracted characters included in the prompt.
        """
        self.http_client = http_client
        self.model = model
        self.char_limit = char_limit

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            func=self.execute,
            args_model=SummarizeUrlArgs,
            success_model=SummarizeSuccess,
        )

    async def execute(self, args: SummarizeUrlArgs) -> SummarizeUrlResult:
        """Fetch ``args.url`` and summarize it.

        Args:
            args: Validated tool input.

        Returns:
            ``SummarizeSuccess`` or ``ToolFailure``.
        """
        try:
            html = await self._fetch_html(args.url)
            text = self._extract_text(html)
            summary = await self._summarize(text)
        except ToolRecoverableError as exc:
            logger.warning("summarizeUrl failed for '%s': %s", args.url, exc)
            return ToolFailure(error=str(exc))

        logger.info("Summarized '%s' (%d characters of text).", args.url, len(text))
        return SummarizeSuccess(summary=summary)

    async def _fetch_html(self, url: str) -> str:
        logger.debug("Fetching '%s'.", url)
        try:
            response = await self.http_client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Network error when fetching the page: {exc}") from exc

        if not response.is_success:
            raise HttpStatusError(response.status_code)

        content_type: Optional[str] = response.headers.get("content-type")
        if content_type and "text/html" not in content_type.lower():
            raise ContentTypeError(content_type)

        return response.text

    @staticmethod
    def _extract_text(html: str) -> str:
        text = strip_html_tags(html)
        if not text.strip():
            raise EmptyContentError("No text content found on the page to summarize.")
        return text

    async def _summarize(self, text: str) -> str:
        prompt = f"Summarize the following text:\n\n{text[: self.char_limit]}"
        try:
            generation = await self.model.generate(prompt)
        except Exception as exc:
            raise ModelInvocationError(f"AI summarization failed: {exc}") from exc

        return generation if isinstance(generation, str) else generation.text
