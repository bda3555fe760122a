"""Language catalog and the per-session language selection."""

from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownLanguageError
from .logger import get_logger

logger = get_logger(__name__)


class Language(BaseModel):
    """A selectable target language.

    Attributes:
        code: Language code sent to the translator (e.g. ``es``).
        display_name: Human-readable name shown in the UI.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(min_length=2)
    display_name: str = Field(alias="displayName")


DEFAULT_LANGUAGES: Tuple[Language, ...] = (
    Language(code="en", display_name="English"),
    Language(code="es", display_name="Spanish"),
    Language(code="fr", display_name="French"),
    Language(code="de", display_name="German"),
    Language(code="ja", display_name="Japanese"),
    Language(code="ko", display_name="Korean"),
)

DEFAULT_LANGUAGE_CODE = "en"


class LanguageContext:
    """
    Holds the language selected for one chat session.

    The owner (the UI session) creates it, changes it only through ``select``
    and hands it to request construction, which reads ``selected``.
    """

    def __init__(
        self,
        languages: Iterable[Language] = DEFAULT_LANGUAGES,
        default_code: str = DEFAULT_LANGUAGE_CODE,
    ) -> None:
        """Initialize the context.

        Args:
            languages: The selectable languages, in display order.
            default_code: Code of the initially selected language.

        Raises:
            UnknownLanguageError: If ``default_code`` is not part of ``languages``.
        """
        self._languages: Tuple[Language, ...] = tuple(languages)
        self._selected = self._require(default_code)

    @property
    def available(self) -> Tuple[Language, ...]:
        return self._languages

    @property
    def selected(self) -> Language:
        return self._selected

    def lookup(self, code: str) -> Optional[Language]:
        """Return the catalog entry for ``code`` or None."""
        for language in self._languages:
            if language.code == code:
                return language
        return None

    def select(self, code: str) -> Language:
        """Change the selected language.

        Args:
            code: Code of a language from ``available``.

        Returns:
            The newly selected language.

        Raises:
            UnknownLanguageError: If the code is not in the catalog.
        """
        language = self._require(code)
        if language != self._selected:
            logger.info("Selected language changed from '%s' to '%s'.", self._selected.code, language.code)
        self._selected = language
        return language

    def display_name(self, code: str) -> str:
        """Return the display name for ``code``, falling back to the code itself."""
        language = self.lookup(code)
        return language.display_name if language else code

    def _require(self, code: str) -> Language:
        language = self.lookup(code)
        if language is None:
            known = ", ".join(lang.code for lang in self._languages)
            msg = f"Unknown language code '{code}'. Available: {known}."
            logger.error(msg)
            raise UnknownLanguageError(msg)
        return language
