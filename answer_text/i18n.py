"""
Localized Message Catalog

Status messages shown while an answer is being produced ("Let me search for
...") live in a flat JSON catalog: language code -> message key -> template.
Templates use ${name} placeholders.

Lookups never fail. A missing language or key falls back along the chain
requested language -> English -> the literal key, and every step taken is
reported as an I18nDiagnostic on the returned Translation (and logged at
WARNING), so callers can surface gaps in the catalog.

Usage:
    from answer_text.i18n import MessageCatalog, get_text

    catalog = MessageCatalog.from_file("i18n.json")
    result = catalog.resolve("search_for", "de", {"keywords": "Paris"})
    result.text         # "Ich suche nach Paris, ..."
    result.diagnostics  # []

    get_text("final_answer", "fr")
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import DEFAULT_CATALOG_PATH
from .exceptions import CatalogLoadError
from .logging_config import get_logger
from .models import I18nDiagnostic, Translation

logger = get_logger(__name__)

FALLBACK_LANGUAGE = "en"


def _validate_messages(messages: Any, path: Optional[str] = None) -> dict[str, dict[str, str]]:
    if not isinstance(messages, Mapping):
        raise CatalogLoadError("Catalog must map language codes to messages", path=path)

    validated: dict[str, dict[str, str]] = {}
    for language, entries in messages.items():
        if not isinstance(entries, Mapping):
            raise CatalogLoadError(
                f"Messages for language '{language}' must be a mapping", path=path
            )
        for key, template in entries.items():
            if not isinstance(template, str):
                raise CatalogLoadError(
                    f"Message '{key}' for language '{language}' must be a string", path=path
                )
        validated[str(language)] = dict(entries)
    return validated


class MessageCatalog:
    """Explicit (language, key) -> template mapping with fallback resolution."""

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, str]],
        default_language: str = FALLBACK_LANGUAGE,
        path: Optional[str] = None,
    ):
        self._messages = _validate_messages(messages, path=path)
        self.default_language = default_language
        self.path = path

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        default_language: str = FALLBACK_LANGUAGE,
    ) -> "MessageCatalog":
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(path=str(path), original_error=exc) from exc

        catalog = cls(data, default_language, path=str(path))
        logger.debug(f"Loaded message catalog with {len(catalog._messages)} languages from {path}")
        return catalog

    @property
    def languages(self) -> list[str]:
        return sorted(self._messages)

    def has_message(self, key: str, language: str) -> bool:
        return bool(self._messages.get(language, {}).get(key))

    def _diagnose(
        self,
        diagnostics: list[I18nDiagnostic],
        kind: str,
        key: str,
        language: str,
        message: str,
    ) -> None:
        logger.warning(message)
        diagnostics.append(
            I18nDiagnostic(kind=kind, key=key, language=language, message=message)
        )

    def resolve(
        self,
        key: str,
        language: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> Translation:
        """
        Look up ``key`` for ``language`` and fill in ``params``.

        Falls back to English, then to the literal key. The literal key is
        returned as-is, without parameter substitution.
        """
        language = language or self.default_language
        diagnostics: list[I18nDiagnostic] = []

        if language not in self._messages:
            self._diagnose(
                diagnostics, "missing_language", key, language,
                f"Language '{language}' not found, falling back to English.",
            )
            language = FALLBACK_LANGUAGE

        template = self._messages.get(language, {}).get(key)

        if not template and language != FALLBACK_LANGUAGE:
            self._diagnose(
                diagnostics, "missing_key", key, language,
                f"Key '{key}' not found for language '{language}', falling back to English.",
            )
            language = FALLBACK_LANGUAGE
            template = self._messages.get(language, {}).get(key)

        if not template:
            self._diagnose(
                diagnostics, "missing_default", key, FALLBACK_LANGUAGE,
                f"Key '{key}' not found for English either.",
            )
            return Translation(key=key, language=language, text=key, diagnostics=diagnostics)

        text = template
        for name, value in (params or {}).items():
            text = text.replace(f"${{{name}}}", str(value))

        return Translation(key=key, language=language, text=text, diagnostics=diagnostics)

    def get_text(
        self,
        key: str,
        language: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> str:
        return self.resolve(key, language, params).text


# Loaded on first use, read-only afterwards.
_default_catalog: Optional[MessageCatalog] = None


def get_default_catalog() -> MessageCatalog:
    """Get or load the packaged message catalog (singleton)."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = MessageCatalog.from_file(DEFAULT_CATALOG_PATH)
    return _default_catalog


def get_text(
    key: str,
    language: str = FALLBACK_LANGUAGE,
    params: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve ``key`` against the packaged catalog; see MessageCatalog.resolve()."""
    return get_default_catalog().get_text(key, language, params)
