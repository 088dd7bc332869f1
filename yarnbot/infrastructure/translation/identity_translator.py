"""Translator adapters."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class IdentityTranslator:
    """English-only deployment: every string is returned unchanged."""

    def t(self, text: str, namespace: str = "chatbot") -> str:
        return text


class DictionaryTranslator:
    """Exact-string lookup per namespace; unknown strings fall through untranslated.

    Expected JSON shape::

        {"chatbot": {"What products do you offer?": "..."}}
    """

    def __init__(self, messages: Mapping[str, Mapping[str, str]]) -> None:
        self._messages = {ns: dict(table) for ns, table in messages.items()}

    @classmethod
    def from_json(cls, path: str | Path) -> DictionaryTranslator:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"translation file {path} must contain a JSON object")
        return cls({ns: table for ns, table in raw.items() if isinstance(table, dict)})

    def t(self, text: str, namespace: str = "chatbot") -> str:
        translated = self._messages.get(namespace, {}).get(text)
        if translated is None:
            logger.debug("No %s translation for %r", namespace, text[:40])
            return text
        return translated
