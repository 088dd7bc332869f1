"""Translation port: every user-facing string passes through ``t``."""

from typing import Protocol


class TranslatorPort(Protocol):
    """Port for localization of reply text."""

    def t(self, text: str, namespace: str = "chatbot") -> str:
        """Return ``text`` translated for the active locale (identity when none)."""
        ...
