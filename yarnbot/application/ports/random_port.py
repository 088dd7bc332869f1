"""Random source port for phrasing variation.

Why: empathy prefixes, name personalization and follow-up sentences are
random draws. Routing every draw through this port lets tests script them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """Port for the composer's random draws."""

    @abstractmethod
    def random(self) -> float:
        """Return a float in [0, 1)."""
        ...

    @abstractmethod
    def choice(self, options: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        ...
