from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Port for time-related operations.

    The greeting template reads the hour and context updates stamp
    ``last_interaction``; both go through this port so tests can pin time.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current, timezone-aware datetime."""
        ...
