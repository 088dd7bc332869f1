"""System clock adapter providing real wall-clock time.

This is the production implementation of ClockPort.
For tests, inject a fixed clock instead.
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo

from ...application.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    """Production clock adapter.

    ``tz`` is the shop's timezone: the greeting says "Good morning" by the
    hour in that zone, not by the server's.
    """

    def __init__(self, tz: tzinfo = UTC) -> None:
        self._tz = tz

    def now(self) -> datetime:  # pragma: no cover - trivial
        return datetime.now(self._tz)
