"""Time sources for schedule checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, tzinfo


class Clock(ABC):
    """Supplies the current instant to time-dependent use cases."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware instant."""


class SystemClock(Clock):
    """Wall clock in a fixed timezone."""

    def __init__(self, tz: tzinfo) -> None:
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)
