"""Async minute-tick scheduler for reminder jobs."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable

from timesheet_reminder.clock import Clock

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScheduledJob:
    """A named coroutine run on every scheduler tick."""

    name: str
    run: Callable[[], Awaitable[object]]


class ReminderScheduler:
    """Runs jobs once per wall-clock minute.

    Jobs decide for themselves whether the minute is theirs. Ticks are strictly
    sequential and a minute is never ticked twice.
    """

    def __init__(self, clock: Clock, jobs: list[ScheduledJob]) -> None:
        self._clock = clock
        self._jobs = jobs
        self._last_tick: datetime | None = None
        self._stop_event = asyncio.Event()

    @property
    def jobs(self) -> tuple[ScheduledJob, ...]:
        return tuple(self._jobs)

    async def tick(self) -> bool:
        """Run every job for the current minute.

        Returns:
            False if this minute was already ticked, True otherwise.
        """
        minute = self._clock.now().replace(second=0, microsecond=0)
        if minute == self._last_tick:
            return False
        self._last_tick = minute

        for job in self._jobs:
            try:
                await job.run()
            except Exception:  # noqa: BLE001
                LOGGER.exception("Scheduled job %s failed at %s", job.name, minute)
        return True

    async def run_forever(self) -> None:
        """Run scheduler loop until stop() is called."""

        while not self._stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(),
                    timeout=_seconds_until_next_minute(self._clock.now()),
                )
            except asyncio.TimeoutError:
                continue

    def stop(self) -> None:
        """Signal the loop to stop."""

        self._stop_event.set()


def _seconds_until_next_minute(now: datetime) -> float:
    return 60 - now.second - now.microsecond / 1_000_000
