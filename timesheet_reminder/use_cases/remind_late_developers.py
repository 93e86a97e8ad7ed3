"""Direct-messages each late developer at a fixed checkpoint."""

from __future__ import annotations

import logging

from timesheet_reminder.clock import Clock
from timesheet_reminder.gateways.base import LateDeveloperFinder, SendResult
from timesheet_reminder.models import SendReminderRequest, TriggerWindow
from timesheet_reminder.use_cases.send_reminder import SendReminder

LOGGER = logging.getLogger(__name__)

DEFAULT_TRIGGER_WINDOW = TriggerWindow(day=1, hour=10, minute=30)


class RemindLateDevelopers:
    """Sends one direct reminder per late developer when the trigger window matches."""

    def __init__(
        self,
        late_developer_finder: LateDeveloperFinder,
        send_reminder: SendReminder,
        clock: Clock,
        trigger_window: TriggerWindow = DEFAULT_TRIGGER_WINDOW,
    ) -> None:
        self._late_developer_finder = late_developer_finder
        self._send_reminder = send_reminder
        self._clock = clock
        self._trigger_window = trigger_window

    async def execute(self, text: str) -> list[SendResult]:
        if not self._trigger_window.matches(self._clock.now()):
            return []

        results: list[SendResult] = []
        for user_id in await self._late_developer_finder.find_late_developers():
            result = await self._send_reminder.execute(SendReminderRequest(channel=user_id, text=text))
            result.on_failure(
                lambda error, user_id=user_id: LOGGER.warning(
                    "Reminder to %s was not delivered: %s", user_id, error
                )
            )
            results.append(result)
        LOGGER.info("Sent %d direct reminders", sum(1 for r in results if r.is_success))
        return results
