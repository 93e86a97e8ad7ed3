"""Posts the list of late developers to a channel at a fixed checkpoint."""

from __future__ import annotations

import logging

from timesheet_reminder.clock import Clock
from timesheet_reminder.errors import ReminderError
from timesheet_reminder.gateways.base import LateDeveloperFinder, MessageSender, SendResult
from timesheet_reminder.models import Message, ReminderRequest, TriggerWindow

LOGGER = logging.getLogger(__name__)

DEFAULT_TRIGGER_WINDOW = TriggerWindow(day=1, hour=13, minute=30)


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def compose_shame_text(base_message: str, late_developer_ids: list[str]) -> str:
    """Append one bulleted mention per late developer, in the given order."""

    return base_message + "".join(f"\n• {mention(user_id)}" for user_id in late_developer_ids)


class ShameLateDevelopers:
    """Reminder orchestrator.

    Only acts when the clock reads exactly the trigger window's day, hour and
    minute. Any other instant is a silent no-op: neither the finder nor the
    sender is called. There is no catch-up for a missed minute.
    """

    def __init__(
        self,
        late_developer_finder: LateDeveloperFinder,
        message_sender: MessageSender,
        clock: Clock,
        trigger_window: TriggerWindow = DEFAULT_TRIGGER_WINDOW,
    ) -> None:
        self._late_developer_finder = late_developer_finder
        self._message_sender = message_sender
        self._clock = clock
        self._trigger_window = trigger_window

    async def execute(self, request: ReminderRequest) -> SendResult | None:
        """Send the shame message once if now is the trigger instant.

        Returns:
            The send result, or None when the trigger window did not match.
            A failed send is logged here and not retried.
        """
        now = self._clock.now()
        if not self._trigger_window.matches(now):
            LOGGER.debug("Skipping shame reminder at %s (fires on %s)", now, self._trigger_window)
            return None

        late_developer_ids = await self._late_developer_finder.find_late_developers()
        message = Message(
            channel=request.channel,
            text=compose_shame_text(request.message, late_developer_ids),
        )
        result = await self._message_sender.send(message)
        return result.on_failure(lambda error: _log_failure(request.channel, error))


def _log_failure(channel: str, error: ReminderError) -> None:
    LOGGER.warning("Shame reminder to %s was not delivered: %s", channel, error)
