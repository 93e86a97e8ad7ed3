"""Sends a single direct reminder."""

from __future__ import annotations

from timesheet_reminder.gateways.base import MessageSender, SendResult
from timesheet_reminder.models import Message, SendReminderRequest


class SendReminder:
    """Forwards a reminder's channel and text to the message sender unchanged."""

    def __init__(self, message_sender: MessageSender) -> None:
        self._message_sender = message_sender

    async def execute(self, request: SendReminderRequest) -> SendResult:
        return await self._message_sender.send(Message(channel=request.channel, text=request.text))
