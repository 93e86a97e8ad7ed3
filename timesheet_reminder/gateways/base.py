"""Capability interfaces consumed by the use cases."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from timesheet_reminder.errors import ReminderError
from timesheet_reminder.models import BillablePerson, Developer, Message, Success, TimeEntry
from timesheet_reminder.result import PostMessageResult

SendResult = PostMessageResult[Success, ReminderError]


class MessageSender(ABC):
    """Posts a message to the chat service."""

    @abstractmethod
    async def send(self, message: Message) -> SendResult:
        """Make exactly one outbound call and report the outcome as a result value."""


class BillablePeopleRetriever(ABC):
    """Lists the roster members who should receive reminders."""

    @abstractmethod
    async def retrieve_billable_people(self) -> list[BillablePerson]:
        """Return billable people, excluded accounts already removed."""


class DeveloperRetriever(ABC):
    """Reads developers and their logged time from the time-tracking service."""

    @abstractmethod
    async def retrieve_developers(self) -> list[Developer]:
        """Return active developers."""

    @abstractmethod
    async def retrieve_time_entries(self, start: date, end: date) -> list[TimeEntry]:
        """Return time entries spent between start and end, inclusive."""


class LateDeveloperFinder(ABC):
    """Identifies developers who have not submitted their timesheet."""

    @abstractmethod
    async def find_late_developers(self) -> list[str]:
        """Return chat identifiers of late developers, empty when nobody is late."""
