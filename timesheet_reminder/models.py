"""Core domain models used across layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Message:
    """Outgoing chat message; a field left as None is omitted on the wire."""

    channel: str | None = None
    text: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.channel is not None:
            payload["channel"] = self.channel
        if self.text is not None:
            payload["text"] = self.text
        return payload


@dataclass(frozen=True, slots=True)
class ReminderRequest:
    """Base message and target channel for a shame reminder."""

    message: str = ""
    channel: str = ""


@dataclass(frozen=True, slots=True)
class SendReminderRequest:
    """A single direct reminder."""

    channel: str
    text: str


@dataclass(frozen=True, slots=True)
class Success:
    """Marker carried by a successful send."""


@dataclass(frozen=True, slots=True)
class BillablePerson:
    """Slack member eligible for timesheet reminders."""

    id: str
    email: str


@dataclass(slots=True)
class Developer:
    """Active Harvest user."""

    id: int
    first_name: str
    last_name: str
    email: str
    is_active: bool = True
    weekly_capacity_hours: float = 0.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True)
class TimeEntry:
    """Hours a Harvest user logged against a single day."""

    user_id: int
    spent_date: date
    hours: float


@dataclass(frozen=True, slots=True)
class TriggerWindow:
    """Exact day-of-month, hour and minute at which a reminder may fire."""

    day: int
    hour: int
    minute: int

    def matches(self, instant: datetime) -> bool:
        return (
            instant.day == self.day
            and instant.hour == self.hour
            and instant.minute == self.minute
        )

    def __str__(self) -> str:
        return f"day {self.day} at {self.hour:02d}:{self.minute:02d}"
