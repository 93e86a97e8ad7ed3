"""Error types raised or returned by gateways."""

from __future__ import annotations


class ReminderError(Exception):
    """Base class for reminder failures."""


class SlackApiError(ReminderError):
    """Slack answered but rejected the request (``ok: false``)."""


class TransportError(ReminderError):
    """A gateway could not be reached or answered with an unusable response."""


class HarvestApiError(ReminderError):
    """Harvest answered with a non-success status."""

    def __init__(self, status_code: int, path: str) -> None:
        super().__init__(f"Harvest request to {path} failed (HTTP {status_code})")
        self.status_code = status_code
        self.path = path
