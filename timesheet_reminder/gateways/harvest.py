"""Harvest v2 API gateway."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx
from pydantic import BaseModel, Field

from timesheet_reminder.errors import HarvestApiError
from timesheet_reminder.gateways.base import DeveloperRetriever
from timesheet_reminder.models import Developer, TimeEntry

LOGGER = logging.getLogger(__name__)

USERS_PATH = "/api/v2/users"
TIME_ENTRIES_PATH = "/api/v2/time_entries"
USER_AGENT = "timesheet-reminder"
_SECONDS_PER_HOUR = 3600


class _HarvestUser(BaseModel):
    id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    is_active: bool = True
    # Harvest reports capacity in seconds per week.
    weekly_capacity: int = 0


class _HarvestUsersPage(BaseModel):
    users: list[_HarvestUser] = Field(default_factory=list)
    next_page: int | None = None


class _HarvestEntryUser(BaseModel):
    id: int


class _HarvestTimeEntry(BaseModel):
    spent_date: date
    hours: float = 0.0
    user: _HarvestEntryUser


class _HarvestTimeEntriesPage(BaseModel):
    time_entries: list[_HarvestTimeEntry] = Field(default_factory=list)
    next_page: int | None = None


class HarvestGateway(DeveloperRetriever):
    """Reads users and time entries from Harvest."""

    def __init__(
        self,
        address: str,
        token: str,
        account_id: str = "",
        request_timeout_seconds: float = 30.0,
    ) -> None:
        self._address = address
        self._token = token
        self._account_id = account_id
        self._timeout = httpx.Timeout(request_timeout_seconds)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "User-Agent": USER_AGENT,
        }
        if self._account_id:
            headers["Harvest-Account-Id"] = self._account_id
        return headers

    async def retrieve_developers(self) -> list[Developer]:
        pages = await self._get_pages(USERS_PATH, {"is_active": "true"})
        developers = [
            Developer(
                id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                is_active=user.is_active,
                weekly_capacity_hours=user.weekly_capacity / _SECONDS_PER_HOUR,
            )
            for page in pages
            for user in _HarvestUsersPage.model_validate(page).users
            if user.is_active
        ]
        LOGGER.info("Retrieved %d active developers from Harvest", len(developers))
        return developers

    async def retrieve_time_entries(self, start: date, end: date) -> list[TimeEntry]:
        params = {"from": start.isoformat(), "to": end.isoformat()}
        pages = await self._get_pages(TIME_ENTRIES_PATH, params)
        return [
            TimeEntry(user_id=entry.user.id, spent_date=entry.spent_date, hours=entry.hours)
            for page in pages
            for entry in _HarvestTimeEntriesPage.model_validate(page).time_entries
        ]

    async def _get_pages(self, path: str, params: dict[str, str]) -> list[dict[str, Any]]:
        """Follow Harvest's ``next_page`` links and return every raw page."""

        pages: list[dict[str, Any]] = []
        page_number: int | None = 1
        async with httpx.AsyncClient(base_url=self._address, timeout=self._timeout) as client:
            while page_number is not None:
                response = await client.get(
                    path,
                    headers=self._headers(),
                    params={**params, "page": str(page_number)},
                )
                if response.status_code != 200:
                    raise HarvestApiError(response.status_code, path)
                data = response.json()
                pages.append(data)
                page_number = data.get("next_page")
        return pages
