"""Slack Web API gateway."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field

from timesheet_reminder.errors import SlackApiError, TransportError
from timesheet_reminder.gateways.base import BillablePeopleRetriever, MessageSender, SendResult
from timesheet_reminder.models import BillablePerson, Message, Success
from timesheet_reminder.result import PostMessageResult

LOGGER = logging.getLogger(__name__)

POST_MESSAGE_PATH = "/api/chat.postMessage"
USERS_LIST_PATH = "/api/users.list"
SLACKBOT_ID = "USLACKBOT"


class _SlackProfile(BaseModel):
    email: str | None = None


class _SlackMember(BaseModel):
    id: str
    deleted: bool = False
    is_bot: bool = False
    is_app_user: bool = False
    is_restricted: bool = False
    profile: _SlackProfile = Field(default_factory=_SlackProfile)


class _SlackResponseMetadata(BaseModel):
    next_cursor: str = ""


class _SlackUsersPage(BaseModel):
    ok: bool
    error: str | None = None
    members: list[_SlackMember] = Field(default_factory=list)
    response_metadata: _SlackResponseMetadata = Field(default_factory=_SlackResponseMetadata)


class SlackGateway(MessageSender, BillablePeopleRetriever):
    """Posts messages and lists billable members through the Slack Web API."""

    def __init__(
        self,
        address: str,
        token: str,
        excluded_emails: frozenset[str] = frozenset(),
        request_timeout_seconds: float = 30.0,
    ) -> None:
        self._address = address
        self._token = token
        self._excluded_emails = frozenset(email.lower() for email in excluded_emails)
        self._timeout = httpx.Timeout(request_timeout_seconds)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json; charset=utf-8",
        }

    async def send(self, message: Message) -> SendResult:
        """Post a message once; remote and transport failures come back as the failure variant."""

        try:
            async with httpx.AsyncClient(base_url=self._address, timeout=self._timeout) as client:
                response = await client.post(
                    POST_MESSAGE_PATH,
                    headers=self._headers(),
                    json=message.to_payload(),
                )
        except httpx.HTTPError as exc:
            LOGGER.warning("Slack chat.postMessage request failed: %s", exc)
            return PostMessageResult.of_failure(TransportError(f"Slack request failed: {exc}"))

        if response.status_code != 200:
            return PostMessageResult.of_failure(
                TransportError(f"Slack request failed (HTTP {response.status_code})")
            )
        try:
            data = response.json()
        except ValueError:
            return PostMessageResult.of_failure(TransportError("Slack returned a non-JSON response"))

        if isinstance(data, dict) and data.get("ok"):
            return PostMessageResult.of_success(Success())
        error = data.get("error") if isinstance(data, dict) else None
        return PostMessageResult.of_failure(SlackApiError(str(error or "unknown_error")))

    async def retrieve_billable_people(self) -> list[BillablePerson]:
        """List workspace members, dropping deactivated, bot, guest and excluded accounts."""

        people: list[BillablePerson] = []
        cursor = ""
        async with httpx.AsyncClient(base_url=self._address, timeout=self._timeout) as client:
            while True:
                params = {"cursor": cursor} if cursor else {}
                response = await client.get(USERS_LIST_PATH, headers=self._headers(), params=params)
                response.raise_for_status()
                page = _SlackUsersPage.model_validate(response.json())
                if not page.ok:
                    raise SlackApiError(page.error or "unknown_error")
                for member in page.members:
                    if self._is_billable(member):
                        people.append(BillablePerson(id=member.id, email=member.profile.email or ""))
                cursor = page.response_metadata.next_cursor
                if not cursor:
                    break

        LOGGER.info("Retrieved %d billable people from Slack", len(people))
        return people

    def _is_billable(self, member: _SlackMember) -> bool:
        if member.deleted or member.is_bot or member.is_app_user or member.is_restricted:
            return False
        if member.id == SLACKBOT_ID:
            return False
        email = member.profile.email
        if not email:
            return False
        return email.lower() not in self._excluded_emails
