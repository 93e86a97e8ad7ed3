"""Finds developers whose timesheet for the current week is incomplete."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta

from timesheet_reminder.clock import Clock
from timesheet_reminder.gateways.base import (
    BillablePeopleRetriever,
    DeveloperRetriever,
    LateDeveloperFinder,
)
from timesheet_reminder.models import Developer, TimeEntry

LOGGER = logging.getLogger(__name__)

WORKING_DAYS_PER_WEEK = 5


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""

    return day - timedelta(days=day.weekday())


def hours_by_developer(entries: list[TimeEntry]) -> dict[int, float]:
    totals: dict[int, float] = defaultdict(float)
    for entry in entries:
        totals[entry.user_id] += entry.hours
    return dict(totals)


def expected_hours(developer: Developer, today: date) -> float:
    """Return the share of weekly capacity due by the end of ``today``.

    Capacity is spread evenly over the five working days; weekends owe the full week.
    """

    working_days_elapsed = min(today.weekday() + 1, WORKING_DAYS_PER_WEEK)
    return developer.weekly_capacity_hours * working_days_elapsed / WORKING_DAYS_PER_WEEK


def is_late(developer: Developer, logged_hours: float, today: date) -> bool:
    if developer.weekly_capacity_hours <= 0:
        return False
    return logged_hours < expected_hours(developer, today)


class GetLateDevelopers(LateDeveloperFinder):
    """Matches Harvest developers short of their weekly hours to Slack members.

    The checked period runs from Monday of the current week up to today, and
    a developer is late when they logged less than their capacity prorated to
    the working days elapsed so far. Late
    developers are returned as Slack member ids in Harvest's ordering; a late
    developer whose email has no Slack match is logged and left out.
    """

    def __init__(
        self,
        developer_retriever: DeveloperRetriever,
        billable_people_retriever: BillablePeopleRetriever,
        clock: Clock,
    ) -> None:
        self._developer_retriever = developer_retriever
        self._billable_people_retriever = billable_people_retriever
        self._clock = clock

    async def find_late_developers(self) -> list[str]:
        today = self._clock.now().date()
        developers = await self._developer_retriever.retrieve_developers()
        entries = await self._developer_retriever.retrieve_time_entries(week_start(today), today)
        logged = hours_by_developer(entries)

        late = [dev for dev in developers if is_late(dev, logged.get(dev.id, 0.0), today)]
        if not late:
            return []

        people = await self._billable_people_retriever.retrieve_billable_people()
        slack_ids = {person.email.lower(): person.id for person in people}

        late_ids: list[str] = []
        for developer in late:
            slack_id = slack_ids.get(developer.email.lower())
            if slack_id is None:
                LOGGER.warning(
                    "Late developer %s (%s) has no matching Slack member",
                    developer.full_name,
                    developer.email,
                )
                continue
            late_ids.append(slack_id)
        LOGGER.info("Found %d late developers", len(late_ids))
        return late_ids
