from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from timesheet_reminder.clock import Clock
from timesheet_reminder.models import BillablePerson, Developer, TimeEntry
from timesheet_reminder.use_cases.get_late_developers import (
    GetLateDevelopers,
    expected_hours,
    week_start,
)

# Friday 1 March 2019; the checked week starts Monday 25 February.
FRIDAY = datetime(2019, 3, 1, 13, 30, tzinfo=timezone.utc)


class ClockStub(Clock):
    def now(self) -> datetime:
        return FRIDAY


class FakeHarvest:
    def __init__(self, developers: list[Developer], entries: list[TimeEntry]) -> None:
        self._developers = developers
        self._entries = entries
        self.requested_ranges: list[tuple[date, date]] = []

    async def retrieve_developers(self) -> list[Developer]:
        return self._developers

    async def retrieve_time_entries(self, start: date, end: date) -> list[TimeEntry]:
        self.requested_ranges.append((start, end))
        return self._entries


class FakeSlack:
    def __init__(self, people: list[BillablePerson]) -> None:
        self._people = people
        self.calls = 0

    async def retrieve_billable_people(self) -> list[BillablePerson]:
        self.calls += 1
        return self._people


def _dev(dev_id: int, name: str, capacity: float = 35.0) -> Developer:
    return Developer(
        id=dev_id,
        first_name=name,
        last_name="",
        email=f"{name.lower()}@friends.com",
        weekly_capacity_hours=capacity,
    )


def _hours(dev_id: int, hours: float) -> TimeEntry:
    return TimeEntry(user_id=dev_id, spent_date=date(2019, 2, 25), hours=hours)


SLACK_PEOPLE = [
    BillablePerson(id="W123AMON", email="monica@friends.com"),
    BillablePerson(id="W0123CHAN", email="Chandler@Friends.com"),
    BillablePerson(id="W789ROSS", email="ross@friends.com"),
]


def test_week_start_is_monday():
    assert week_start(date(2019, 3, 1)) == date(2019, 2, 25)
    assert week_start(date(2019, 2, 25)) == date(2019, 2, 25)


@pytest.mark.asyncio
async def test_returns_slack_ids_of_developers_short_of_capacity_in_harvest_order():
    harvest = FakeHarvest(
        developers=[_dev(1, "Chandler"), _dev(2, "Monica"), _dev(3, "Ross")],
        entries=[_hours(1, 20), _hours(2, 35), _hours(3, 10), _hours(3, 5)],
    )

    late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), ClockStub()).find_late_developers()

    assert late == ["W0123CHAN", "W789ROSS"]
    assert harvest.requested_ranges == [(date(2019, 2, 25), date(2019, 3, 1))]


@pytest.mark.asyncio
async def test_returns_empty_list_when_nobody_is_late():
    harvest = FakeHarvest(developers=[_dev(1, "Chandler")], entries=[_hours(1, 40)])
    slack = FakeSlack(SLACK_PEOPLE)

    late = await GetLateDevelopers(harvest, slack, ClockStub()).find_late_developers()

    assert late == []
    assert slack.calls == 0


@pytest.mark.asyncio
async def test_developer_without_logged_time_is_late():
    harvest = FakeHarvest(developers=[_dev(2, "Monica")], entries=[])

    late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), ClockStub()).find_late_developers()

    assert late == ["W123AMON"]


@pytest.mark.asyncio
async def test_zero_capacity_developer_is_never_late():
    harvest = FakeHarvest(developers=[_dev(1, "Chandler", capacity=0)], entries=[])

    late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), ClockStub()).find_late_developers()

    assert late == []


@pytest.mark.asyncio
async def test_late_developer_without_slack_account_is_skipped(caplog):
    harvest = FakeHarvest(developers=[_dev(4, "Joey"), _dev(3, "Ross")], entries=[])

    with caplog.at_level("WARNING"):
        late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), ClockStub()).find_late_developers()

    assert late == ["W789ROSS"]
    assert "joey@friends.com" in caplog.text


class MondayClock(Clock):
    def now(self) -> datetime:
        return datetime(2019, 4, 1, 13, 30, tzinfo=timezone.utc)


def test_expected_hours_are_prorated_across_the_working_week():
    developer = _dev(1, "Chandler", capacity=35.0)

    assert expected_hours(developer, date(2019, 4, 1)) == 7.0
    assert expected_hours(developer, date(2019, 4, 3)) == 21.0
    assert expected_hours(developer, date(2019, 4, 5)) == 35.0
    assert expected_hours(developer, date(2019, 4, 7)) == 35.0


@pytest.mark.asyncio
async def test_full_day_logged_on_monday_is_not_late():
    harvest = FakeHarvest(
        developers=[_dev(2, "Monica")],
        entries=[TimeEntry(user_id=2, spent_date=date(2019, 4, 1), hours=7.0)],
    )

    late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), MondayClock()).find_late_developers()

    assert late == []
    assert harvest.requested_ranges == [(date(2019, 4, 1), date(2019, 4, 1))]


@pytest.mark.asyncio
async def test_short_day_on_monday_is_late():
    harvest = FakeHarvest(
        developers=[_dev(2, "Monica")],
        entries=[TimeEntry(user_id=2, spent_date=date(2019, 4, 1), hours=4.0)],
    )

    late = await GetLateDevelopers(harvest, FakeSlack(SLACK_PEOPLE), MondayClock()).find_late_developers()

    assert late == ["W123AMON"]
