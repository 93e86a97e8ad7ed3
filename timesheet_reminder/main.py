"""Application entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging
from zoneinfo import ZoneInfo

from timesheet_reminder.clock import SystemClock
from timesheet_reminder.config import (
    Settings,
    excluded_emails,
    load_settings,
    reminder_window,
    shame_window,
)
from timesheet_reminder.gateways.harvest import HarvestGateway
from timesheet_reminder.gateways.slack import SlackGateway
from timesheet_reminder.models import ReminderRequest
from timesheet_reminder.scheduler import ReminderScheduler, ScheduledJob
from timesheet_reminder.use_cases.get_late_developers import GetLateDevelopers
from timesheet_reminder.use_cases.remind_late_developers import RemindLateDevelopers
from timesheet_reminder.use_cases.send_reminder import SendReminder
from timesheet_reminder.use_cases.shame_late_developers import ShameLateDevelopers

LOGGER = logging.getLogger(__name__)


def build_scheduler(settings: Settings) -> ReminderScheduler:
    """Wire gateways and use cases into a scheduler."""

    clock = SystemClock(ZoneInfo(settings.timezone))
    slack = SlackGateway(
        address=settings.slack_api_address,
        token=settings.slack_token,
        excluded_emails=excluded_emails(settings),
        request_timeout_seconds=settings.request_timeout_seconds,
    )
    harvest = HarvestGateway(
        address=settings.harvest_api_address,
        token=settings.harvest_token,
        account_id=settings.harvest_account_id,
        request_timeout_seconds=settings.request_timeout_seconds,
    )
    finder = GetLateDevelopers(harvest, slack, clock)

    remind = RemindLateDevelopers(finder, SendReminder(slack), clock, reminder_window(settings))
    shame = ShameLateDevelopers(finder, slack, clock, shame_window(settings))
    shame_request = ReminderRequest(message=settings.shame_message, channel=settings.shame_channel)

    return ReminderScheduler(
        clock,
        [
            ScheduledJob("remind-late-developers", lambda: remind.execute(settings.reminder_text)),
            ScheduledJob("shame-late-developers", lambda: shame.execute(shame_request)),
        ],
    )


async def run(once: bool = False) -> None:
    """Initialize app layers and start the scheduler."""

    scheduler = build_scheduler(load_settings())
    if once:
        await scheduler.tick()
        return

    try:
        await scheduler.run_forever()
    finally:
        scheduler.stop()
        LOGGER.info("Timesheet reminder shutdown complete")


def main() -> None:
    """Synchronous wrapper for asyncio entrypoint."""

    parser = argparse.ArgumentParser(description="Remind developers to submit their timesheets.")
    parser.add_argument(
        "--once",
        action="store_true",
        help="check the current minute once and exit (for cron)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(run(once=args.once))


if __name__ == "__main__":
    main()
