"""Application configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from timesheet_reminder.models import TriggerWindow


class Settings(BaseSettings):
    """Environment-driven settings validated at startup."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    slack_api_address: str = Field(default="https://slack.com/", alias="SLACK_API_ADDRESS")
    slack_token: str = Field(..., alias="SLACK_TOKEN")
    # Comma-separated emails of Slack members who never get reminders.
    slack_excluded_emails: str = Field(default="", alias="SLACK_EXCLUDED_EMAILS")
    harvest_api_address: str = Field(
        default="https://api.harvestapp.com/",
        alias="HARVEST_API_ADDRESS",
    )
    harvest_token: str = Field(..., alias="HARVEST_TOKEN")
    harvest_account_id: str = Field(default="", alias="HARVEST_ACCOUNT_ID")
    shame_channel: str = Field(..., alias="SHAME_CHANNEL")
    shame_message: str = Field(default="TIMESHEETS ARE GOOD YO!", alias="SHAME_MESSAGE")
    reminder_text: str = Field(
        default="Please make sure your timesheet is submitted today by 13:30.",
        alias="REMINDER_TEXT",
    )
    shame_day: int = Field(default=1, ge=1, le=31, alias="SHAME_DAY")
    shame_hour: int = Field(default=13, ge=0, le=23, alias="SHAME_HOUR")
    shame_minute: int = Field(default=30, ge=0, le=59, alias="SHAME_MINUTE")
    reminder_day: int = Field(default=1, ge=1, le=31, alias="REMINDER_DAY")
    reminder_hour: int = Field(default=10, ge=0, le=23, alias="REMINDER_HOUR")
    reminder_minute: int = Field(default=30, ge=0, le=59, alias="REMINDER_MINUTE")
    timezone: str = Field(default="Europe/London", alias="TIMEZONE")
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")


def load_settings() -> Settings:
    """Load and validate settings."""

    return Settings()


def excluded_emails(settings: Settings) -> frozenset[str]:
    """Return the lower-cased emails listed in SLACK_EXCLUDED_EMAILS."""

    return frozenset(
        email.strip().lower() for email in settings.slack_excluded_emails.split(",") if email.strip()
    )


def shame_window(settings: Settings) -> TriggerWindow:
    return TriggerWindow(day=settings.shame_day, hour=settings.shame_hour, minute=settings.shame_minute)


def reminder_window(settings: Settings) -> TriggerWindow:
    return TriggerWindow(
        day=settings.reminder_day,
        hour=settings.reminder_hour,
        minute=settings.reminder_minute,
    )
