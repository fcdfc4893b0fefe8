"""
Mapping from household records to Google Calendar API event bodies.

Handles:
- Per-kind summary prefix, default description, duration and reminders
- DateTime formatting (RFC 3339, UTC, for Google API)
- Partial update bodies for user-supplied event changes
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from household_sync.integrations.base import (
    CalendarEventInput,
    RecordKind,
    Reminder,
    SyncableRecord,
)


@dataclass(frozen=True)
class KindPolicy:
    """How a record kind is rendered as a calendar event."""

    summary_prefix: str
    default_description: str
    duration: timedelta
    reminders: tuple[Reminder, ...]

    def describe(self, record: SyncableRecord) -> str:
        """Record description, or this kind's default when it has none."""
        if record.description:
            return record.description
        return self.default_description.format(plant_name=record.plant_name or "")


KIND_POLICIES: dict[RecordKind, KindPolicy] = {
    RecordKind.CARE_TASK: KindPolicy(
        summary_prefix="Plant Care",
        default_description="Care task for plant: {plant_name}",
        duration=timedelta(minutes=30),
        reminders=(Reminder("popup", 15), Reminder("email", 60)),
    ),
    RecordKind.PROJECT: KindPolicy(
        summary_prefix="Project",
        default_description="Household project deadline",
        duration=timedelta(minutes=60),
        reminders=(Reminder("popup", 30), Reminder("email", 24 * 60)),
    ),
    RecordKind.SIMPLE_TASK: KindPolicy(
        summary_prefix="Task",
        default_description="Household task",
        duration=timedelta(minutes=30),
        reminders=(Reminder("popup", 15),),
    ),
}

# Reminders for events created directly by the user
DEFAULT_EVENT_REMINDERS: tuple[Reminder, ...] = (
    Reminder("popup", 15),
    Reminder("email", 60),
)


class EventTranslator:
    """Maps household records and user events to Google Calendar API format."""

    @staticmethod
    def to_remote_event(record: SyncableRecord) -> dict:
        """
        Convert a record to a Google Calendar event body for insertion.

        Args:
            record: Record with a due date

        Returns:
            Dict suitable for Google Calendar API insert

        Raises:
            ValueError: If the record has no due date
        """
        body = EventTranslator.to_update_body(record)
        policy = KIND_POLICIES[record.kind]
        body["reminders"] = _reminders_body(policy.reminders)
        return body

    @staticmethod
    def to_update_body(record: SyncableRecord) -> dict:
        """
        Convert a record to an update body.

        Reminders are left out so the policy set at creation stays in place.

        Args:
            record: Record with a due date

        Returns:
            Dict with summary, description, start and end

        Raises:
            ValueError: If the record has no due date
        """
        if record.due_date is None:
            raise ValueError(f"Record {record.id} has no due date")

        policy = KIND_POLICIES[record.kind]
        start = _as_utc(record.due_date)
        end = start + policy.duration

        return {
            "summary": f"{policy.summary_prefix}: {record.title}",
            "description": policy.describe(record),
            "start": _time_body(start),
            "end": _time_body(end),
        }

    @staticmethod
    def from_event_input(event: CalendarEventInput) -> dict:
        """
        Convert a user-supplied event to an insert body.

        Args:
            event: Event with title, start_date and end_date set

        Returns:
            Dict suitable for Google Calendar API insert
        """
        body: dict = {
            "summary": event.title,
            "start": _time_body(event.start_date),
            "end": _time_body(event.end_date),
            "reminders": _reminders_body(event.reminders or DEFAULT_EVENT_REMINDERS),
        }
        if event.description:
            body["description"] = event.description
        return body

    @staticmethod
    def to_partial_body(event: CalendarEventInput) -> dict:
        """
        Convert a partial user-supplied event to a patch body.

        Only fields present in the input appear in the result.

        Args:
            event: Fields to change

        Returns:
            Dict suitable for Google Calendar API patch
        """
        body: dict = {}

        if event.title is not None:
            body["summary"] = event.title

        if event.description is not None:
            body["description"] = event.description

        if event.start_date is not None:
            body["start"] = _time_body(event.start_date)

        if event.end_date is not None:
            body["end"] = _time_body(event.end_date)

        if event.reminders is not None:
            body["reminders"] = _reminders_body(event.reminders)

        return body


def _as_utc(dt: datetime) -> datetime:
    """Normalize a datetime to UTC, treating naive values as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _format_datetime(dt: datetime) -> str:
    """
    Format datetime to RFC 3339 format for Google API.

    Args:
        dt: Datetime to format

    Returns:
        RFC 3339 formatted string in UTC
    """
    return _as_utc(dt).isoformat()


def _time_body(dt: datetime) -> dict:
    return {
        "dateTime": _format_datetime(dt),
        "timeZone": "UTC",
    }


def _reminders_body(reminders) -> dict:
    return {
        "useDefault": False,
        "overrides": [reminder.to_dict() for reminder in reminders],
    }
