"""
Base types shared by the calendar integration and the sync engine.

Defines the provider-neutral shapes that the translator maps into Google
Calendar event bodies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Optional


class RecordKind(str, Enum):
    """Kinds of household records that sync to the calendar."""

    CARE_TASK = "care_task"
    PROJECT = "project"
    SIMPLE_TASK = "simple_task"


@dataclass(frozen=True)
class Reminder:
    """A single reminder override on a calendar event."""

    method: Literal["email", "popup"]
    minutes: int

    def to_dict(self) -> dict:
        return {"method": self.method, "minutes": self.minutes}


@dataclass
class SyncableRecord:
    """
    Snapshot of a household record as seen by the sync engine.

    ``calendar_event_id`` is the correlation id of the Google Calendar event
    created for the record. It is unset until the first successful push.
    """

    kind: RecordKind
    id: str
    user_id: str
    title: str
    due_date: Optional[datetime] = None
    description: Optional[str] = None
    completed: bool = False
    calendar_event_id: Optional[str] = None
    plant_name: Optional[str] = None

    @property
    def is_synced(self) -> bool:
        """Check if the record is linked to a calendar event."""
        return bool(self.calendar_event_id)


@dataclass
class CalendarEventInput:
    """
    Event data supplied directly by a user.

    Used for both creation (title, start and end required) and partial
    updates (any subset of fields).
    """

    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reminders: Optional[list[Reminder]] = field(default=None)

    @property
    def is_empty(self) -> bool:
        """Check if no field is set."""
        return (
            self.title is None
            and self.description is None
            and self.start_date is None
            and self.end_date is None
            and self.reminders is None
        )
