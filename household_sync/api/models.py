"""
Pydantic request and response models for the Household Sync API.

Request models accept both snake_case and the camelCase keys sent by the
web client.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from household_sync.integrations.base import (
    CalendarEventInput,
    RecordKind,
    Reminder,
    SyncableRecord,
)


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ApiModel(BaseModel):
    """Base for request models accepting camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Callable Request Models
# =============================================================================


class ReminderModel(ApiModel):
    """Reminder override on a calendar event."""

    method: Literal["email", "popup"]
    minutes: int = Field(..., ge=0, le=40320)


class CalendarEventModel(ApiModel):
    """
    Event data from the client.

    All fields are optional here; the operation decides which are required
    so that missing fields surface as ``invalid-argument``.
    """

    title: Optional[str] = Field(None, max_length=1024)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reminders: Optional[list[ReminderModel]] = None

    def to_input(self) -> CalendarEventInput:
        return CalendarEventInput(
            title=self.title,
            description=self.description,
            start_date=_utc(self.start_date),
            end_date=_utc(self.end_date),
            reminders=(
                [Reminder(r.method, r.minutes) for r in self.reminders]
                if self.reminders is not None
                else None
            ),
        )


class CompleteAuthRequest(ApiModel):
    """Authorization code returned by Google to the redirect URI."""

    code: Optional[str] = None


class EventRequest(ApiModel):
    """Wrapper for create and update bodies."""

    event: Optional[CalendarEventModel] = None


# =============================================================================
# Trigger Request Models
# =============================================================================


class RecordSnapshot(ApiModel):
    """State of a record before or after a mutation."""

    title: str = ""
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool = False
    calendar_event_id: Optional[str] = None
    plant_name: Optional[str] = None

    def to_record(self, kind: RecordKind, user_id: str, record_id: str) -> SyncableRecord:
        return SyncableRecord(
            kind=kind,
            id=record_id,
            user_id=user_id,
            title=self.title,
            description=self.description,
            due_date=_utc(self.due_date),
            completed=self.completed,
            calendar_event_id=self.calendar_event_id,
            plant_name=self.plant_name,
        )


class RecordChangeRequest(ApiModel):
    """Record mutation delivered by the document store's trigger runtime."""

    user_id: str = Field(..., min_length=1)
    record_id: str = Field(..., min_length=1)
    before: Optional[RecordSnapshot] = None
    after: Optional[RecordSnapshot] = None


# =============================================================================
# Response Models
# =============================================================================


class AuthUrlResponse(BaseModel):
    """Authorization URL to send the user to."""

    auth_url: str


class SuccessResponse(BaseModel):
    """Generic success flag."""

    success: bool


class CreateEventResponse(BaseModel):
    """ID of the created calendar event."""

    event_id: str


class StatusResponse(BaseModel):
    """Calendar connection status."""

    connected: bool


class SyncResultResponse(BaseModel):
    """Outcome of a trigger handler."""

    action: str
    event_id: Optional[str] = None
    reason: Optional[str] = None
    error_code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Typed error returned by callable endpoints."""

    code: str = Field(..., description="unauthenticated, invalid-argument, failed-precondition or internal")
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    oauth_configured: bool
