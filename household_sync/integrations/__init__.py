"""
Calendar integrations for Household Sync.

Provides the record types and the Google Calendar backend.
"""

from household_sync.integrations.base import (
    CalendarEventInput,
    RecordKind,
    Reminder,
    SyncableRecord,
)

__all__ = ["CalendarEventInput", "RecordKind", "Reminder", "SyncableRecord"]
