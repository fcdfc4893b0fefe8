"""
Google Calendar integration for Household Sync.

Provides the Google Calendar API client and the record-to-event translator.
"""

from household_sync.integrations.google_calendar.client import GoogleCalendarClient
from household_sync.integrations.google_calendar.exceptions import (
    GoogleCalendarAuthError,
    GoogleCalendarConflictError,
    GoogleCalendarError,
    GoogleCalendarNotFoundError,
    GoogleCalendarQuotaError,
    GoogleCalendarRateLimitError,
    GoogleCalendarValidationError,
)
from household_sync.integrations.google_calendar.translator import (
    KIND_POLICIES,
    EventTranslator,
)

__all__ = [
    "EventTranslator",
    "KIND_POLICIES",
    "GoogleCalendarClient",
    "GoogleCalendarError",
    "GoogleCalendarAuthError",
    "GoogleCalendarConflictError",
    "GoogleCalendarNotFoundError",
    "GoogleCalendarQuotaError",
    "GoogleCalendarRateLimitError",
    "GoogleCalendarValidationError",
]
