"""
Google Calendar API client wrapper with error handling.

Provides a clean interface over the Google Calendar API v3. Each call is
attempted exactly once; callers decide what a failure means.
"""

import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from household_sync.integrations.google_calendar.exceptions import (
    GoogleCalendarError,
    GoogleCalendarAuthError,
    GoogleCalendarQuotaError,
    GoogleCalendarNotFoundError,
    GoogleCalendarConflictError,
    GoogleCalendarRateLimitError,
    GoogleCalendarValidationError,
)

logger = logging.getLogger(__name__)


def _handle_http_error(error: HttpError) -> None:
    """Convert HttpError to appropriate GoogleCalendarError."""
    status = error.resp.status
    message = str(error)

    if status == 400:
        raise GoogleCalendarValidationError(
            f"Invalid event data: {message}",
            original_error=error,
        )
    elif status == 401:
        raise GoogleCalendarAuthError(
            "Authentication failed - credentials may be invalid or expired",
            original_error=error,
        )
    elif status == 403:
        if "quota" in message.lower() or "rate limit" in message.lower():
            raise GoogleCalendarQuotaError(
                "API quota exceeded",
                original_error=error,
            )
        raise GoogleCalendarAuthError(
            "Access denied - check granted calendar scopes",
            original_error=error,
        )
    elif status in (404, 410):
        raise GoogleCalendarNotFoundError(
            "Event or calendar not found",
            original_error=error,
        )
    elif status == 409:
        raise GoogleCalendarConflictError(
            "Event was modified by another process",
            original_error=error,
        )
    elif status == 429:
        raise GoogleCalendarRateLimitError(
            "Rate limit exceeded - too many requests",
            original_error=error,
        )
    else:
        raise GoogleCalendarError(
            f"Google Calendar API error ({status}): {message}",
            original_error=error,
        )


class GoogleCalendarClient:
    """
    Wrapper around Google Calendar API v3.

    Provides:
    - Consistent error handling
    - Idempotent deletes (a missing event counts as deleted)
    """

    def __init__(self, credentials: Credentials):
        """
        Initialize the client.

        Args:
            credentials: Google OAuth2 credentials
        """
        self._service: Resource = build(
            "calendar",
            "v3",
            credentials=credentials,
            cache_discovery=False,
        )

    @property
    def service(self) -> Resource:
        """Get the underlying Google API service."""
        return self._service

    def insert_event(self, calendar_id: str, body: dict) -> dict:
        """
        Create a new event.

        Args:
            calendar_id: Calendar to create event in
            body: Event data in Google Calendar format

        Returns:
            Created event with ID
        """
        try:
            result = self._service.events().insert(
                calendarId=calendar_id,
                body=body,
            ).execute()
            logger.info(f"Created event {result.get('id')} in {calendar_id}")
            return result
        except HttpError as e:
            _handle_http_error(e)

    def patch_event(self, calendar_id: str, event_id: str, body: dict) -> dict:
        """
        Patch an existing event (partial update).

        Fields absent from ``body`` keep their current remote values.

        Args:
            calendar_id: Calendar containing the event
            event_id: Event to update
            body: Fields to update

        Returns:
            Updated event
        """
        try:
            result = self._service.events().patch(
                calendarId=calendar_id,
                eventId=event_id,
                body=body,
            ).execute()
            logger.info(f"Patched event {event_id} in {calendar_id}")
            return result
        except HttpError as e:
            _handle_http_error(e)

    def delete_event(self, calendar_id: str, event_id: str) -> bool:
        """
        Delete an event.

        Args:
            calendar_id: Calendar containing the event
            event_id: Event to delete

        Returns:
            True if deleted, False if the event was already gone
        """
        try:
            self._service.events().delete(
                calendarId=calendar_id,
                eventId=event_id,
            ).execute()
            logger.info(f"Deleted event {event_id} from {calendar_id}")
            return True
        except HttpError as e:
            if e.resp.status in (404, 410):
                # Already deleted - consider success
                logger.warning(f"Event {event_id} already deleted")
                return False
            _handle_http_error(e)
