"""
Custom exceptions for Google Calendar operations.

Every API failure surfaces as a GoogleCalendarError subclass so callers can
tell an expired grant from a missing event without parsing HTTP responses.
"""


class GoogleCalendarError(Exception):
    """Base exception for Google Calendar operations."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class GoogleCalendarAuthError(GoogleCalendarError):
    """
    Authentication or authorization failure.

    Causes:
    - Invalid or expired credentials
    - Refresh token revoked by the user
    - Insufficient scopes
    """


class GoogleCalendarQuotaError(GoogleCalendarError):
    """
    API quota exceeded.

    Google Calendar API has quotas:
    - 1,000,000 queries/day
    - 180 queries/minute per user
    """


class GoogleCalendarNotFoundError(GoogleCalendarError):
    """
    Event or calendar not found.

    Causes:
    - Event was deleted out of band
    - Event ID is invalid
    """


class GoogleCalendarConflictError(GoogleCalendarError):
    """Event was modified concurrently."""


class GoogleCalendarRateLimitError(GoogleCalendarError):
    """Rate limit hit (429 response)."""


class GoogleCalendarValidationError(GoogleCalendarError):
    """
    Invalid event data.

    Causes:
    - Invalid datetime format
    - Missing required fields
    """
