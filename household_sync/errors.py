"""
Typed errors for calendar operations.

User-invoked operations raise these to the caller; the HTTP layer renders
them with their ``code`` and ``status_code``. Passive trigger handlers catch
them and record them on the returned ``SyncResult`` instead.
"""


class SyncError(Exception):
    """Base exception for calendar sync operations."""

    code: str = "internal"
    status_code: int = 500

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class UnauthenticatedError(SyncError):
    """No caller identity on a user-invoked operation."""

    code = "unauthenticated"
    status_code = 401


class InvalidArgumentError(SyncError):
    """Required input is missing or malformed."""

    code = "invalid-argument"
    status_code = 400


class FailedPreconditionError(SyncError):
    """The operation cannot run in the user's current state."""

    code = "failed-precondition"
    status_code = 412


class NoCredentialError(FailedPreconditionError):
    """
    The user has no stored calendar credential.

    Raised when a calendar session is requested for a user who never
    completed the OAuth flow (or disconnected since).
    """

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} has not connected Google Calendar")
        self.user_id = user_id


class InternalError(SyncError):
    """OAuth exchange failure or remote calendar API failure."""

    code = "internal"
    status_code = 500
