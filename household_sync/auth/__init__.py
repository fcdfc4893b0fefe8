"""
Authentication module for Household Sync.

Provides OAuth 2.0 authentication for Google Calendar access.
Users authorize the app to write task reminders into their own calendar.
"""

from household_sync.auth.google_oauth import (
    CALENDAR_SCOPES,
    GoogleOAuthFlow,
    OAuthTokens,
)
from household_sync.auth.credential_store import (
    CredentialStore,
    UserCredential,
)
from household_sync.auth.session_factory import (
    CalendarSession,
    OAuthSessionFactory,
    build_credentials,
)

__all__ = [
    # OAuth flow
    "CALENDAR_SCOPES",
    "GoogleOAuthFlow",
    "OAuthTokens",
    # Credential storage
    "CredentialStore",
    "UserCredential",
    # Sessions
    "CalendarSession",
    "OAuthSessionFactory",
    "build_credentials",
]
