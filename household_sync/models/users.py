"""
User profile model.

The profile owns the user's Google Calendar credential. Tokens are written
when the OAuth flow completes, rewritten on refresh, and cleared on
disconnect.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from household_sync.models.base import BaseModel


class UserProfile(BaseModel):
    """
    Stores a user's profile and calendar connection.

    Attributes:
        user_id: External user ID from frontend authentication
        email: User's email (optional)
        calendar_connected: Whether the user has connected Google Calendar
        calendar_access_token: Current OAuth access token
        calendar_refresh_token: Refresh token for obtaining new access tokens
        calendar_token_expiry: When the access token expires
    """

    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        doc="External user ID from frontend authentication"
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="User's email address"
    )

    calendar_connected: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Whether Google Calendar sync is connected"
    )

    calendar_access_token: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="OAuth access token"
    )

    calendar_refresh_token: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="OAuth refresh token (for obtaining new access tokens)"
    )

    calendar_token_expiry: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="When the access token expires"
    )

    @property
    def has_calendar_credential(self) -> bool:
        """Check if an access token is stored."""
        return bool(self.calendar_access_token)

    def __repr__(self) -> str:
        return (
            f"<UserProfile(user_id={self.user_id}, "
            f"calendar_connected={self.calendar_connected})>"
        )
