"""
Calendar credential storage.

Persists each user's Google OAuth tokens on their profile. A stored refresh
token is never replaced by an empty one: Google omits the refresh token from
refresh responses (and sometimes from re-consent responses), and losing it
would force the user through the OAuth flow again.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from household_sync.models.users import UserProfile

logger = logging.getLogger(__name__)


@dataclass
class UserCredential:
    """A user's OAuth token pair for Google Calendar."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to timezone-aware UTC (naive values are UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CredentialStore:
    """
    Reads and writes calendar credentials on user profiles.

    Usage:
        store = CredentialStore(session)
        await store.save_credential(user_id, credential)
        credential = await store.get_credential(user_id)
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a user's profile.

        Args:
            user_id: The user's ID

        Returns:
            UserProfile if found, None otherwise
        """
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_credential(self, user_id: str) -> Optional[UserCredential]:
        """
        Get a user's stored calendar credential.

        Args:
            user_id: The user's ID

        Returns:
            UserCredential if the user has connected their calendar, None otherwise
        """
        profile = await self.get_profile(user_id)
        if profile is None or not profile.has_calendar_credential:
            return None

        return UserCredential(
            access_token=profile.calendar_access_token,
            refresh_token=profile.calendar_refresh_token,
            expires_at=_as_utc(profile.calendar_token_expiry),
        )

    async def save_credential(
        self,
        user_id: str,
        credential: UserCredential,
    ) -> UserProfile:
        """
        Save a credential obtained from the OAuth flow.

        Creates the profile if it does not exist yet and marks the
        calendar as connected.

        Args:
            user_id: The user's ID
            credential: Tokens from the authorization code exchange

        Returns:
            The updated UserProfile
        """
        profile = await self.get_profile(user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id)
            self._session.add(profile)
            logger.info(f"Created profile for user {user_id}")

        self._apply(profile, credential)
        profile.calendar_connected = True

        await self._session.commit()
        logger.info(f"Stored calendar credential for user {user_id}")
        return profile

    async def update_tokens(
        self,
        user_id: str,
        credential: UserCredential,
    ) -> bool:
        """
        Write back tokens after the OAuth library refreshed them.

        Args:
            user_id: The user's ID
            credential: Refreshed tokens

        Returns:
            True if updated, False if the user has no profile
        """
        profile = await self.get_profile(user_id)
        if profile is None:
            logger.warning(f"Cannot store refreshed token, no profile for user {user_id}")
            return False

        self._apply(profile, credential)
        try:
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            raise
        logger.info(f"Stored refreshed access token for user {user_id}")
        return True

    async def clear_credential(self, user_id: str) -> bool:
        """
        Remove a user's calendar credential (disconnect).

        Args:
            user_id: The user's ID

        Returns:
            True if a credential was removed, False if none was stored
        """
        profile = await self.get_profile(user_id)
        if profile is None or not profile.has_calendar_credential:
            return False

        profile.calendar_access_token = None
        profile.calendar_refresh_token = None
        profile.calendar_token_expiry = None
        profile.calendar_connected = False
        await self._session.commit()

        logger.info(f"Cleared calendar credential for user {user_id}")
        return True

    async def is_connected(self, user_id: str) -> bool:
        """Check if the user has a connected calendar."""
        profile = await self.get_profile(user_id)
        return bool(profile and profile.calendar_connected and profile.has_calendar_credential)

    @staticmethod
    def _apply(profile: UserProfile, credential: UserCredential) -> None:
        profile.calendar_access_token = credential.access_token
        if credential.refresh_token:
            profile.calendar_refresh_token = credential.refresh_token
        profile.calendar_token_expiry = _as_utc(credential.expires_at)
