"""
Authenticated Google Calendar sessions built from stored credentials.

A session refreshes an already expired access token before its first call,
and google-auth may refresh again while a request is being sent. The session
watches the credentials object and writes a refreshed token back to the
credential store after every call; otherwise each invocation would start
from the stale token and refresh again.
"""

import asyncio
import logging
from concurrent.futures import Executor
from datetime import timezone
from functools import partial
from typing import Callable, Optional

import google.auth.transport.requests
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from sqlalchemy.exc import SQLAlchemyError

from household_sync.auth.credential_store import CredentialStore, UserCredential
from household_sync.auth.google_oauth import CALENDAR_SCOPES, GOOGLE_TOKEN_URL
from household_sync.config import OAuthClientConfig
from household_sync.errors import NoCredentialError
from household_sync.integrations.google_calendar.client import GoogleCalendarClient
from household_sync.integrations.google_calendar.exceptions import GoogleCalendarAuthError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Credentials], GoogleCalendarClient]


def build_credentials(config: OAuthClientConfig, credential: UserCredential) -> Credentials:
    """
    Create google-auth credentials from a stored credential.

    Args:
        config: OAuth client parameters
        credential: Stored access/refresh token pair

    Returns:
        Google credentials object able to refresh itself
    """
    expiry = None
    if credential.expires_at is not None:
        # google-auth compares expiry against naive UTC
        expiry = credential.expires_at.astimezone(timezone.utc).replace(tzinfo=None)

    return Credentials(
        token=credential.access_token,
        refresh_token=credential.refresh_token,
        token_uri=GOOGLE_TOKEN_URL,
        client_id=config.client_id,
        client_secret=config.client_secret,
        scopes=CALENDAR_SCOPES,
        expiry=expiry,
    )


class CalendarSession:
    """
    A user's live connection to their calendar.

    The Google API client is synchronous, so calls run in a thread pool for
    async compatibility.
    """

    def __init__(
        self,
        user_id: str,
        credentials: Credentials,
        credential_store: CredentialStore,
        client_factory: ClientFactory = GoogleCalendarClient,
        calendar_id: str = "primary",
        executor: Optional[Executor] = None,
    ):
        self.user_id = user_id
        self.calendar_id = calendar_id
        self._credentials = credentials
        self._credential_store = credential_store
        self._client_factory = client_factory
        self._executor = executor
        self._client: Optional[GoogleCalendarClient] = None
        self._persisted_token = credentials.token

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def client(self) -> GoogleCalendarClient:
        """Get or create the API client."""
        if self._client is None:
            self._client = self._client_factory(self._credentials)
        return self._client

    async def insert_event(self, body: dict) -> str:
        """
        Create an event on the user's calendar.

        Returns:
            ID of the created event
        """
        result = await self._call(
            self._invoke_client,
            "insert_event",
            calendar_id=self.calendar_id,
            body=body,
        )
        return result["id"]

    async def update_event(self, event_id: str, body: dict) -> dict:
        """
        Update an event on the user's calendar.

        Uses PATCH, so remote fields missing from ``body`` are preserved.
        """
        return await self._call(
            self._invoke_client,
            "patch_event",
            calendar_id=self.calendar_id,
            event_id=event_id,
            body=body,
        )

    async def delete_event(self, event_id: str) -> bool:
        """
        Delete an event from the user's calendar.

        Returns:
            True if deleted, False if it was already gone
        """
        return await self._call(
            self._invoke_client,
            "delete_event",
            calendar_id=self.calendar_id,
            event_id=event_id,
        )

    async def refresh_if_expired(self) -> bool:
        """
        Refresh the access token up front when it has already expired.

        Returns:
            True if a refresh happened

        Raises:
            GoogleCalendarAuthError: If the refresh token was rejected
        """
        if not self._credentials.expired or not self._credentials.refresh_token:
            return False

        request = google.auth.transport.requests.Request()
        await self._call(self._credentials.refresh, request)
        logger.info(f"Refreshed expired access token for user {self.user_id}")
        return True

    async def persist_refreshed_token(self) -> bool:
        """
        Write the current access token back if the library refreshed it.

        Returns:
            True if a refreshed token was stored
        """
        token = self._credentials.token
        if not token or token == self._persisted_token:
            return False

        expires_at = self._credentials.expiry
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)

        await self._credential_store.update_tokens(
            self.user_id,
            UserCredential(
                access_token=token,
                refresh_token=self._credentials.refresh_token,
                expires_at=expires_at,
            ),
        )
        self._persisted_token = token
        return True

    def _invoke_client(self, method: str, **kwargs):
        # Runs in the executor: building the client loads the discovery document
        return getattr(self.client, method)(**kwargs)

    async def _persist_after_call(self) -> None:
        # A failed write-back must not mask the outcome of the remote call
        try:
            await self.persist_refreshed_token()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to store refreshed access token for user {self.user_id}: {e}",
                exc_info=True,
            )

    async def _call(self, func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                self._executor,
                partial(func, *args, **kwargs),
            )
        except RefreshError as e:
            await self._persist_after_call()
            raise GoogleCalendarAuthError(
                f"Failed to refresh access token for user {self.user_id}",
                original_error=e,
            )
        except Exception:
            await self._persist_after_call()
            raise

        await self._persist_after_call()
        return result


class OAuthSessionFactory:
    """
    Builds calendar sessions for users from their stored credentials.

    Usage:
        factory = OAuthSessionFactory(settings.oauth_config, CredentialStore(db))
        session = await factory.get_session(user_id)
        event_id = await session.insert_event(body)
    """

    def __init__(
        self,
        config: OAuthClientConfig,
        credential_store: CredentialStore,
        client_factory: ClientFactory = GoogleCalendarClient,
        calendar_id: str = "primary",
        executor: Optional[Executor] = None,
    ):
        self._config = config
        self._credential_store = credential_store
        self._client_factory = client_factory
        self._calendar_id = calendar_id
        self._executor = executor

    async def get_session(self, user_id: str) -> CalendarSession:
        """
        Get an authenticated calendar session for a user.

        Args:
            user_id: The user's ID

        Returns:
            CalendarSession bound to the user's stored credential

        Raises:
            NoCredentialError: If the user never connected their calendar
            GoogleCalendarAuthError: If an expired token could not be refreshed
        """
        credential = await self._credential_store.get_credential(user_id)
        if credential is None:
            raise NoCredentialError(user_id)

        session = CalendarSession(
            user_id=user_id,
            credentials=build_credentials(self._config, credential),
            credential_store=self._credential_store,
            client_factory=self._client_factory,
            calendar_id=self._calendar_id,
            executor=self._executor,
        )
        await session.refresh_if_expired()

        logger.debug(f"Built calendar session for user {user_id}")
        return session
