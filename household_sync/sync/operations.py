"""
User-invoked calendar operations.

These answer synchronously to an authenticated caller. Unlike the trigger
handlers they raise typed errors (see household_sync.errors) and leave retry
decisions to the caller.
"""

import logging
from typing import Optional

import httpx

from household_sync.auth.credential_store import CredentialStore, UserCredential
from household_sync.auth.google_oauth import GoogleOAuthFlow
from household_sync.auth.session_factory import OAuthSessionFactory
from household_sync.errors import (
    InternalError,
    InvalidArgumentError,
    SyncError,
    UnauthenticatedError,
)
from household_sync.integrations.base import CalendarEventInput
from household_sync.integrations.google_calendar.exceptions import GoogleCalendarError
from household_sync.integrations.google_calendar.translator import EventTranslator

logger = logging.getLogger(__name__)


def _require_caller(caller_id: Optional[str]) -> str:
    if not caller_id:
        raise UnauthenticatedError("User must be authenticated")
    return caller_id


class CalendarOperations:
    """
    Callable surface for the application UI.

    Usage:
        ops = CalendarOperations(flow, credential_store, session_factory)
        result = await ops.create_event(caller_id, event)
    """

    def __init__(
        self,
        oauth_flow: GoogleOAuthFlow,
        credential_store: CredentialStore,
        session_factory: OAuthSessionFactory,
        translator: Optional[EventTranslator] = None,
    ):
        self._flow = oauth_flow
        self._credentials = credential_store
        self._sessions = session_factory
        self._translator = translator or EventTranslator()

    # ------------------------------------------------------------------
    # OAuth bootstrap
    # ------------------------------------------------------------------

    async def init_auth(self, caller_id: Optional[str]) -> dict:
        """
        Start the OAuth flow.

        Returns:
            {"auth_url": ...} requesting offline access to the calendar scope
        """
        user_id = _require_caller(caller_id)
        auth_url = self._flow.get_authorization_url()
        logger.info(f"Generated calendar authorization URL for user {user_id}")
        return {"auth_url": auth_url}

    async def complete_auth(self, caller_id: Optional[str], code: Optional[str]) -> dict:
        """
        Exchange an authorization code and store the resulting credential.

        Raises:
            UnauthenticatedError: No caller
            InvalidArgumentError: Missing code
            InternalError: Token exchange failed
        """
        user_id = _require_caller(caller_id)
        if not code:
            raise InvalidArgumentError("Authorization code is required")

        try:
            tokens = await self._flow.exchange_code(code)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Error completing calendar auth for user {user_id}: {e}")
            raise InternalError(
                "Failed to complete calendar authentication",
                original_error=e,
            )

        await self._credentials.save_credential(
            user_id,
            UserCredential(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_at=tokens.expiry,
            ),
        )
        logger.info(f"User {user_id} connected Google Calendar")
        return {"success": True}

    async def get_status(self, caller_id: Optional[str]) -> dict:
        """Report whether the caller has connected their calendar."""
        user_id = _require_caller(caller_id)
        return {"connected": await self._credentials.is_connected(user_id)}

    async def disconnect(self, caller_id: Optional[str]) -> dict:
        """
        Remove the caller's stored credential.

        Events already on the calendar are left in place.
        """
        user_id = _require_caller(caller_id)
        removed = await self._credentials.clear_credential(user_id)
        if removed:
            logger.info(f"User {user_id} disconnected Google Calendar")
        return {"success": removed}

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def create_event(
        self,
        caller_id: Optional[str],
        event: Optional[CalendarEventInput],
    ) -> dict:
        """
        Create an event on the caller's calendar.

        Returns:
            {"event_id": ...}
        """
        user_id = _require_caller(caller_id)
        if event is None:
            raise InvalidArgumentError("Event data is required")
        if not event.title or event.start_date is None or event.end_date is None:
            raise InvalidArgumentError("Event title, start date and end date are required")
        if event.end_date < event.start_date:
            raise InvalidArgumentError("Event end date must not be before its start date")

        session = await self._session(user_id)
        body = self._translator.from_event_input(event)
        event_id = await self._remote(
            "create",
            user_id,
            session.insert_event(body),
        )
        return {"event_id": event_id}

    async def update_event(
        self,
        caller_id: Optional[str],
        event_id: Optional[str],
        event: Optional[CalendarEventInput],
    ) -> dict:
        """
        Update fields of an event on the caller's calendar.

        Only fields present in ``event`` are sent.
        """
        user_id = _require_caller(caller_id)
        if not event_id or event is None or event.is_empty:
            raise InvalidArgumentError("Event ID and event data are required")
        if (
            event.start_date is not None
            and event.end_date is not None
            and event.end_date < event.start_date
        ):
            raise InvalidArgumentError("Event end date must not be before its start date")

        session = await self._session(user_id)
        body = self._translator.to_partial_body(event)
        await self._remote("update", user_id, session.update_event(event_id, body))
        return {"success": True}

    async def delete_event(
        self,
        caller_id: Optional[str],
        event_id: Optional[str],
    ) -> dict:
        """Delete an event from the caller's calendar."""
        user_id = _require_caller(caller_id)
        if not event_id:
            raise InvalidArgumentError("Event ID is required")

        session = await self._session(user_id)
        await self._remote("delete", user_id, session.delete_event(event_id))
        return {"success": True}

    async def _session(self, user_id: str):
        try:
            return await self._sessions.get_session(user_id)
        except GoogleCalendarError as e:
            logger.error(f"Error opening calendar session for user {user_id}: {e}")
            raise InternalError("Failed to access calendar credentials", original_error=e)

    @staticmethod
    async def _remote(operation: str, user_id: str, call):
        try:
            return await call
        except SyncError:
            raise
        except Exception as e:
            logger.error(f"Error on calendar {operation} for user {user_id}: {e}")
            raise InternalError(f"Failed to {operation} calendar event", original_error=e)
