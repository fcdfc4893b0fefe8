"""
FastAPI dependency injection providers.

Every request builds its own stores, session factory and handlers on top of
a request-scoped database session; nothing is shared between invocations.
"""

from typing import Optional

import httpx
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from household_sync.auth.credential_store import CredentialStore
from household_sync.auth.google_oauth import GoogleOAuthFlow
from household_sync.auth.session_factory import ClientFactory, OAuthSessionFactory
from household_sync.config import OAuthClientConfig, get_settings
from household_sync.database import get_async_session
from household_sync.integrations.google_calendar.client import GoogleCalendarClient
from household_sync.sync.dispatcher import SyncDispatcher
from household_sync.sync.operations import CalendarOperations
from household_sync.sync.record_store import RecordStore


def get_caller_id(
    x_user_id: Optional[str] = Header(None, description="Authenticated user ID"),
) -> Optional[str]:
    """
    Extract the caller identity from the X-User-ID header.

    Returns None when absent; operations reject that as unauthenticated.
    """
    if x_user_id is not None and not x_user_id.strip():
        return None
    return x_user_id


def get_oauth_config() -> OAuthClientConfig:
    """OAuth client parameters from settings."""
    return get_settings().oauth_config


def get_client_factory() -> ClientFactory:
    """Factory building a Google Calendar client from credentials."""
    return GoogleCalendarClient


def get_oauth_transport() -> Optional[httpx.AsyncBaseTransport]:
    """HTTP transport for the token endpoint (default: real network)."""
    return None


def get_credential_store(
    session: AsyncSession = Depends(get_async_session),
) -> CredentialStore:
    return CredentialStore(session)


def get_session_factory(
    credential_store: CredentialStore = Depends(get_credential_store),
    config: OAuthClientConfig = Depends(get_oauth_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> OAuthSessionFactory:
    return OAuthSessionFactory(
        config=config,
        credential_store=credential_store,
        client_factory=client_factory,
        calendar_id=get_settings().google_calendar_id,
    )


def get_calendar_operations(
    credential_store: CredentialStore = Depends(get_credential_store),
    session_factory: OAuthSessionFactory = Depends(get_session_factory),
    config: OAuthClientConfig = Depends(get_oauth_config),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_oauth_transport),
) -> CalendarOperations:
    return CalendarOperations(
        oauth_flow=GoogleOAuthFlow(config, transport=transport),
        credential_store=credential_store,
        session_factory=session_factory,
    )


def get_sync_dispatcher(
    session: AsyncSession = Depends(get_async_session),
    session_factory: OAuthSessionFactory = Depends(get_session_factory),
) -> SyncDispatcher:
    return SyncDispatcher(
        session_factory=session_factory,
        record_store=RecordStore(session),
    )
