"""
Pytest configuration and fixtures for Household Sync tests.

Provides async database session fixtures, sample records and a mocked
Google Calendar client.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from household_sync.auth.credential_store import CredentialStore, UserCredential
from household_sync.auth.session_factory import OAuthSessionFactory
from household_sync.config import OAuthClientConfig
from household_sync.models.base import Base
from household_sync.models.records import PlantCareTask, Project, SimpleTask
from household_sync.sync.record_store import RecordStore

USER_ID = "user-1"
FERN_DUE = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db_session():
    """
    Create a clean async database session for each test.

    Uses an in-memory SQLite database (aiosqlite) that is torn down after
    each test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def oauth_config() -> OAuthClientConfig:
    return OAuthClientConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://localhost:5173/calendar/callback",
    )


@pytest.fixture
def calendar_client() -> MagicMock:
    """Mock GoogleCalendarClient that succeeds on every call."""
    client = MagicMock()
    client.insert_event.return_value = {"id": "evt-1"}
    client.patch_event.return_value = {"id": "evt-1"}
    client.delete_event.return_value = True
    return client


@pytest.fixture
def client_factory(calendar_client) -> MagicMock:
    """Client factory returning the mocked calendar client."""
    return MagicMock(return_value=calendar_client)


@pytest.fixture
def credential_store(db_session) -> CredentialStore:
    return CredentialStore(db_session)


@pytest.fixture
def record_store(db_session) -> RecordStore:
    return RecordStore(db_session)


@pytest.fixture
def session_factory(oauth_config, credential_store, client_factory) -> OAuthSessionFactory:
    return OAuthSessionFactory(
        config=oauth_config,
        credential_store=credential_store,
        client_factory=client_factory,
    )


@pytest_asyncio.fixture
async def connected_user(credential_store) -> str:
    """A user who completed the OAuth flow."""
    await credential_store.save_credential(
        USER_ID,
        UserCredential(
            access_token="access-token",
            refresh_token="refresh-token",
            expires_at=datetime(2099, 1, 1, tzinfo=timezone.utc),
        ),
    )
    return USER_ID


@pytest_asyncio.fixture
async def fern_task(db_session) -> PlantCareTask:
    """Care task 'Water fern' due 2024-06-01T09:00Z for plant 'Fern'."""
    task = PlantCareTask(
        user_id=USER_ID,
        title="Water fern",
        plant_name="Fern",
        due_date=FERN_DUE,
    )
    db_session.add(task)
    await db_session.commit()
    return task


@pytest_asyncio.fixture
async def undated_project(db_session) -> Project:
    project = Project(user_id=USER_ID, title="Paint the fence")
    db_session.add(project)
    await db_session.commit()
    return project


@pytest_asyncio.fixture
async def simple_task(db_session) -> SimpleTask:
    task = SimpleTask(
        user_id=USER_ID,
        title="Take out recycling",
        due_date=datetime(2024, 6, 3, 18, 0, tzinfo=timezone.utc),
    )
    db_session.add(task)
    await db_session.commit()
    return task


@pytest.fixture
def unknown_record_id() -> str:
    return str(uuid.uuid4())
