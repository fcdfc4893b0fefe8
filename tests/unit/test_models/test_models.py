"""
Unit tests for the persistence models.

Tests:
- GUID TypeDecorator round trip on SQLite
- Syncable record columns and defaults
- UserProfile credential helpers
"""

import uuid

import pytest
from sqlalchemy import select

from household_sync.models.base import GUID
from household_sync.models.records import PlantCareTask, Project, SimpleTask
from household_sync.models.users import UserProfile


class TestGUIDTypeDecorator:
    """Test the GUID TypeDecorator for UUID handling."""

    def test_bind_param_sqlite(self):
        value = uuid.uuid4()
        dialect = type("Dialect", (), {"name": "sqlite"})()

        assert GUID().process_bind_param(value, dialect) == value.hex
        assert GUID().process_bind_param(str(value), dialect) == value.hex

    def test_result_value(self):
        value = uuid.uuid4()
        assert GUID().process_result_value(value.hex, None) == value

    @pytest.mark.asyncio
    async def test_guid_persistence(self, db_session, fern_task):
        """IDs survive a round trip through the database."""
        result = await db_session.execute(
            select(PlantCareTask.id).where(PlantCareTask.id == fern_task.id)
        )
        assert result.scalar_one() == fern_task.id


class TestSyncableRecords:
    """Test the record models."""

    @pytest.mark.asyncio
    async def test_defaults(self, db_session, simple_task):
        await db_session.refresh(simple_task)

        assert isinstance(simple_task.id, uuid.UUID)
        assert simple_task.completed is False
        assert simple_task.calendar_event_id is None
        assert simple_task.created_at is not None

    def test_user_due_index(self):
        """Every record table is indexed by owner and due date."""
        for model in (PlantCareTask, Project, SimpleTask):
            names = {index.name for index in model.__table__.indexes}
            assert f"ix_{model.__tablename__}_user_due" in names

    def test_only_care_tasks_have_plant_name(self):
        assert "plant_name" in PlantCareTask.__table__.columns
        assert "plant_name" not in Project.__table__.columns

    @pytest.mark.asyncio
    async def test_to_dict(self, db_session, fern_task):
        await db_session.refresh(fern_task)

        data = fern_task.to_dict()
        assert data["title"] == "Water fern"
        assert data["plant_name"] == "Fern"


class TestUserProfile:
    """Test the UserProfile model."""

    def test_has_calendar_credential(self):
        assert UserProfile(user_id="u", calendar_access_token="t").has_calendar_credential is True
        assert UserProfile(user_id="u").has_calendar_credential is False

    def test_repr(self):
        profile = UserProfile(user_id="u", calendar_connected=True)
        assert repr(profile) == "<UserProfile(user_id=u, calendar_connected=True)>"
