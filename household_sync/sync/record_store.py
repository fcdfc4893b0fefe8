"""
Record access for the sync engine.

The engine never creates or deletes household records. It reads snapshots
and owns exactly one field on them: ``calendar_event_id``.
"""

import logging
import uuid
from typing import Optional, Type, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from household_sync.integrations.base import RecordKind, SyncableRecord
from household_sync.models.records import PlantCareTask, Project, SimpleTask

logger = logging.getLogger(__name__)

RecordModel = Union[PlantCareTask, Project, SimpleTask]

RECORD_MODELS: dict[RecordKind, Type[RecordModel]] = {
    RecordKind.CARE_TASK: PlantCareTask,
    RecordKind.PROJECT: Project,
    RecordKind.SIMPLE_TASK: SimpleTask,
}


def to_syncable_record(kind: RecordKind, row: RecordModel) -> SyncableRecord:
    """Convert a record row to the engine's snapshot type."""
    return SyncableRecord(
        kind=kind,
        id=str(row.id),
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        due_date=row.due_date,
        completed=row.completed,
        calendar_event_id=row.calendar_event_id,
        plant_name=getattr(row, "plant_name", None),
    )


class RecordStore:
    """Reads household records and writes back their calendar event IDs."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_row(
        self,
        kind: RecordKind,
        user_id: str,
        record_id: str,
    ) -> Optional[RecordModel]:
        try:
            record_uuid = uuid.UUID(str(record_id))
        except ValueError:
            logger.warning(f"Invalid {kind.value} id: {record_id}")
            return None

        model = RECORD_MODELS[kind]
        stmt = select(model).where(
            model.id == record_uuid,
            model.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(
        self,
        kind: RecordKind,
        user_id: str,
        record_id: str,
    ) -> Optional[SyncableRecord]:
        """
        Get the current state of a record.

        Args:
            kind: Record kind
            user_id: Owner of the record
            record_id: Record ID

        Returns:
            SyncableRecord if found, None otherwise
        """
        row = await self._get_row(kind, user_id, record_id)
        if row is None:
            return None
        return to_syncable_record(kind, row)

    async def set_calendar_event_id(
        self,
        kind: RecordKind,
        user_id: str,
        record_id: str,
        event_id: Optional[str],
    ) -> bool:
        """
        Write (or clear, with None) the calendar event ID on a record.

        Args:
            kind: Record kind
            user_id: Owner of the record
            record_id: Record ID
            event_id: Google Calendar event ID, or None to clear it

        Returns:
            True if written, False if the record no longer exists
        """
        row = await self._get_row(kind, user_id, record_id)
        if row is None:
            logger.warning(
                f"Cannot write calendar event id, {kind.value} {record_id} "
                f"of user {user_id} not found"
            )
            return False

        row.calendar_event_id = event_id
        await self._session.commit()
        return True

    async def clear_calendar_event_id(
        self,
        kind: RecordKind,
        user_id: str,
        record_id: str,
    ) -> bool:
        """Clear the calendar event ID on a record."""
        return await self.set_calendar_event_id(kind, user_id, record_id, None)
