"""
Trigger handlers that keep Google Calendar in step with household records.

Each handler reacts to one record mutation (created, updated, deleted) and
performs at most one remote call. Handlers are best-effort: any failure is
logged with its context and reported on the returned SyncResult, never
raised, and the record's ``calendar_event_id`` is left as it was. Failed
pushes are not retried.

Record states, as observed through the record's own fields:

    Unsynced      calendar_event_id unset
    Synced        calendar_event_id set, not completed
    Removed       completed, calendar_event_id cleared after remote delete
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional

from household_sync.auth.session_factory import OAuthSessionFactory
from household_sync.errors import InternalError, SyncError
from household_sync.integrations.base import RecordKind, SyncableRecord
from household_sync.integrations.google_calendar.translator import EventTranslator
from household_sync.sync.record_store import RecordStore

logger = logging.getLogger(__name__)


class TriggerPhase(str, Enum):
    """Record mutation that fired a trigger."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class SyncAction(str, Enum):
    """What a trigger handler did on the remote calendar."""

    INSERTED = "inserted"
    UPDATED = "updated"
    DELETED = "deleted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RecordChange:
    """A record mutation delivered by the document store's trigger runtime."""

    kind: RecordKind
    user_id: str
    record_id: str
    before: Optional[SyncableRecord] = None
    after: Optional[SyncableRecord] = None


@dataclass
class SyncResult:
    """Outcome of a trigger handler."""

    action: SyncAction
    event_id: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[SyncError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def skipped(cls, reason: str, event_id: Optional[str] = None) -> "SyncResult":
        return cls(action=SyncAction.SKIPPED, event_id=event_id, reason=reason)


def _same_instant(a: Optional[datetime], b: Optional[datetime]) -> bool:
    if a is None or b is None:
        return a is b
    if a.tzinfo is None:
        a = a.replace(tzinfo=timezone.utc)
    if b.tzinfo is None:
        b = b.replace(tzinfo=timezone.utc)
    return a == b


class SyncDispatcher:
    """
    Reacts to record mutations by mutating the owner's calendar.

    Usage:
        dispatcher = SyncDispatcher(session_factory, RecordStore(db))
        result = await dispatcher.handle(TriggerPhase.CREATED, change)
    """

    def __init__(
        self,
        session_factory: OAuthSessionFactory,
        record_store: RecordStore,
        translator: Optional[EventTranslator] = None,
    ):
        self._sessions = session_factory
        self._records = record_store
        self._translator = translator or EventTranslator()

    async def handle(self, phase: TriggerPhase, change: RecordChange) -> SyncResult:
        """Route a trigger to the handler for its phase."""
        handlers = {
            TriggerPhase.CREATED: self.on_created,
            TriggerPhase.UPDATED: self.on_updated,
            TriggerPhase.DELETED: self.on_deleted,
        }
        return await handlers[phase](change)

    async def on_created(self, change: RecordChange) -> SyncResult:
        """Push a newly created record to the calendar."""
        return await self._guard("create", change, self._push_created)

    async def on_updated(self, change: RecordChange) -> SyncResult:
        """Reconcile a record update (completion or due date change)."""
        return await self._guard("update", change, self._reconcile_updated)

    async def on_deleted(self, change: RecordChange) -> SyncResult:
        """Remove the calendar event of a deleted record."""
        return await self._guard("delete", change, self._remove_deleted)

    async def _guard(
        self,
        operation: str,
        change: RecordChange,
        handler: Callable[[RecordChange], Awaitable[SyncResult]],
    ) -> SyncResult:
        try:
            result = await handler(change)
        except Exception as e:
            error = e if isinstance(e, SyncError) else InternalError(str(e), original_error=e)
            logger.error(
                f"Calendar sync failed: operation={operation} kind={change.kind.value} "
                f"user={change.user_id} record={change.record_id}: {e}",
                exc_info=True,
                extra={
                    "operation": operation,
                    "record_kind": change.kind.value,
                    "user_id": change.user_id,
                    "record_id": change.record_id,
                },
            )
            return SyncResult(action=SyncAction.FAILED, error=error, reason=str(e))

        if result.action == SyncAction.SKIPPED:
            logger.debug(
                f"Calendar sync skipped: operation={operation} kind={change.kind.value} "
                f"record={change.record_id} ({result.reason})"
            )
        return result

    async def _push_created(self, change: RecordChange) -> SyncResult:
        if change.after is None or change.after.due_date is None:
            return SyncResult.skipped("no due date")

        # Trigger payloads can be redelivered; the stored record is the
        # source of truth for whether a push already happened.
        record = await self._records.get(change.kind, change.user_id, change.record_id)
        if record is None:
            return SyncResult.skipped("record no longer exists")
        if record.calendar_event_id:
            return SyncResult.skipped("already synced", event_id=record.calendar_event_id)
        if record.due_date is None:
            return SyncResult.skipped("no due date")

        session = await self._sessions.get_session(change.user_id)
        event_id = await session.insert_event(self._translator.to_remote_event(record))
        await self._records.set_calendar_event_id(
            change.kind, change.user_id, change.record_id, event_id
        )

        logger.info(
            f"Synced {change.kind.value} {change.record_id} of user {change.user_id} "
            f"to calendar event {event_id}"
        )
        return SyncResult(action=SyncAction.INSERTED, event_id=event_id)

    async def _reconcile_updated(self, change: RecordChange) -> SyncResult:
        after = change.after
        if after is None:
            return SyncResult.skipped("no record data after update")

        event_id = after.calendar_event_id

        # Completion wins over any other change in the same write
        if after.completed and event_id:
            session = await self._sessions.get_session(change.user_id)
            await session.delete_event(event_id)
            await self._records.clear_calendar_event_id(
                change.kind, change.user_id, change.record_id
            )
            logger.info(
                f"Removed calendar event {event_id} of completed {change.kind.value} "
                f"{change.record_id}"
            )
            return SyncResult(action=SyncAction.DELETED, event_id=event_id)

        if not event_id:
            return SyncResult.skipped("record not synced")

        before_due = change.before.due_date if change.before else None
        if change.before is not None and _same_instant(before_due, after.due_date):
            return SyncResult.skipped("due date unchanged", event_id=event_id)

        if after.due_date is None:
            return SyncResult.skipped("due date removed", event_id=event_id)

        session = await self._sessions.get_session(change.user_id)
        await session.update_event(event_id, self._translator.to_update_body(after))

        logger.info(
            f"Updated calendar event {event_id} for {change.kind.value} {change.record_id}"
        )
        return SyncResult(action=SyncAction.UPDATED, event_id=event_id)

    async def _remove_deleted(self, change: RecordChange) -> SyncResult:
        record = change.before
        if record is None or not record.calendar_event_id:
            return SyncResult.skipped("record not synced")

        session = await self._sessions.get_session(change.user_id)
        await session.delete_event(record.calendar_event_id)

        logger.info(
            f"Removed calendar event {record.calendar_event_id} of deleted "
            f"{change.kind.value} {change.record_id}"
        )
        return SyncResult(action=SyncAction.DELETED, event_id=record.calendar_event_id)
