"""
Calendar synchronization engine.

Provides the passive trigger handlers (SyncDispatcher), the user-invoked
operations (CalendarOperations) and record access for write-back.
"""

from household_sync.sync.dispatcher import (
    RecordChange,
    SyncAction,
    SyncDispatcher,
    SyncResult,
    TriggerPhase,
)
from household_sync.sync.operations import CalendarOperations
from household_sync.sync.record_store import RecordStore

__all__ = [
    "CalendarOperations",
    "RecordChange",
    "RecordStore",
    "SyncAction",
    "SyncDispatcher",
    "SyncResult",
    "TriggerPhase",
]
