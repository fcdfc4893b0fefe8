"""
Household record models synchronized to Google Calendar.

Three record kinds share the same sync contract:
- PlantCareTask: care task for a plant (watering, fertilizing, ...)
- Project: household project with a deadline
- SimpleTask: one-off household task

The records themselves are created and deleted by the application's CRUD
services. The sync engine only reads them and writes back
``calendar_event_id``, the correlation id of the Google Calendar event.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from household_sync.models.base import BaseModel


class SyncableRecordMixin:
    """Columns shared by every record kind that syncs to the calendar."""

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Owner of the record"
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Record title"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        doc="Optional free-text description"
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="When the record is due (UTC)"
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Whether the record has been completed"
    )

    calendar_event_id: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        doc="Google Calendar event ID (weak reference, may be stale)"
    )

    @declared_attr.directive
    def __table_args__(cls):
        return (
            Index(f"ix_{cls.__tablename__}_user_due", "user_id", "due_date"),
        )


class PlantCareTask(SyncableRecordMixin, BaseModel):
    """Care task for a plant."""

    __tablename__ = "plant_care_tasks"

    plant_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Name of the plant this task cares for"
    )


class Project(SyncableRecordMixin, BaseModel):
    """Household project with a deadline."""

    __tablename__ = "projects"


class SimpleTask(SyncableRecordMixin, BaseModel):
    """One-off household task."""

    __tablename__ = "simple_tasks"
