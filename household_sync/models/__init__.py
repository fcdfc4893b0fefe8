"""
SQLAlchemy models for Household Sync.

This module exports all database models for easy importing and
ensures Alembic can discover them for migrations.
"""

from household_sync.models.base import Base, BaseModel, GUID

# Import all models (must be imported for Alembic autogenerate)
from household_sync.models.users import UserProfile
from household_sync.models.records import (
    PlantCareTask,
    Project,
    SimpleTask,
    SyncableRecordMixin,
)

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    "GUID",
    # User models
    "UserProfile",
    # Record models
    "SyncableRecordMixin",
    "PlantCareTask",
    "Project",
    "SimpleTask",
]
