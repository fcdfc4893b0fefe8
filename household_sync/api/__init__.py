"""
Household Sync API module.

Provides FastAPI HTTP endpoints for calendar operations and trigger delivery.
"""

from household_sync.api.main import app, run_server

__all__ = ["app", "run_server"]
