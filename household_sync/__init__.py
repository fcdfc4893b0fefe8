"""
Household Sync.

Keeps household records (plant care tasks, projects, simple tasks) mirrored
as events on each user's Google Calendar.
"""

__version__ = "0.1.0"
