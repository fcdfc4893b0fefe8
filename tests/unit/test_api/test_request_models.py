"""Unit tests for API request and response models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from household_sync.api.models import (
    CalendarEventModel,
    RecordChangeRequest,
    RecordSnapshot,
)
from household_sync.integrations.base import RecordKind, Reminder


class TestCalendarEventModel:
    """Test the client event payload."""

    def test_accepts_camel_case(self):
        model = CalendarEventModel.model_validate(
            {"title": "Dentist", "startDate": "2024-06-01T09:00:00Z", "endDate": "2024-06-01T10:00:00Z"}
        )

        event = model.to_input()
        assert event.start_date == datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
        assert event.reminders is None

    def test_naive_dates_are_utc(self):
        event = CalendarEventModel(start_date=datetime(2024, 6, 1, 9, 0)).to_input()
        assert event.start_date.tzinfo == timezone.utc

    def test_reminders(self):
        model = CalendarEventModel(reminders=[{"method": "email", "minutes": 30}])
        assert model.to_input().reminders == [Reminder("email", 30)]

    def test_invalid_reminder_method(self):
        with pytest.raises(ValidationError):
            CalendarEventModel(reminders=[{"method": "sms", "minutes": 30}])

    def test_empty_payload(self):
        assert CalendarEventModel().to_input().is_empty is True


class TestRecordChangeRequest:
    """Test the trigger payload."""

    def test_requires_ids(self):
        with pytest.raises(ValidationError):
            RecordChangeRequest(user_id="", record_id="r1")

    def test_snapshot_to_record(self):
        snapshot = RecordSnapshot.model_validate(
            {
                "title": "Water fern",
                "plantName": "Fern",
                "dueDate": "2024-06-01T09:00:00Z",
                "calendarEventId": "evt-1",
            }
        )

        record = snapshot.to_record(RecordKind.CARE_TASK, "user-1", "r1")

        assert record.kind == RecordKind.CARE_TASK
        assert record.id == "r1"
        assert record.plant_name == "Fern"
        assert record.is_synced is True
        assert record.completed is False
