"""Tests for record to Google Calendar event translation."""

from datetime import datetime, timedelta, timezone

import pytest

from household_sync.integrations.base import (
    CalendarEventInput,
    RecordKind,
    Reminder,
    SyncableRecord,
)
from household_sync.integrations.google_calendar.translator import (
    KIND_POLICIES,
    EventTranslator,
)

DUE = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def make_record(kind: RecordKind = RecordKind.CARE_TASK, **overrides) -> SyncableRecord:
    values = {
        "kind": kind,
        "id": "rec-1",
        "user_id": "user-1",
        "title": "Water fern",
        "due_date": DUE,
        "plant_name": "Fern",
    }
    values.update(overrides)
    return SyncableRecord(**values)


def parse(body_time: dict) -> datetime:
    return datetime.fromisoformat(body_time["dateTime"])


class TestToRemoteEvent:
    """Tests for insert bodies built from records."""

    def test_care_task_event(self):
        """Should render the plant care event with its reminders."""
        body = EventTranslator.to_remote_event(make_record())

        assert body["summary"] == "Plant Care: Water fern"
        assert body["description"] == "Care task for plant: Fern"
        assert body["start"] == {"dateTime": "2024-06-01T09:00:00+00:00", "timeZone": "UTC"}
        assert body["end"] == {"dateTime": "2024-06-01T09:30:00+00:00", "timeZone": "UTC"}
        assert body["reminders"] == {
            "useDefault": False,
            "overrides": [
                {"method": "popup", "minutes": 15},
                {"method": "email", "minutes": 60},
            ],
        }

    @pytest.mark.parametrize(
        "kind,minutes,prefix",
        [
            (RecordKind.CARE_TASK, 30, "Plant Care"),
            (RecordKind.PROJECT, 60, "Project"),
            (RecordKind.SIMPLE_TASK, 30, "Task"),
        ],
    )
    def test_duration_and_prefix_per_kind(self, kind, minutes, prefix):
        """Event length and summary prefix should follow the record kind."""
        body = EventTranslator.to_remote_event(make_record(kind, title="Thing"))

        assert parse(body["end"]) - parse(body["start"]) == timedelta(minutes=minutes)
        assert body["summary"] == f"{prefix}: Thing"

    def test_project_reminders(self):
        """Projects get a day-ahead email reminder."""
        body = EventTranslator.to_remote_event(make_record(RecordKind.PROJECT))

        assert body["reminders"]["overrides"] == [
            {"method": "popup", "minutes": 30},
            {"method": "email", "minutes": 1440},
        ]

    def test_record_description_wins_over_default(self):
        """Should keep the record's own description."""
        body = EventTranslator.to_remote_event(make_record(description="Use rain water"))
        assert body["description"] == "Use rain water"

    def test_default_descriptions(self):
        """Should fall back to the kind's default description."""
        project = EventTranslator.to_remote_event(make_record(RecordKind.PROJECT))
        task = EventTranslator.to_remote_event(make_record(RecordKind.SIMPLE_TASK))

        assert project["description"] == "Household project deadline"
        assert task["description"] == "Household task"

    def test_naive_due_date_treated_as_utc(self):
        """Naive due dates are stored as UTC."""
        body = EventTranslator.to_remote_event(make_record(due_date=datetime(2024, 6, 1, 9, 0)))
        assert body["start"]["dateTime"] == "2024-06-01T09:00:00+00:00"

    def test_offset_due_date_converted_to_utc(self):
        """Due dates with another offset are converted."""
        due = datetime(2024, 6, 1, 11, 0, tzinfo=timezone(timedelta(hours=2)))
        body = EventTranslator.to_remote_event(make_record(due_date=due))
        assert body["start"]["dateTime"] == "2024-06-01T09:00:00+00:00"

    def test_no_due_date_raises(self):
        """Records without a due date cannot become events."""
        with pytest.raises(ValueError):
            EventTranslator.to_remote_event(make_record(due_date=None))

    def test_is_pure(self):
        """Same record in, same body out."""
        record = make_record()
        assert EventTranslator.to_remote_event(record) == EventTranslator.to_remote_event(record)


class TestToUpdateBody:
    """Tests for update bodies built from records."""

    def test_leaves_reminders_out(self):
        """Updates keep the reminders set at creation."""
        body = EventTranslator.to_update_body(make_record())

        assert "reminders" not in body
        assert set(body) == {"summary", "description", "start", "end"}


class TestUserEvents:
    """Tests for user-supplied events."""

    def test_from_event_input_uses_default_reminders(self):
        """Should apply popup 15 and email 60 when no reminders are given."""
        event = CalendarEventInput(
            title="Dentist",
            start_date=DUE,
            end_date=DUE + timedelta(hours=1),
        )
        body = EventTranslator.from_event_input(event)

        assert body["summary"] == "Dentist"
        assert "description" not in body
        assert body["end"]["dateTime"] == "2024-06-01T10:00:00+00:00"
        assert body["reminders"]["overrides"] == [
            {"method": "popup", "minutes": 15},
            {"method": "email", "minutes": 60},
        ]

    def test_from_event_input_custom_reminders(self):
        event = CalendarEventInput(
            title="Dentist",
            description="Bring forms",
            start_date=DUE,
            end_date=DUE,
            reminders=[Reminder("email", 120)],
        )
        body = EventTranslator.from_event_input(event)

        assert body["description"] == "Bring forms"
        assert body["reminders"]["overrides"] == [{"method": "email", "minutes": 120}]

    def test_partial_body_only_contains_set_fields(self):
        """Patch bodies carry only the fields that were provided."""
        body = EventTranslator.to_partial_body(CalendarEventInput(title="Renamed"))
        assert body == {"summary": "Renamed"}

    def test_partial_body_times(self):
        body = EventTranslator.to_partial_body(
            CalendarEventInput(start_date=DUE, reminders=[])
        )

        assert body == {
            "start": {"dateTime": "2024-06-01T09:00:00+00:00", "timeZone": "UTC"},
            "reminders": {"useDefault": False, "overrides": []},
        }


def test_every_kind_has_a_policy():
    assert set(KIND_POLICIES) == set(RecordKind)
