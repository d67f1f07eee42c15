from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from lifeboard.schemas import (
    Category,
    EventRecord,
    NoteRecord,
    Priority,
    ProjectRecord,
    ProjectStatus,
    RecordKind,
    SupplementRecord,
    TaskRecord,
    TaskStatus,
)


class TestCategory:
    def test_generated_id(self):
        first = Category(name="Work")
        second = Category(name="Work")
        assert first.id != second.id

    def test_explicit_id(self):
        assert Category(id="c-1", name="Home").id == "c-1"


class TestRecords:
    def test_task_defaults(self):
        task = TaskRecord(title="Water plants")
        assert task.kind == RecordKind.TASK
        assert task.priority == Priority.MEDIUM
        assert task.status == TaskStatus.PENDING
        assert task.due_date is None

    def test_event_requires_category(self):
        start = datetime(2026, 10, 20, 14, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            EventRecord(title="Sync", start_at=start, end_at=start)

    def test_note_requires_category(self):
        with pytest.raises(ValidationError):
            NoteRecord(content_md="Remember the milk")

    def test_supplement_defaults(self):
        supplement = SupplementRecord(name="Magnesium")
        assert supplement.quantity_servings == 30
        assert supplement.servings_per_day == 1

    def test_project_defaults(self):
        project = ProjectRecord(name="Website")
        assert project.status == ProjectStatus.ACTIVE

    def test_enum_values_in_json(self):
        data = TaskRecord(title="Pay rent", priority=Priority.HIGH).model_dump(mode="json")
        assert data["kind"] == "task"
        assert data["priority"] == "high"


class TestServicesExports:
    def test_lazy_export(self):
        from lifeboard import services
        from lifeboard.services.parser import QuickAddParser

        assert services.QuickAddParser is QuickAddParser

    def test_unknown_attribute(self):
        from lifeboard import services

        with pytest.raises(AttributeError):
            services.NotAThing  # noqa: B018
