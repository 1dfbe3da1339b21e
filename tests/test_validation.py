"""Tests for taskdesk.rules.validate_task and the task schemas."""

from datetime import datetime, timezone

import pytest

from taskdesk.engine.errors import TaskdeskInvalidIdError, TaskdeskValidationError
from taskdesk.records.task import SortField, SortOrder, TaskPatch, TaskStatus
from taskdesk.rules.validate_task import (
    parse_list_query,
    parse_task_id,
    validate_create,
    validate_update,
)


def _details(payload, validator=validate_create):
    with pytest.raises(TaskdeskValidationError) as exc_info:
        validator(payload)
    assert exc_info.value.message == "Validation failed"
    return exc_info.value.validation_errors


class TestValidateCreate:

    def test_valid_payload(self, make_payload):
        task = validate_create(make_payload())
        assert task.title == "Review case file"
        assert task.status is TaskStatus.TODO
        assert task.due_date == datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    def test_title_is_trimmed(self, make_payload):
        assert validate_create(make_payload(title="  Pay rent  ")).title == "Pay rent"

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_is_required(self, make_payload, title):
        assert _details(make_payload(title=title)) == ["Title is required"]

    def test_title_length_boundary(self, make_payload):
        assert validate_create(make_payload(title="x" * 200)).title == "x" * 200
        assert _details(make_payload(title="x" * 201)) == [
            "Title must not exceed 200 characters"
        ]

    def test_description_length_boundary(self, make_payload):
        validate_create(make_payload(description="d" * 1000))
        assert _details(make_payload(description="d" * 1001)) == [
            "Description must not exceed 1000 characters"
        ]

    def test_description_optional_and_nullable(self, make_payload):
        assert validate_create(make_payload(description=...)).description is None
        assert validate_create(make_payload(description=None)).description is None

    def test_missing_status_and_due_date(self, make_payload):
        details = _details(make_payload(status=..., due_date=...))
        assert details == ["Status is required", "Due date is required"]

    @pytest.mark.parametrize("status", ["to do", "Done", "TODO", "In  Progress"])
    def test_status_is_exact(self, make_payload, status):
        assert _details(make_payload(status=status)) == [
            "Status must be one of: To Do, In Progress, Completed"
        ]

    @pytest.mark.parametrize("due_date", ["not-a-date", "31/12/2024", "", 1735689599])
    def test_due_date_not_iso(self, make_payload, due_date):
        assert _details(make_payload(due_date=due_date)) == [
            "Due date must be in ISO 8601 format"
        ]

    def test_due_date_impossible_calendar_date(self, make_payload):
        assert _details(make_payload(due_date="2024-02-30T10:00:00Z")) == [
            "Due date must be a valid date"
        ]

    def test_due_date_offset_normalised_to_utc(self, make_payload):
        task = validate_create(make_payload(due_date="2025-01-01T01:00:00+02:00"))
        assert task.due_date == datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("due_date", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:00:00+05:00"])
    def test_due_date_outside_year_range_after_utc_shift(self, make_payload, due_date):
        assert _details(make_payload(due_date=due_date)) == ["Due date must be a valid date"]
        assert _details({"due_date": due_date}, validate_update) == ["Due date must be a valid date"]

    def test_naive_due_date_taken_as_utc(self, make_payload):
        task = validate_create(make_payload(due_date="2024-12-31T09:30:00"))
        assert task.due_date == datetime(2024, 12, 31, 9, 30, tzinfo=timezone.utc)

    def test_date_only_due_date_is_midnight_utc(self, make_payload):
        task = validate_create(make_payload(due_date="2024-12-31"))
        assert task.due_date == datetime(2024, 12, 31, tzinfo=timezone.utc)

    def test_unknown_fields_ignored(self, make_payload):
        task = validate_create(make_payload(id=99, created_at="2020-01-01", priority="high"))
        assert "id" not in task.model_dump()

    @pytest.mark.parametrize("payload", [None, [], "title", 3])
    def test_body_must_be_object(self, payload):
        assert _details(payload) == ["Request body must be a JSON object"]


class TestValidateUpdate:

    def test_single_field(self):
        patch = validate_update({"status": "Completed"})
        assert patch.changes() == {"status": TaskStatus.COMPLETED}

    def test_changes_only_include_supplied_fields(self):
        patch = validate_update({"title": "New", "description": ""})
        assert patch.changes() == {"title": "New", "description": ""}

    def test_description_may_be_cleared(self):
        assert validate_update({"description": None}).changes() == {"description": None}

    def test_empty_update_rejected(self):
        assert _details({}, validate_update) == [
            "At least one field must be provided for update"
        ]

    def test_only_unknown_fields_is_empty_update(self):
        assert _details({"priority": "high"}, validate_update) == [
            "At least one field must be provided for update"
        ]

    @pytest.mark.parametrize("field, label", [
        ("title", "Title"),
        ("status", "Status"),
        ("due_date", "Due date"),
    ])
    def test_null_required_fields_rejected(self, field, label):
        assert _details({field: None}, validate_update) == [f"{label} must not be null"]

    def test_same_rules_as_create(self):
        details = _details(
            {"title": "", "status": "Done", "due_date": "tomorrow"}, validate_update
        )
        assert details == [
            "Title is required",
            "Status must be one of: To Do, In Progress, Completed",
            "Due date must be in ISO 8601 format",
        ]

    def test_patch_model_directly(self):
        patch = TaskPatch(due_date="2024-06-01T12:00:00Z")
        assert list(patch.changes()) == ["due_date"]


class TestParseTaskId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), (7, 7), ("-1", -1), ("0", 0)])
    def test_integers_accepted(self, raw, expected):
        assert parse_task_id(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("1.0", 1), ("1e0", 1), ("1e3", 1000), ("0.1e1", 1), ("5.", 5), ("-0.0", 0),
        ("9223372036854775807", 2 ** 63 - 1), ("-9223372036854775808", -(2 ** 63)),
    ])
    def test_integral_numbers_accepted(self, raw, expected):
        assert parse_task_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "1.5", ".5", "9223372036854775808", "-9223372036854775809",
        "99999999999999999999999", "1e400", "1e-400", 2 ** 63,
    ])
    def test_numbers_no_row_can_match(self, raw):
        assert parse_task_id(raw) is None

    @pytest.mark.parametrize("raw", ["abc", "", "12abc", "nan", "Infinity", "0x10", "1e", ".", None, True])
    def test_non_numbers_rejected(self, raw):
        with pytest.raises(TaskdeskInvalidIdError) as exc_info:
            parse_task_id(raw)
        assert exc_info.value.message == "Invalid task ID"


class TestParseListQuery:

    def test_defaults(self):
        query = parse_list_query()
        assert query.status is None
        assert query.sort is SortField.DUE_DATE
        assert query.order is SortOrder.ASC

    def test_empty_status_means_all(self):
        assert parse_list_query(status="").status is None

    def test_all_values(self):
        query = parse_list_query("In Progress", "created_at", " desc ")
        assert query.status is TaskStatus.IN_PROGRESS
        assert query.sort is SortField.CREATED_AT
        assert query.order is SortOrder.DESC

    def test_invalid_status(self):
        with pytest.raises(TaskdeskValidationError, match="Invalid status filter"):
            parse_list_query(status="in progress")

    @pytest.mark.parametrize("sort", ["", "priority", "due_date DESC", "id;--"])
    def test_invalid_sort(self, sort):
        with pytest.raises(TaskdeskValidationError, match="Invalid sort field"):
            parse_list_query(sort=sort)

    def test_invalid_order(self):
        with pytest.raises(TaskdeskValidationError, match="Invalid sort order"):
            parse_list_query(order="up")
