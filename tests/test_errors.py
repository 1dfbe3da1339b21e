"""Unit tests for taskdesk.engine.errors — Error hierarchy & serialization."""

import json

import pytest

from taskdesk.engine.errors import (
    TaskdeskApiError,
    TaskdeskConfigError,
    TaskdeskError,
    TaskdeskInvalidIdError,
    TaskdeskNotFoundError,
    TaskdeskRecordError,
    TaskdeskValidationError,
)


class TestTaskdeskError:
    """Base error class tests."""

    def test_basic_creation(self):
        err = TaskdeskError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"
        assert err.error_type == "TaskdeskError"
        assert err.context == {}

    def test_to_dict(self):
        err = TaskdeskError("fail", path="/tmp/x")
        d = err.to_dict()
        assert d["error_type"] == "TaskdeskError"
        assert d["message"] == "fail"
        assert d["context"] == {"path": "/tmp/x"}
        assert "timestamp" in d

    def test_to_json(self):
        parsed = json.loads(TaskdeskError("fail").to_json())
        assert parsed["error_type"] == "TaskdeskError"
        assert parsed["message"] == "fail"

    def test_repr(self):
        assert repr(TaskdeskError("oops")) == "TaskdeskError: oops"


class TestSubclasses:

    @pytest.mark.parametrize("cls", [
        TaskdeskValidationError,
        TaskdeskRecordError,
        TaskdeskConfigError,
        TaskdeskApiError,
    ])
    def test_inherits_base(self, cls):
        err = cls("bad")
        assert isinstance(err, TaskdeskError)
        assert err.error_type == cls.__name__

    def test_validation_errors_listed(self):
        err = TaskdeskValidationError(
            "Validation failed", validation_errors=["Title is required", "Status is required"]
        )
        assert err.validation_errors == ["Title is required", "Status is required"]
        assert err.to_dict()["validation_errors"] == ["Title is required", "Status is required"]

    def test_validation_errors_default_empty(self):
        assert TaskdeskValidationError("Invalid sort field").validation_errors == []

    def test_invalid_id_default_message(self):
        err = TaskdeskInvalidIdError(raw_id="abc")
        assert err.message == "Invalid task ID"
        assert err.raw_id == "abc"

    def test_not_found_default_message(self):
        err = TaskdeskNotFoundError(record_id=7)
        assert err.message == "Task not found"
        assert err.record_id == 7

    def test_record_error_fields(self):
        d = TaskdeskRecordError("Task delete failed", operation="delete", record_id=3).to_dict()
        assert d["operation"] == "delete"
        assert d["record_id"] == 3

    def test_api_error_fields(self):
        err = TaskdeskApiError("Validation failed", status_code=400, details=["Title is required"])
        assert err.status_code == 400
        assert err.details == ["Title is required"]
        assert err.to_dict()["status_code"] == 400
