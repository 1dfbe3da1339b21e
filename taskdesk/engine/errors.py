"""
TaskDesk Error Hierarchy — Structured exceptions shared by the API, the
store and the UI client.

Every error carries a message, free-form context and a UTC timestamp, and
serializes to a JSON-compatible dict for the structured log.

Hierarchy:
    TaskdeskError
    ├── TaskdeskValidationError  — Payload or query failed validation
    ├── TaskdeskInvalidIdError   — Task id is not a valid integer
    ├── TaskdeskNotFoundError    — No task with the given id
    ├── TaskdeskRecordError      — Storage operation failed
    ├── TaskdeskConfigError      — Invalid taskdesk.yaml
    └── TaskdeskApiError         — Non-2xx response seen by the UI client
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class TaskdeskError(Exception):
    """Base error for all TaskDesk failures."""

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "timestamp": self.timestamp,
            "context": {k: str(v) for k, v in self.context.items()},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        return f"{self.error_type}: {self.message}"


class TaskdeskValidationError(TaskdeskError):
    """
    Input validation failed.

    ``validation_errors`` holds one human-readable message per violated rule.
    It is empty for query-parameter errors, which report a single message.
    """

    def __init__(self, message: str, **context: Any):
        self.validation_errors: List[str] = list(context.get("validation_errors") or [])
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["validation_errors"] = self.validation_errors
        return d


class TaskdeskInvalidIdError(TaskdeskError):
    """Task id could not be parsed as an integer."""

    def __init__(self, message: str = "Invalid task ID", **context: Any):
        self.raw_id: Optional[str] = context.get("raw_id")
        super().__init__(message, **context)


class TaskdeskNotFoundError(TaskdeskError):
    """No task row matches the requested id."""

    def __init__(self, message: str = "Task not found", **context: Any):
        self.record_id: Optional[int] = context.get("record_id")
        super().__init__(message, **context)


class TaskdeskRecordError(TaskdeskError):
    """Store operation failed (insert, fetch, update, delete)."""

    def __init__(self, message: str, **context: Any):
        self.operation: Optional[str] = context.get("operation")
        self.record_id: Optional[int] = context.get("record_id")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["operation"] = self.operation
        d["record_id"] = self.record_id
        return d


class TaskdeskConfigError(TaskdeskError):
    """Configuration error — invalid taskdesk.yaml."""
    pass


class TaskdeskApiError(TaskdeskError):
    """The task API answered with a non-2xx status."""

    def __init__(self, message: str, **context: Any):
        self.status_code: Optional[int] = context.get("status_code")
        self.details: List[str] = list(context.get("details") or [])
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["status_code"] = self.status_code
        d["details"] = self.details
        return d
