"""
Validation rules — turn raw request input into task schemas.

All field errors are collected in one pass and reported together as
human-readable messages; nothing is applied when any rule fails.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from taskdesk.engine.errors import TaskdeskInvalidIdError, TaskdeskValidationError
from taskdesk.records.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    SortField,
    SortOrder,
    TaskCreate,
    TaskPatch,
    TaskQuery,
    TaskStatus,
)

VALIDATION_FAILED = "Validation failed"
STATUS_CHOICES = ", ".join(s.value for s in TaskStatus)

_FIELD_LABELS = {
    "title": "Title",
    "description": "Description",
    "status": "Status",
    "due_date": "Due date",
}

_MESSAGES: Dict[Tuple[str, str], str] = {
    ("title", "missing"): "Title is required",
    ("title", "string_too_short"): "Title is required",
    ("title", "string_too_long"): f"Title must not exceed {TITLE_MAX_LENGTH} characters",
    ("title", "string_type"): "Title must be a string",
    ("description", "string_too_long"): (
        f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"
    ),
    ("description", "string_type"): "Description must be a string",
    ("status", "missing"): "Status is required",
    ("status", "enum"): f"Status must be one of: {STATUS_CHOICES}",
    ("due_date", "missing"): "Due date is required",
}

_TASK_ID = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# Signed 64-bit range of an SQLite INTEGER primary key
MIN_TASK_ID = -(2 ** 63)
MAX_TASK_ID = 2 ** 63 - 1

M = TypeVar("M", bound=BaseModel)


def _message_for(error: Dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else ""
    err_type = error.get("type", "")

    known = _MESSAGES.get((field, err_type))
    if known:
        return known

    label = _FIELD_LABELS.get(field)
    if label is None:
        # Model-level rule (e.g. at least one field)
        return error.get("msg", VALIDATION_FAILED)
    if err_type == "null_not_allowed":
        return f"{label} must not be null"
    if field == "due_date" and err_type.startswith("datetime"):
        return "Due date must be a valid date"
    if err_type == "iso_format":
        return error["msg"]
    return f"{label}: {error.get('msg', 'is invalid')}"


def collect_messages(exc: ValidationError) -> List[str]:
    """One message per violated rule, in field order, without duplicates."""
    messages: List[str] = []
    for error in exc.errors():
        message = _message_for(error)
        if message not in messages:
            messages.append(message)
    return messages


def _validate(model: Type[M], payload: Any) -> M:
    if not isinstance(payload, dict):
        raise TaskdeskValidationError(
            VALIDATION_FAILED,
            validation_errors=["Request body must be a JSON object"],
        )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise TaskdeskValidationError(
            VALIDATION_FAILED,
            validation_errors=collect_messages(e),
            schema=model.__name__,
        ) from e


def validate_create(payload: Any) -> TaskCreate:
    """Validate a create payload against the create schema."""
    return _validate(TaskCreate, payload)


def validate_update(payload: Any) -> TaskPatch:
    """Validate a partial update payload; at least one field is required."""
    return _validate(TaskPatch, payload)


def parse_task_id(raw: Any) -> Optional[int]:
    """
    Parse a path id.

    Any finite decimal number is accepted (``7``, ``7.0``, ``7e0``). Returns
    the integer id, or None when the number cannot match a row: a fraction,
    or a value outside the INTEGER key range. Anything else raises
    ``TaskdeskInvalidIdError``.
    """
    if isinstance(raw, bool):
        raise TaskdeskInvalidIdError(raw_id=str(raw))
    if isinstance(raw, int):
        return raw if MIN_TASK_ID <= raw <= MAX_TASK_ID else None
    text = str(raw).strip() if raw is not None else ""
    if not _TASK_ID.match(text):
        raise TaskdeskInvalidIdError(raw_id=text)

    value = Decimal(text)
    if value.is_zero():
        return 0
    # 20+ integer digits is out of range; checked before int() sees a huge exponent
    if value.adjusted() > 18 or value != value.to_integral_value():
        return None
    task_id = int(value)
    return task_id if MIN_TASK_ID <= task_id <= MAX_TASK_ID else None


def parse_list_query(
    status: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> TaskQuery:
    """
    Validate list query parameters against their closed sets.

    Empty ``status`` means no filter; ``sort`` defaults to due_date and
    ``order`` to ASC when omitted.
    """
    query = TaskQuery()

    if status:
        try:
            query.status = TaskStatus(status)
        except ValueError:
            raise TaskdeskValidationError(
                "Invalid status filter. Must be: To Do, In Progress, or Completed",
                parameter="status",
            ) from None

    if sort is not None:
        try:
            query.sort = SortField(sort)
        except ValueError:
            raise TaskdeskValidationError("Invalid sort field", parameter="sort") from None

    if order is not None:
        try:
            query.order = SortOrder.parse(order)
        except ValueError:
            raise TaskdeskValidationError(
                "Invalid sort order. Must be ASC or DESC", parameter="order"
            ) from None

    return query
