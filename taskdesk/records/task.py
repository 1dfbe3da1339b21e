"""Task record — schemas for the single persisted entity."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_ISO_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TaskStatus(str, Enum):
    """Task progress. Values are case- and space-exact."""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    def next_status(self) -> "TaskStatus":
        """To Do → In Progress → Completed → To Do."""
        order = list(TaskStatus)
        return order[(order.index(self) + 1) % len(order)]


class SortField(str, Enum):
    ID = "id"
    TITLE = "title"
    STATUS = "status"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        """Case-insensitive lookup; raises ValueError for anything else."""
        return cls(value.strip().upper())


def _require_iso_string(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATE_PREFIX.match(value.strip()):
        raise PydanticCustomError("iso_format", "Due date must be in ISO 8601 format")
    value = value.strip()
    if _ISO_DATE_ONLY.match(value):
        return f"{value}T00:00:00"
    return value


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC already.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        # Offset pushes the instant past year 1 or 9999
        raise PydanticCustomError("datetime_range", "Due date must be a valid date") from None


Title = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH),
]
Description = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX_LENGTH)]
DueDate = Annotated[datetime, BeforeValidator(_require_iso_string), AfterValidator(_as_utc)]
UtcDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class TaskCreate(BaseModel):
    """Create schema. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    title: Title
    description: Optional[Description] = None
    status: TaskStatus
    due_date: DueDate


class TaskPatch(BaseModel):
    """
    Update schema — every field optional, at least one required.

    Only fields present in the payload are applied; ``changes()`` returns
    them in declaration order.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[Title] = None
    description: Optional[Description] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[DueDate] = None

    @field_validator("title", "status", "due_date", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Value must not be null")
        return value

    @model_validator(mode="after")
    def _require_one_field(self) -> "TaskPatch":
        if not self.model_fields_set:
            raise PydanticCustomError(
                "at_least_one_field", "At least one field must be provided for update"
            )
        return self

    def changes(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }


class TaskRead(BaseModel):
    """A persisted task as returned by every operation."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    due_date: UtcDateTime
    created_at: UtcDateTime
    updated_at: UtcDateTime

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class TaskQuery(BaseModel):
    """Validated list query."""

    status: Optional[TaskStatus] = None
    sort: SortField = SortField.DUE_DATE
    order: SortOrder = SortOrder.ASC
