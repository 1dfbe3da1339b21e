"""Task record schemas."""

from taskdesk.records.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    SortField,
    SortOrder,
    TaskCreate,
    TaskPatch,
    TaskQuery,
    TaskRead,
    TaskStatus,
)

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "SortField",
    "SortOrder",
    "TaskCreate",
    "TaskPatch",
    "TaskQuery",
    "TaskRead",
    "TaskStatus",
]
