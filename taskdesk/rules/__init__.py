"""Validation rules for task payloads, ids and list queries."""

from taskdesk.rules.validate_task import (
    VALIDATION_FAILED,
    collect_messages,
    parse_list_query,
    parse_task_id,
    validate_create,
    validate_update,
)

__all__ = [
    "VALIDATION_FAILED",
    "collect_messages",
    "parse_list_query",
    "parse_task_id",
    "validate_create",
    "validate_update",
]
