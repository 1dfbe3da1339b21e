"""
Task Service — the five task operations plus the status summary.

Each operation is independent and stateless. Client errors are raised as
``TaskdeskValidationError`` / ``TaskdeskInvalidIdError`` /
``TaskdeskNotFoundError``; storage failures surface as
``TaskdeskRecordError`` from the store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from taskdesk.db.task_store import TaskStore
from taskdesk.engine.errors import TaskdeskNotFoundError, TaskdeskRecordError
from taskdesk.records.task import TaskRead
from taskdesk.rules.validate_task import (
    parse_list_query,
    parse_task_id,
    validate_create,
    validate_update,
)

logger = logging.getLogger("taskdesk.services.task_service")


class TaskService:
    """Validation → store → result, for one request at a time."""

    def __init__(self, store: TaskStore):
        self._store = store

    @property
    def store(self) -> TaskStore:
        return self._store

    def create(self, payload: Any) -> TaskRead:
        task = validate_create(payload)
        if not task.description:
            task = task.model_copy(update={"description": None})

        task_id = self._store.insert(task)
        created = self._store.fetch_one(task_id)
        if created is None:
            raise TaskdeskRecordError(
                "Inserted task could not be read back", operation="insert", record_id=task_id
            )
        logger.info("Created task %s", task_id)
        return created

    def list_tasks(
        self,
        status: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[TaskRead]:
        query = parse_list_query(status, sort, order)
        return self._store.fetch_many(query.status, query.sort, query.order)

    def _fetch(self, task_id: Optional[int]) -> Optional[TaskRead]:
        # None is a well-formed id that no row can have
        return self._store.fetch_one(task_id) if task_id is not None else None

    def get(self, raw_id: Any) -> TaskRead:
        task_id = parse_task_id(raw_id)
        task = self._fetch(task_id)
        if task is None:
            raise TaskdeskNotFoundError(record_id=task_id)
        return task

    def update(self, raw_id: Any, payload: Any) -> TaskRead:
        task_id = parse_task_id(raw_id)
        patch = validate_update(payload)

        if task_id is None or not self._store.update(task_id, patch):
            raise TaskdeskNotFoundError(record_id=task_id)

        updated = self._store.fetch_one(task_id)
        if updated is None:
            # Deleted between the update and the read-back
            raise TaskdeskNotFoundError(record_id=task_id)
        logger.info("Updated task %s (%s)", task_id, ", ".join(patch.changes()))
        return updated

    def delete(self, raw_id: Any) -> TaskRead:
        """Delete a task and return it as it was before removal."""
        task_id = parse_task_id(raw_id)
        existing = self._fetch(task_id)
        if existing is None or not self._store.delete(task_id):
            raise TaskdeskNotFoundError(record_id=task_id)
        logger.info("Deleted task %s", task_id)
        return existing

    def status_counts(self) -> Dict[str, int]:
        return {status.value: count for status, count in self._store.count_by_status().items()}
