"""
Task Store — single-table persistence for tasks.

Every call runs in its own session scope. Sorting and filtering are done by
the database; the sort column and direction are looked up from closed maps,
so request text never reaches the SQL statement.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Generator, List, Optional

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskdesk.db.base import utcnow
from taskdesk.db.models import TaskRow
from taskdesk.db.session import session_scope
from taskdesk.engine.errors import TaskdeskRecordError
from taskdesk.engine.logging import FileLogger, log_record_operation
from taskdesk.records.task import (
    SortField,
    SortOrder,
    TaskCreate,
    TaskPatch,
    TaskRead,
    TaskStatus,
)

logger = logging.getLogger("taskdesk.db.task_store")

_SORT_COLUMNS = {
    SortField.ID: TaskRow.id,
    SortField.TITLE: TaskRow.title,
    SortField.STATUS: TaskRow.status,
    SortField.DUE_DATE: TaskRow.due_date,
    SortField.CREATED_AT: TaskRow.created_at,
}

_DIRECTIONS = {
    SortOrder.ASC: asc,
    SortOrder.DESC: desc,
}


class TaskStore:
    """
    CRUD over the ``tasks`` table.

    Usage:
        store = TaskStore(init_db("sqlite:///taskdesk.db"))
        task_id = store.insert(task_create)
        task = store.fetch_one(task_id)
    """

    def __init__(self, session_factory: sessionmaker, file_logger: Optional[FileLogger] = None):
        self._session_factory = session_factory
        self._file_logger = file_logger

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory

    @contextmanager
    def _scope(self, operation: str, record_id: Optional[int] = None) -> Generator[Session, None, None]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Task %s failed (id=%s): %s", operation, record_id, e)
            self._record(operation, False, record_id, str(e))
            raise TaskdeskRecordError(
                f"Task {operation} failed",
                operation=operation,
                record_id=record_id,
            ) from e

    def _record(
        self,
        operation: str,
        success: bool,
        record_id: Optional[int] = None,
        error: Optional[str] = None,
    ) -> None:
        if self._file_logger is not None:
            self._file_logger.write(log_record_operation(operation, success, record_id, error))

    def insert(self, task: TaskCreate) -> int:
        """Insert a new row and return its generated id."""
        with self._scope("insert") as session:
            row = TaskRow(
                title=task.title,
                description=task.description,
                status=task.status,
                due_date=task.due_date,
            )
            session.add(row)
            session.flush()
            task_id = row.id
        self._record("insert", True, task_id)
        return task_id

    def fetch_one(self, task_id: int) -> Optional[TaskRead]:
        with self._scope("fetch", task_id) as session:
            row = session.get(TaskRow, task_id)
            return TaskRead.model_validate(row) if row is not None else None

    def fetch_many(
        self,
        status: Optional[TaskStatus] = None,
        sort: SortField = SortField.DUE_DATE,
        order: SortOrder = SortOrder.ASC,
    ) -> List[TaskRead]:
        """Rows matching ``status`` (all when None), ordered by ``sort``/``order``; ties by id."""
        direction = _DIRECTIONS[order]
        stmt = select(TaskRow)
        if status is not None:
            stmt = stmt.where(TaskRow.status == status)
        stmt = stmt.order_by(direction(_SORT_COLUMNS[sort]), asc(TaskRow.id))

        with self._scope("list") as session:
            rows = session.scalars(stmt).all()
            return [TaskRead.model_validate(row) for row in rows]

    def update(self, task_id: int, patch: TaskPatch) -> bool:
        """Apply the supplied fields and refresh updated_at. False when absent."""
        with self._scope("update", task_id) as session:
            row = session.get(TaskRow, task_id)
            if row is None:
                return False
            for name, value in patch.changes().items():
                setattr(row, name, value)
            row.updated_at = utcnow()
        self._record("update", True, task_id)
        return True

    def delete(self, task_id: int) -> bool:
        """Remove the row. False when absent."""
        with self._scope("delete", task_id) as session:
            row = session.get(TaskRow, task_id)
            if row is None:
                return False
            session.delete(row)
        self._record("delete", True, task_id)
        return True

    def count_by_status(self) -> Dict[TaskStatus, int]:
        """Task count for every status, zero-filled."""
        counts = {status: 0 for status in TaskStatus}
        stmt = select(TaskRow.status, func.count(TaskRow.id)).group_by(TaskRow.status)
        with self._scope("count") as session:
            for status, count in session.execute(stmt):
                counts[TaskStatus(status)] = count
        return counts
