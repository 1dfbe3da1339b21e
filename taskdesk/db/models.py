"""SQLAlchemy model for the tasks table."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Enum, Integer, String

from taskdesk.db.base import Base, TimestampMixin
from taskdesk.records.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskStatus


class TaskRow(TimestampMixin, Base):
    """One row per task. Ids come from AUTOINCREMENT and are never reused."""

    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    status = Column(
        Enum(
            TaskStatus,
            name="task_status",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            length=20,
        ),
        nullable=False,
        default=TaskStatus.TODO,
    )
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<TaskRow id={self.id} title={self.title!r} status={self.status}>"
