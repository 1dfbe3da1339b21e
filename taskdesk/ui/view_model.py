"""
View helpers for the task board — plain functions over task dicts as
returned by the API, kept free of Reflex so the state can stay thin.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from taskdesk.records.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskStatus

STATUS_COLORS = {
    TaskStatus.TODO.value: "gray",
    TaskStatus.IN_PROGRESS.value: "blue",
    TaskStatus.COMPLETED.value: "green",
}

STATUS_BLURBS = {
    TaskStatus.TODO.value: "tasks awaiting action",
    TaskStatus.IN_PROGRESS.value: "tasks in progress",
    TaskStatus.COMPLETED.value: "tasks completed",
}

SORT_LABELS = {
    "due_date": "Due date",
    "created_at": "Date created",
    "title": "Title",
    "status": "Status",
    "id": "Task ID",
}

EMPTY_FORM: Dict[str, str] = {
    "title": "",
    "description": "",
    "status": TaskStatus.TODO.value,
    "due_date": "",
}


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 text → aware UTC datetime; None when blank or unparsable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: Optional[str]) -> str:
    """'2024-12-31T23:59:59Z' → '31 December 2024, 23:59'."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return f"{parsed.day} {parsed:%B %Y, %H:%M}"


def is_overdue(task: Dict[str, Any], now: Optional[datetime] = None) -> bool:
    """Due date has passed and the task is not Completed."""
    if task.get("status") == TaskStatus.COMPLETED.value:
        return False
    due = parse_timestamp(task.get("due_date"))
    if due is None:
        return False
    return due < (now or datetime.now(timezone.utc))


def next_status(status: str) -> str:
    """Status reached by clicking the tag once."""
    return TaskStatus(status).next_status().value


def search_tasks(tasks: List[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Case-insensitive substring match over title or description."""
    needle = (term or "").lower()
    if not needle:
        return list(tasks)
    return [
        task for task in tasks
        if needle in (task.get("title") or "").lower()
        or needle in (task.get("description") or "").lower()
    ]


def count_by_status(tasks: List[Dict[str, Any]]) -> Dict[str, int]:
    counts = {status.value: 0 for status in TaskStatus}
    for task in tasks:
        if task.get("status") in counts:
            counts[task["status"]] += 1
    return counts


def decorate_task(task: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Add the display-only keys the task card renders."""
    return {
        **task,
        "description": task.get("description") or "",
        "status_color": STATUS_COLORS.get(task.get("status", ""), "gray"),
        "due_display": format_timestamp(task.get("due_date")),
        "created_display": format_timestamp(task.get("created_at")),
        "overdue": is_overdue(task, now),
    }


# ---------------------------------------------------------------------------
# Form helpers
# ---------------------------------------------------------------------------

def validate_form(form: Dict[str, str]) -> Dict[str, str]:
    """Client-side checks run before submitting; returns field → message."""
    errors: Dict[str, str] = {}
    title = form.get("title") or ""
    description = form.get("description") or ""

    if not title.strip():
        errors["title"] = "Enter a task title"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Task title must be {TITLE_MAX_LENGTH} characters or less"

    if len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"

    if not form.get("due_date"):
        errors["due_date"] = "Enter a due date and time"
    elif parse_timestamp(form["due_date"]) is None:
        errors["due_date"] = "Enter a real due date and time"

    return errors


def form_to_payload(form: Dict[str, str]) -> Dict[str, Any]:
    """
    Form fields → API payload. The datetime-local value is read as UTC and
    sent as ISO-8601 with a Z suffix.
    """
    due = parse_timestamp(form.get("due_date"))
    return {
        "title": (form.get("title") or "").strip(),
        "description": form.get("description") or "",
        "status": form.get("status") or TaskStatus.TODO.value,
        "due_date": due.isoformat().replace("+00:00", "Z") if due else form.get("due_date"),
    }


def task_to_form(task: Dict[str, Any]) -> Dict[str, str]:
    """Task → form fields; due date trimmed to a datetime-local value."""
    due = parse_timestamp(task.get("due_date"))
    return {
        "title": task.get("title") or "",
        "description": task.get("description") or "",
        "status": task.get("status") or TaskStatus.TODO.value,
        "due_date": due.strftime("%Y-%m-%dT%H:%M") if due else "",
    }
