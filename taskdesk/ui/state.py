"""
Task board — Reflex State.

Holds the last fetched task list, the filter/sort/order selection, the
client-side search term, the create/edit form and the banner messages.
Filter, sort and order changes re-fetch from the API; search only narrows
the list already on screen.
"""

from __future__ import annotations

import asyncio
import logging

import reflex as rx

from taskdesk.engine.config import get_config
from taskdesk.engine.errors import TaskdeskApiError
from taskdesk.records.task import TaskStatus
from taskdesk.ui import view_model
from taskdesk.ui.api_client import TaskApiClient

logger = logging.getLogger("taskdesk.ui.state")


def _api() -> TaskApiClient:
    config = get_config()
    return TaskApiClient(config.ui.api_base_url, timeout=config.ui.request_timeout_seconds)


class TaskBoardState(rx.State):
    """Single-page task board state."""

    # Data
    tasks: list[dict] = []
    loading: bool = False

    # Banners
    error: str = ""
    success: str = ""
    success_seq: int = 0

    # List controls
    filter_status: str = ""
    sort: str = "due_date"
    order: str = "ASC"
    search_term: str = ""

    # Form modal (editing_task_id == 0 means create)
    show_form: bool = False
    editing_task_id: int = 0
    form_title: str = ""
    form_description: str = ""
    form_status: str = TaskStatus.TODO.value
    form_due_date: str = ""
    title_error: str = ""
    description_error: str = ""
    due_date_error: str = ""

    # Delete confirmation
    pending_delete_id: int = 0

    # ------------------------------------------------------------------
    # Computed vars
    # ------------------------------------------------------------------

    @rx.var
    def visible_tasks(self) -> list[dict]:
        return view_model.search_tasks(self.tasks, self.search_term)

    @rx.var
    def todo_count(self) -> int:
        return view_model.count_by_status(self.tasks)[TaskStatus.TODO.value]

    @rx.var
    def in_progress_count(self) -> int:
        return view_model.count_by_status(self.tasks)[TaskStatus.IN_PROGRESS.value]

    @rx.var
    def completed_count(self) -> int:
        return view_model.count_by_status(self.tasks)[TaskStatus.COMPLETED.value]

    @rx.var
    def is_editing(self) -> bool:
        return self.editing_task_id != 0

    @rx.var
    def confirm_delete_open(self) -> bool:
        return self.pending_delete_id != 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_tasks(self):
        """Fetch tasks using the current filter/sort/order."""
        self.loading = True
        self.error = ""
        yield
        try:
            data = await _api().get_tasks(
                {"status": self.filter_status, "sort": self.sort, "order": self.order}
            )
            self.tasks = [view_model.decorate_task(t) for t in data.get("tasks", [])]
        except TaskdeskApiError as e:
            logger.error("Error loading tasks: %s", e.message)
            self.error = "Failed to load tasks. Please try again."
        finally:
            self.loading = False

    def change_filter_status(self, value: str):
        self.filter_status = "" if value == "all" else value
        return TaskBoardState.load_tasks

    def change_sort(self, value: str):
        self.sort = value
        return TaskBoardState.load_tasks

    def change_order(self, value: str):
        self.order = value
        return TaskBoardState.load_tasks

    def update_search(self, value: str):
        self.search_term = value

    # ------------------------------------------------------------------
    # Banners
    # ------------------------------------------------------------------

    def dismiss_error(self):
        self.error = ""

    def dismiss_success(self):
        self.success = ""

    def _show_success(self, message: str):
        self.success = message
        self.success_seq += 1
        return TaskBoardState.clear_success_later(self.success_seq)

    @rx.event(background=True)
    async def clear_success_later(self, seq: int):
        await asyncio.sleep(get_config().ui.notification_timeout_seconds)
        async with self:
            # A newer message restarts the timer
            if self.success_seq == seq:
                self.success = ""

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------

    def _fill_form(self, fields: dict):
        self.form_title = fields["title"]
        self.form_description = fields["description"]
        self.form_status = fields["status"]
        self.form_due_date = fields["due_date"]
        self.title_error = ""
        self.description_error = ""
        self.due_date_error = ""

    def open_create_form(self):
        self.editing_task_id = 0
        self._fill_form(view_model.EMPTY_FORM)
        self.show_form = True

    def open_edit_form(self, task: dict):
        self.editing_task_id = int(task["id"])
        self._fill_form(view_model.task_to_form(task))
        self.show_form = True

    def close_form(self):
        self.show_form = False
        self.editing_task_id = 0

    def set_form_field(self, field: str, value: str):
        setattr(self, f"form_{field}", value)
        error_var = f"{field}_error"
        if hasattr(self, error_var):
            setattr(self, error_var, "")

    async def submit_form(self):
        form = {
            "title": self.form_title,
            "description": self.form_description,
            "status": self.form_status,
            "due_date": self.form_due_date,
        }
        errors = view_model.validate_form(form)
        self.title_error = errors.get("title", "")
        self.description_error = errors.get("description", "")
        self.due_date_error = errors.get("due_date", "")
        if errors:
            return

        payload = view_model.form_to_payload(form)
        api = _api()
        if self.editing_task_id:
            try:
                await api.update_task(self.editing_task_id, payload)
            except TaskdeskApiError as e:
                logger.error("Error updating task: %s", e.message)
                self.error = "Failed to update task. Please try again."
                return
            message = "Task updated successfully"
        else:
            try:
                await api.create_task(payload)
            except TaskdeskApiError as e:
                logger.error("Error creating task: %s (%s)", e.message, e.details)
                self.error = e.message or "Failed to create task. Please try again."
                return
            message = "Task created successfully"

        self.close_form()
        yield self._show_success(message)
        yield TaskBoardState.load_tasks

    # ------------------------------------------------------------------
    # Row actions
    # ------------------------------------------------------------------

    async def cycle_status(self, task_id: int, status: str):
        """Advance a task's status by one step with a single-field update."""
        try:
            await _api().update_task(task_id, {"status": view_model.next_status(status)})
        except TaskdeskApiError as e:
            logger.error("Error updating status: %s", e.message)
            self.error = "Failed to update task status. Please try again."
            return
        yield self._show_success("Task status updated")
        yield TaskBoardState.load_tasks

    def request_delete(self, task_id: int):
        self.pending_delete_id = int(task_id)

    def cancel_delete(self):
        self.pending_delete_id = 0

    async def confirm_delete(self):
        task_id = self.pending_delete_id
        self.pending_delete_id = 0
        try:
            await _api().delete_task(task_id)
        except TaskdeskApiError as e:
            logger.error("Error deleting task: %s", e.message)
            self.error = "Failed to delete task. Please try again."
            return
        yield self._show_success("Task deleted successfully")
        yield TaskBoardState.load_tasks
