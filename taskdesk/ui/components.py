"""
Task board components — banners, summary cards, filter bar, task cards,
the create/edit modal and the delete confirmation.
"""

import reflex as rx

from taskdesk.records.task import SortField, TaskStatus
from taskdesk.ui.state import TaskBoardState
from taskdesk.ui.view_model import SORT_LABELS, STATUS_BLURBS

STATUS_VALUES = [s.value for s in TaskStatus]


# ---------------------------------------------------------------------------
# Banners
# ---------------------------------------------------------------------------

def _banner(title: str, message, color: str, icon: str, on_dismiss) -> rx.Component:
    return rx.callout.root(
        rx.hstack(
            rx.callout.icon(rx.icon(icon)),
            rx.vstack(
                rx.text(title, weight="bold"),
                rx.callout.text(message),
                spacing="1",
            ),
            rx.spacer(),
            rx.icon_button(
                rx.icon("x", size=16),
                variant="ghost",
                color_scheme="gray",
                on_click=on_dismiss,
                aria_label="Close notification",
            ),
            width="100%",
            align="start",
        ),
        color_scheme=color,
        width="100%",
        role="alert",
    )


def notification_banners() -> rx.Component:
    return rx.vstack(
        rx.cond(
            TaskBoardState.success != "",
            _banner("Success", TaskBoardState.success, "green", "circle-check",
                    TaskBoardState.dismiss_success),
        ),
        rx.cond(
            TaskBoardState.error != "",
            _banner("There is a problem", TaskBoardState.error, "red", "circle-alert",
                    TaskBoardState.dismiss_error),
        ),
        width="100%",
        spacing="3",
    )


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def _summary_card(status: str, count, color: str) -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.text(status, size="3", weight="bold"),
            rx.text(count, size="8", weight="bold", color=f"var(--{color}-11)"),
            rx.text(STATUS_BLURBS[status], size="2", color="gray"),
            spacing="1",
        ),
        width="100%",
    )


def status_summary() -> rx.Component:
    return rx.vstack(
        rx.heading("Task summary", size="6"),
        rx.grid(
            _summary_card(TaskStatus.TODO.value, TaskBoardState.todo_count, "gray"),
            _summary_card(TaskStatus.IN_PROGRESS.value, TaskBoardState.in_progress_count, "blue"),
            _summary_card(TaskStatus.COMPLETED.value, TaskBoardState.completed_count, "green"),
            columns=rx.breakpoints(initial="1", md="3"),
            spacing="4",
            width="100%",
        ),
        width="100%",
        spacing="3",
    )


# ---------------------------------------------------------------------------
# Filter bar
# ---------------------------------------------------------------------------

def filter_bar() -> rx.Component:
    return rx.vstack(
        rx.heading("Filter and search tasks", size="6"),
        rx.text("Search by task name or description", size="2", weight="medium"),
        rx.input(
            rx.input.slot(rx.icon("search", size=16)),
            placeholder="Enter search term",
            value=TaskBoardState.search_term,
            on_change=TaskBoardState.update_search,
            width="100%",
        ),
        rx.grid(
            rx.vstack(
                rx.text("Filter by status", size="2", weight="medium"),
                rx.select.root(
                    rx.select.trigger(width="100%"),
                    rx.select.content(
                        rx.select.item("All statuses", value="all"),
                        *[rx.select.item(s, value=s) for s in STATUS_VALUES],
                    ),
                    value=rx.cond(TaskBoardState.filter_status == "", "all",
                                  TaskBoardState.filter_status),
                    on_change=TaskBoardState.change_filter_status,
                ),
            ),
            rx.vstack(
                rx.text("Sort by", size="2", weight="medium"),
                rx.select.root(
                    rx.select.trigger(width="100%"),
                    rx.select.content(
                        *[rx.select.item(SORT_LABELS[f.value], value=f.value) for f in SortField],
                    ),
                    value=TaskBoardState.sort,
                    on_change=TaskBoardState.change_sort,
                ),
            ),
            rx.vstack(
                rx.text("Order", size="2", weight="medium"),
                rx.select.root(
                    rx.select.trigger(width="100%"),
                    rx.select.content(
                        rx.select.item("Ascending", value="ASC"),
                        rx.select.item("Descending", value="DESC"),
                    ),
                    value=TaskBoardState.order,
                    on_change=TaskBoardState.change_order,
                ),
            ),
            columns=rx.breakpoints(initial="1", md="3"),
            spacing="4",
            width="100%",
        ),
        width="100%",
        spacing="3",
        padding="4",
        background="var(--gray-2)",
    )


# ---------------------------------------------------------------------------
# Task card
# ---------------------------------------------------------------------------

def _detail_row(label: rx.Component, value: rx.Component) -> rx.Component:
    return rx.hstack(
        rx.box(label, width="33%"),
        rx.box(value, width="67%"),
        width="100%",
        padding_y="2",
        border_bottom="1px solid var(--gray-5)",
    )


def task_card(task) -> rx.Component:
    """One task; ``task`` is a decorated task dict var."""
    return rx.card(
        rx.vstack(
            rx.hstack(
                rx.heading(task["title"], size="4", flex="1"),
                rx.icon_button(
                    rx.icon("pencil", size=18),
                    variant="ghost",
                    on_click=TaskBoardState.open_edit_form(task),
                    aria_label="Edit task",
                ),
                rx.icon_button(
                    rx.icon("trash-2", size=18),
                    variant="ghost",
                    color_scheme="red",
                    on_click=TaskBoardState.request_delete(task["id"]),
                    aria_label="Delete task",
                ),
                width="100%",
                align="start",
            ),
            rx.cond(task["description"] != "", rx.text(task["description"], size="2")),
            _detail_row(
                rx.text("Status", weight="bold", size="2"),
                rx.badge(
                    task["status"],
                    color_scheme=task["status_color"],
                    cursor="pointer",
                    title="Click to change status",
                    on_click=TaskBoardState.cycle_status(task["id"], task["status"]),
                ),
            ),
            _detail_row(
                rx.hstack(rx.icon("calendar", size=14), rx.text("Due date", weight="bold", size="2")),
                rx.hstack(
                    rx.text(
                        task["due_display"],
                        size="2",
                        color=rx.cond(task["overdue"], "var(--red-11)", "inherit"),
                        weight=rx.cond(task["overdue"], "bold", "regular"),
                    ),
                    rx.cond(task["overdue"], rx.badge("Overdue", color_scheme="red")),
                ),
            ),
            _detail_row(
                rx.text("Created", weight="bold", size="2"),
                rx.text(task["created_display"], size="2", color="gray"),
            ),
            rx.text("Click the status tag to update task progress", size="1", color="gray"),
            spacing="2",
            width="100%",
        ),
        width="100%",
    )


def task_list() -> rx.Component:
    return rx.vstack(
        rx.hstack(
            rx.heading("Your tasks", size="6"),
            rx.spacer(),
            rx.button(rx.icon("plus", size=16), "Create new task",
                      on_click=TaskBoardState.open_create_form),
            width="100%",
        ),
        rx.cond(
            TaskBoardState.loading,
            rx.center(rx.spinner(size="3"), padding="6", width="100%"),
            rx.cond(
                TaskBoardState.visible_tasks.length() > 0,
                rx.vstack(
                    rx.foreach(TaskBoardState.visible_tasks, task_card),
                    spacing="4",
                    width="100%",
                ),
                rx.center(
                    rx.text("No tasks found", color="gray"),
                    padding="6",
                    width="100%",
                ),
            ),
        ),
        width="100%",
        spacing="4",
    )


# ---------------------------------------------------------------------------
# Create / edit modal
# ---------------------------------------------------------------------------

def _field_error(message) -> rx.Component:
    return rx.cond(message != "", rx.text(message, color="var(--red-11)", size="2", weight="bold"))


def task_form_modal() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(rx.cond(TaskBoardState.is_editing, "Edit task", "Create a new task")),
            rx.dialog.description(
                rx.cond(
                    TaskBoardState.is_editing,
                    "Update the task details below",
                    "Fill in the form below to create a new task",
                ),
                size="2",
                color="gray",
            ),
            rx.vstack(
                rx.text("Task title", weight="bold", size="2"),
                _field_error(TaskBoardState.title_error),
                rx.input(
                    value=TaskBoardState.form_title,
                    on_change=lambda v: TaskBoardState.set_form_field("title", v),
                    max_length=200,
                    width="100%",
                ),
                rx.text("Description (optional)", weight="bold", size="2"),
                _field_error(TaskBoardState.description_error),
                rx.text_area(
                    value=TaskBoardState.form_description,
                    on_change=lambda v: TaskBoardState.set_form_field("description", v),
                    rows="4",
                    width="100%",
                ),
                rx.text("Status", weight="bold", size="2"),
                rx.select(
                    STATUS_VALUES,
                    value=TaskBoardState.form_status,
                    on_change=lambda v: TaskBoardState.set_form_field("status", v),
                    width="100%",
                ),
                rx.text("Due date and time", weight="bold", size="2"),
                _field_error(TaskBoardState.due_date_error),
                rx.input(
                    type="datetime-local",
                    value=TaskBoardState.form_due_date,
                    on_change=lambda v: TaskBoardState.set_form_field("due_date", v),
                    width="100%",
                ),
                rx.hstack(
                    rx.button(
                        rx.cond(TaskBoardState.is_editing, "Save changes", "Create task"),
                        on_click=TaskBoardState.submit_form,
                    ),
                    rx.button("Cancel", variant="soft", color_scheme="gray",
                              on_click=TaskBoardState.close_form),
                    spacing="3",
                    padding_top="3",
                ),
                spacing="2",
                width="100%",
                padding_top="3",
            ),
            max_width="640px",
        ),
        open=TaskBoardState.show_form,
        on_open_change=lambda _: TaskBoardState.close_form(),
    )


def delete_confirmation() -> rx.Component:
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title("Delete task"),
            rx.alert_dialog.description("Are you sure you want to delete this task?"),
            rx.hstack(
                rx.alert_dialog.cancel(
                    rx.button("Cancel", variant="soft", color_scheme="gray",
                              on_click=TaskBoardState.cancel_delete),
                ),
                rx.alert_dialog.action(
                    rx.button("Delete", color_scheme="red", on_click=TaskBoardState.confirm_delete),
                ),
                spacing="3",
                justify="end",
                padding_top="3",
            ),
        ),
        open=TaskBoardState.confirm_delete_open,
    )
