"""
Task board page.

Route: /
"""

import reflex as rx

from taskdesk.engine.config import get_config
from taskdesk.ui.components import (
    delete_confirmation,
    filter_bar,
    notification_banners,
    status_summary,
    task_form_modal,
    task_list,
)


def _header() -> rx.Component:
    return rx.box(
        rx.heading(get_config().name, size="6", color="white"),
        background="var(--accent-9)",
        padding_x="6",
        padding_y="4",
        width="100%",
    )


def task_board_page() -> rx.Component:
    """List, filter, search and edit tasks."""
    return rx.vstack(
        _header(),
        rx.container(
            rx.vstack(
                notification_banners(),
                rx.heading("Manage your casework tasks", size="8"),
                rx.text("View, create, and track your tasks", size="4", color="gray"),
                rx.divider(),
                status_summary(),
                rx.divider(),
                filter_bar(),
                task_list(),
                spacing="6",
                width="100%",
                padding_y="6",
            ),
            size="3",
        ),
        task_form_modal(),
        delete_confirmation(),
        spacing="0",
        width="100%",
        min_height="100vh",
    )
