"""
TaskDesk — Reflex application entry point.

The UI talks to the task API over HTTP (``ui.api_base_url`` in
taskdesk.yaml); start the API with ``taskdesk serve`` first.
"""

import logging

import reflex as rx

from taskdesk.engine.config import get_config
from taskdesk.engine.logging import configure_logging
from taskdesk.ui.pages import task_board_page
from taskdesk.ui.state import TaskBoardState

logger = logging.getLogger("taskdesk.startup")

configure_logging(get_config().logging.level)

app = rx.App(theme=rx.theme(accent_color="blue", radius="small"))
app.add_page(
    task_board_page,
    route="/",
    title=get_config().name,
    on_load=TaskBoardState.load_tasks,
)

logger.info("TaskDesk UI registered (API at %s)", get_config().ui.api_base_url)
