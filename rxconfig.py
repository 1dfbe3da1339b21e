"""
TaskDesk — Reflex configuration.

The board is served by Reflex; it calls the separate task API
(``taskdesk serve``, default port 3001) over HTTP.
"""

import reflex as rx

config = rx.Config(
    app_name="taskdesk",
    # Frontend port for dev server
    frontend_port=3000,
    # Reflex backend port (state sync only; the task API runs separately)
    backend_port=8000,
    # Telemetry
    telemetry_enabled=False,
)
