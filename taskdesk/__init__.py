"""
TaskDesk — task tracking REST API with a Reflex task board.

Packages:
    engine    — configuration, errors, logging, health checks
    records   — task schemas and closed enumerations
    rules     — validation of payloads, ids and list queries
    db        — SQLAlchemy model, sessions and the task store
    services  — the task operations
    api       — FastAPI application
    ui        — Reflex state, components and API client
"""

__version__ = "1.0.0"
__all__ = ["engine", "records", "rules", "db", "services", "api", "ui"]
