"""
TaskDesk Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from typing import Any, Dict

import pytest


# ---------------------------------------------------------------------------
# Environment setup — every test gets its own SQLite file and log directory
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Reset the config singleton and drop env overrides between tests."""
    import taskdesk.engine.config as cfg_mod

    monkeypatch.delenv(cfg_mod.DATABASE_URL_ENV, raising=False)
    cfg_mod.reset_config()
    yield
    cfg_mod.reset_config()


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture
def config(tmp_path, db_url):
    from taskdesk.engine.config import DatabaseConfig, LoggingConfig, TaskdeskConfig

    return TaskdeskConfig(
        database=DatabaseConfig(url=db_url),
        logging=LoggingConfig(directory=str(tmp_path / "logs")),
    )


@pytest.fixture
def session_factory(db_url):
    from taskdesk.db.session import dispose, init_db

    factory = init_db(db_url, create_tables=True)
    yield factory
    dispose(factory)


@pytest.fixture
def file_logger(tmp_path):
    from taskdesk.engine.logging import FileLogger

    return FileLogger(str(tmp_path / "logs"))


@pytest.fixture
def store(session_factory, file_logger):
    from taskdesk.db.task_store import TaskStore

    return TaskStore(session_factory, file_logger)


@pytest.fixture
def service(store):
    from taskdesk.services.task_service import TaskService

    return TaskService(store)


@pytest.fixture
def client(config, service, file_logger):
    from fastapi.testclient import TestClient

    from taskdesk.api.server import create_app

    with TestClient(create_app(config, service=service, file_logger=file_logger)) as test_client:
        yield test_client


@pytest.fixture
def make_payload():
    """Build a valid create payload, overriding any field."""

    def _make(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "title": "Review case file",
            "description": "Review and process case #12345",
            "status": "To Do",
            "due_date": "2024-12-31T23:59:59Z",
        }
        payload.update(overrides)
        return {k: v for k, v in payload.items() if v is not ...}

    return _make


@pytest.fixture
def seeded_tasks(service, make_payload):
    """Three tasks, one per status, with distinct due dates."""
    return [
        service.create(make_payload(title="Task 1", description=..., status="To Do",
                                    due_date="2024-12-31T23:59:59Z")),
        service.create(make_payload(title="Task 2", description=..., status="In Progress",
                                    due_date="2024-12-25T10:00:00Z")),
        service.create(make_payload(title="Task 3", description=..., status="Completed",
                                    due_date="2024-12-20T15:00:00Z")),
    ]
