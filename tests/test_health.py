"""Unit tests for taskdesk.engine.health and the /ready endpoint."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from taskdesk.api.server import create_app
from taskdesk.engine.health import HealthStatus, check_database, liveness_payload


def _broken_factory():
    session = MagicMock()
    session.__enter__.return_value = session
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("unable to open"))
    return MagicMock(return_value=session)


class TestLiveness:

    def test_payload(self):
        payload = liveness_payload()
        assert payload["status"] == "OK"
        assert payload["timestamp"].endswith("+00:00")


class TestCheckDatabase:

    def test_healthy(self, session_factory):
        result = check_database(session_factory)
        assert result.status == HealthStatus.HEALTHY
        assert result.name == "database"
        assert result.to_dict()["status"] == "healthy"

    def test_unhealthy(self):
        result = check_database(_broken_factory())
        assert result.status == HealthStatus.UNHEALTHY
        assert "unable to open" in result.message


class TestReadyEndpoint:

    def test_unavailable_database_is_503(self, config, service, file_logger, monkeypatch):
        monkeypatch.setattr(service.store, "_session_factory", _broken_factory())
        with TestClient(create_app(config, service=service, file_logger=file_logger)) as client:
            resp = client.get("/ready")
            health = client.get("/health")

        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "unavailable"
        assert body["database"] == "unhealthy"
        assert body["checks"][0]["status"] == "unhealthy"
        assert health.status_code == 200
