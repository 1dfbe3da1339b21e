"""
TaskDesk Health Check — liveness and readiness payloads.

    /health  — process is up; always {"status": "OK", "timestamp": ...}
    /ready   — database answers a trivial query
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

logger = logging.getLogger("taskdesk.engine.health")


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a single health check."""
    name: str
    status: HealthStatus
    latency_ms: float = 0.0
    message: str = ""
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "latency_ms": round(self.latency_ms, 2),
            "message": self.message,
            "checked_at": self.checked_at.isoformat(),
        }


def liveness_payload() -> Dict[str, str]:
    """Body of GET /health."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


def check_database(session_factory: sessionmaker) -> HealthCheckResult:
    """Run ``SELECT 1`` through a fresh session."""
    start = time.perf_counter()
    try:
        with session_factory() as session:
            session.execute(text("SELECT 1"))
        return HealthCheckResult(
            name="database",
            status=HealthStatus.HEALTHY,
            latency_ms=(time.perf_counter() - start) * 1000,
            message="OK",
        )
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return HealthCheckResult(
            name="database",
            status=HealthStatus.UNHEALTHY,
            latency_ms=(time.perf_counter() - start) * 1000,
            message=str(e),
        )
