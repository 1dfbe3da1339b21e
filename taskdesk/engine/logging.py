"""
TaskDesk Logging — stdlib logger setup plus a structured JSON-lines file log.

Implements:
- configure_logging: root handler + level for the ``taskdesk`` logger tree
- FileLogger: per-object-type, per-category log files (daily files)
- Log entry builders for API requests, store operations and system events

File layout: {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("taskdesk.engine.logging")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Valid object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "web_apis": ["execution"],
    "records": ["execution"],
    "system": ["execution"],
}


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the ``taskdesk`` logger (idempotent)."""
    root = logging.getLogger("taskdesk")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_taskdesk_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._taskdesk_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.

    Thread-safe — uses a lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        file_path = self._resolve_path(entry.object_type, entry.category)
        key = str(file_path)

        with self._file_locks[key]:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json())
                f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        if category not in OBJECT_TYPE_CATEGORIES.get(object_type, []):
            raise ValueError(f"Unknown log target {object_type}/{category}")
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def query(
        self,
        object_type: str,
        category: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        filters: Optional[Dict[str, Any]] = None,
        limit: int = 500,
    ) -> List[Dict[str, Any]]:
        """
        Query log entries for a given object_type/category.

        Args:
            start_date: Earliest date to include (defaults to 7 days ago).
            end_date: Latest date to include (defaults to today).
            filters: Only entries whose top-level keys equal ALL of these.
            limit: Max number of entries to return.

        Returns:
            List of parsed log-entry dicts, newest first.
        """
        if end_date is None:
            end_date = date.today()
        if start_date is None:
            start_date = end_date - timedelta(days=7)

        log_base = self._log_dir / object_type / category
        if not log_base.exists():
            return []

        results: List[Dict[str, Any]] = []
        current = end_date
        while current >= start_date and len(results) < limit:
            file_path = log_base / f"{current.isoformat()}.jsonl"
            if file_path.exists():
                day_entries = self._read_jsonl(file_path, filters)
                day_entries.reverse()
                results.extend(day_entries[: limit - len(results)])
            current -= timedelta(days=1)

        return results

    @staticmethod
    def _read_jsonl(path: Path, filters: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        entries: List[Dict[str, Any]] = []
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        continue
                    if filters and not all(data.get(k) == v for k, v in filters.items()):
                        continue
                    entries.append(data)
        except OSError as exc:
            logger.warning("Could not read log file %s: %s", path, exc)
        return entries


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(event: str, level: str, **extra: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
    }
    entry.update(extra)
    return entry


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client: Optional[str] = None,
) -> LogEntry:
    """Build an API request log entry."""
    if status_code >= 500:
        level = "ERROR"
    elif status_code >= 400:
        level = "WARNING"
    else:
        level = "INFO"
    data = _base_entry(
        event="api_request",
        level=level,
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
    )
    if client:
        data["client"] = client
    return LogEntry("web_apis", "execution", data)


def log_record_operation(
    operation: str,
    success: bool,
    record_id: Optional[int] = None,
    error: Optional[str] = None,
) -> LogEntry:
    """Build a task store operation log entry."""
    data = _base_entry(
        event="record_operation",
        level="INFO" if success else "ERROR",
        operation=operation,
        success=success,
    )
    if record_id is not None:
        data["record_id"] = record_id
    if error:
        data["error"] = error
    return LogEntry("records", "execution", data)


def log_system_event(event: str, level: str = "INFO", **details: Any) -> LogEntry:
    """Build a system event entry (startup, shutdown, schema creation)."""
    return LogEntry("system", "execution", _base_entry(event=event, level=level, **details))
