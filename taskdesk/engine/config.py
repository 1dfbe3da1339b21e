"""
TaskDesk Configuration — Load and validate taskdesk.yaml at startup.

Usage:
    from taskdesk.engine.config import load_config, get_config
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from taskdesk.engine.errors import TaskdeskConfigError

CONFIG_FILENAME = "taskdesk.yaml"
DATABASE_URL_ENV = "TASKDESK_DATABASE_URL"


# ---------------------------------------------------------------------------
# Pydantic models for taskdesk.yaml
# ---------------------------------------------------------------------------

class DatabaseConfig(BaseModel):
    url: str = "sqlite:///taskdesk.db"
    echo: bool = False
    create_tables: bool = True


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3001
    prefix: str = "/api"
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        v = v.rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError(f"api prefix must start with '/', got '{v}'")
        return v


class UIConfig(BaseModel):
    api_base_url: str = "http://localhost:3001/api"
    notification_timeout_seconds: float = 5.0
    request_timeout_seconds: float = 10.0


class LoggingConfig(BaseModel):
    level: str = "INFO"
    directory: str = ".taskdesk/logs"
    request_log: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"logging level must be DEBUG/INFO/WARNING/ERROR/CRITICAL, got '{v}'")
        return v


class TaskdeskConfig(BaseModel):
    """Root model for taskdesk.yaml."""
    name: str = "TaskDesk"
    version: str = "1.0.0"
    environment: str = "dev"

    database: DatabaseConfig = DatabaseConfig()
    api: ApiConfig = ApiConfig()
    ui: UIConfig = UIConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[TaskdeskConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for taskdesk.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILENAME).exists():
            return parent
    return current


def get_project_root() -> Path:
    """Return the project root directory."""
    return _find_project_root()


def load_config(config_path: Optional[str] = None) -> TaskdeskConfig:
    """
    Load and validate taskdesk.yaml.

    Args:
        config_path: Explicit path to taskdesk.yaml. If None, auto-discovers.

    Returns:
        Validated TaskdeskConfig instance. Defaults are used when the file
        does not exist. ``TASKDESK_DATABASE_URL`` overrides ``database.url``.

    Raises:
        TaskdeskConfigError: the file is not valid YAML or fails validation.
    """
    global _config

    if config_path is None:
        config_path = str(get_project_root() / CONFIG_FILENAME)

    path = Path(config_path)
    raw: dict = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise TaskdeskConfigError(f"Could not parse {path}: {e}", path=str(path)) from e
        if not isinstance(raw, dict):
            raise TaskdeskConfigError(f"{path} must contain a mapping", path=str(path))

    # taskdesk.yaml may wrap name/version/environment under "app:"
    app_data = raw.pop("app", {}) or {}
    config_data = {**app_data, **raw}

    env_url = os.environ.get(DATABASE_URL_ENV)
    if env_url:
        config_data.setdefault("database", {})
        config_data["database"] = {**(config_data["database"] or {}), "url": env_url}

    try:
        _config = TaskdeskConfig(**config_data)
    except ValidationError as e:
        raise TaskdeskConfigError(f"Invalid configuration in {path}: {e}", path=str(path)) from e
    return _config


def get_config() -> TaskdeskConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded config (used by tests)."""
    global _config
    _config = None
