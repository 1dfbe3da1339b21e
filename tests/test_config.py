"""Unit tests for taskdesk.engine.config — TaskdeskConfig, loading, overrides."""

import pytest

from taskdesk.engine import config as cfg_mod
from taskdesk.engine.config import (
    ApiConfig,
    LoggingConfig,
    TaskdeskConfig,
    get_config,
    get_project_root,
    load_config,
)
from taskdesk.engine.errors import TaskdeskConfigError


class TestTaskdeskConfig:
    """Test the Pydantic models."""

    def test_defaults(self):
        cfg = TaskdeskConfig()
        assert cfg.name == "TaskDesk"
        assert cfg.environment == "dev"
        assert cfg.database.url == "sqlite:///taskdesk.db"
        assert cfg.api.port == 3001
        assert cfg.api.prefix == "/api"
        assert cfg.ui.api_base_url == "http://localhost:3001/api"
        assert cfg.ui.notification_timeout_seconds == 5.0
        assert cfg.logging.level == "INFO"

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="dev/staging/prod"):
            TaskdeskConfig(environment="test")

    def test_prefix_normalised(self):
        assert ApiConfig(prefix="/v1/").prefix == "/v1"
        assert ApiConfig(prefix="/").prefix == ""

    def test_prefix_must_be_absolute(self):
        with pytest.raises(ValueError, match="must start with"):
            ApiConfig(prefix="api")

    def test_logging_level_case_insensitive(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_logging_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")


class TestLoadConfig:
    """Test loading taskdesk.yaml from disk."""

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(str(tmp_path / "taskdesk.yaml"))
        assert cfg == TaskdeskConfig()

    def test_reads_sections_and_app_block(self, tmp_path):
        path = tmp_path / "taskdesk.yaml"
        path.write_text(
            "app:\n"
            "  name: Case Tasks\n"
            "  environment: staging\n"
            "database:\n"
            "  url: sqlite:///cases.db\n"
            "api:\n"
            "  port: 4001\n"
        )
        cfg = load_config(str(path))
        assert cfg.name == "Case Tasks"
        assert cfg.environment == "staging"
        assert cfg.database.url == "sqlite:///cases.db"
        assert cfg.api.port == 4001
        assert cfg.api.host == "127.0.0.1"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "taskdesk.yaml"
        path.write_text("")
        assert load_config(str(path)).name == "TaskDesk"

    def test_env_overrides_database_url(self, tmp_path, monkeypatch):
        path = tmp_path / "taskdesk.yaml"
        path.write_text("database:\n  url: sqlite:///file.db\n  echo: true\n")
        monkeypatch.setenv("TASKDESK_DATABASE_URL", "sqlite:///:memory:")

        cfg = load_config(str(path))
        assert cfg.database.url == "sqlite:///:memory:"
        assert cfg.database.echo is True

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "taskdesk.yaml"
        path.write_text("api: [unclosed\n")
        with pytest.raises(TaskdeskConfigError, match="Could not parse"):
            load_config(str(path))

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "taskdesk.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(TaskdeskConfigError, match="must contain a mapping"):
            load_config(str(path))

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "taskdesk.yaml"
        path.write_text("api:\n  port: not-a-port\n")
        with pytest.raises(TaskdeskConfigError, match="Invalid configuration"):
            load_config(str(path))


class TestDiscovery:

    def test_project_root_found_from_subdirectory(self, tmp_path, monkeypatch):
        (tmp_path / "taskdesk.yaml").write_text("app:\n  name: Found\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert get_project_root() == tmp_path
        assert load_config().name == "Found"

    def test_get_config_caches(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = get_config()
        assert get_config() is first

        cfg_mod.reset_config()
        assert get_config() is not first
