"""Unit tests for taskdesk.cli — command parsing and execution."""

import subprocess
from unittest.mock import patch

from sqlalchemy import create_engine, inspect

import taskdesk.cli as cli_mod


class TestCLIParsing:

    def test_no_command_prints_help(self, capsys):
        assert cli_mod.main([]) == 0
        assert "init-db" in capsys.readouterr().out

    def test_module_has_expected_commands(self):
        assert hasattr(cli_mod, "cmd_init_db")
        assert hasattr(cli_mod, "cmd_serve")
        assert hasattr(cli_mod, "cmd_run")


class TestCmdInitDb:

    def test_creates_tasks_table(self, tmp_path, capsys):
        db_path = tmp_path / "cli.db"
        config_path = tmp_path / "taskdesk.yaml"
        config_path.write_text(
            f"database:\n  url: sqlite:///{db_path}\n"
            f"logging:\n  directory: {tmp_path / 'logs'}\n"
        )

        assert cli_mod.main(["init-db", "--config", str(config_path)]) == 0
        assert "[OK]" in capsys.readouterr().out

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            assert "tasks" in inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def test_invalid_config_reported(self, tmp_path, capsys):
        config_path = tmp_path / "taskdesk.yaml"
        config_path.write_text("environment: nowhere\n")

        assert cli_mod.main(["init-db", "--config", str(config_path)]) == 1
        assert "[ERROR]" in capsys.readouterr().out


class TestCmdServe:

    def test_overrides_host_and_port(self, tmp_path):
        config_path = tmp_path / "taskdesk.yaml"
        config_path.write_text(f"database:\n  url: sqlite:///{tmp_path / 'serve.db'}\n")

        with patch("taskdesk.api.server.run_server") as run_server:
            code = cli_mod.main(["serve", "--config", str(config_path), "--host", "0.0.0.0", "--port", "4100"])

        assert code == 0
        config = run_server.call_args.args[0]
        assert config.api.host == "0.0.0.0"
        assert config.api.port == 4100


class TestCmdRun:

    def test_invokes_reflex(self):
        with patch("subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            assert cli_mod.main(["run", "--port", "3100"]) == 0

        cmd = run.call_args.args[0]
        assert cmd[:2] == ["reflex", "run"]
        assert "3100" in cmd

    def test_missing_reflex(self, capsys):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert cli_mod.main(["run"]) == 1
        assert "not found" in capsys.readouterr().out
