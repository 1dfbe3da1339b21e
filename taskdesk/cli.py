"""
TaskDesk CLI — database bootstrap and server commands.

Commands:
- taskdesk init-db   — Create the tasks table
- taskdesk serve     — Start the task API (uvicorn)
- taskdesk run       — Start the Reflex task board
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

logger = logging.getLogger("taskdesk.cli")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="taskdesk",
        description="TaskDesk — task tracking API and board",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # taskdesk init-db
    init_parser = subparsers.add_parser("init-db", help="Create the tasks table")
    init_parser.add_argument(
        "--config", default=None, help="Path to taskdesk.yaml (default: auto-discover)"
    )

    # taskdesk serve
    serve_parser = subparsers.add_parser("serve", help="Start the task API server")
    serve_parser.add_argument("--config", default=None, help="Path to taskdesk.yaml")
    serve_parser.add_argument("--host", default=None, help="Host to bind (default: api.host)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: api.port)")

    # taskdesk run
    run_parser = subparsers.add_parser("run", help="Start the Reflex task board")
    run_parser.add_argument("--port", type=int, default=3000, help="Frontend port (default: 3000)")
    run_parser.add_argument("--backend-port", type=int, default=8000, help="Reflex backend port (default: 8000)")
    run_parser.add_argument("--env", choices=["dev", "prod"], default="dev", help="Environment (default: dev)")

    args = parser.parse_args(argv)

    if args.command == "init-db":
        return cmd_init_db(args)
    elif args.command == "serve":
        return cmd_serve(args)
    elif args.command == "run":
        return cmd_run(args)
    else:
        parser.print_help()
        return 0


def _load(config_path: Optional[str]):
    from taskdesk.engine.config import load_config
    from taskdesk.engine.errors import TaskdeskConfigError
    from taskdesk.engine.logging import configure_logging

    try:
        config = load_config(config_path)
    except TaskdeskConfigError as e:
        print(f"[ERROR] {e.message}")
        return None
    configure_logging(config.logging.level)
    return config


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the tasks table in the configured database."""
    from sqlalchemy.exc import SQLAlchemyError

    from taskdesk.db.session import dispose, init_db

    config = _load(args.config)
    if config is None:
        return 1

    try:
        factory = init_db(config.database.url, create_tables=True, echo=config.database.echo)
    except SQLAlchemyError as e:
        print(f"[ERROR] Database initialisation failed: {e}")
        return 1

    dispose(factory)
    print(f"[OK] Tasks table ready ({config.database.url})")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the task API with uvicorn."""
    from taskdesk.api.server import run_server

    config = _load(args.config)
    if config is None:
        return 1

    updates = {}
    if args.host:
        updates["host"] = args.host
    if args.port:
        updates["port"] = args.port
    if updates:
        config = config.model_copy(update={"api": config.api.model_copy(update=updates)})

    print(f"Starting task API on http://{config.api.host}:{config.api.port}{config.api.prefix}")
    try:
        run_server(config)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Start the Reflex dev server."""
    import subprocess

    print("Starting TaskDesk board (Reflex)...")
    try:
        cmd = [
            "reflex", "run",
            "--frontend-port", str(args.port),
            "--backend-port", str(args.backend_port),
            "--env", args.env,
        ]
        result = subprocess.run(cmd, check=True)
        return result.returncode
    except FileNotFoundError:
        print("[ERROR] 'reflex' command not found. Install: pip install reflex")
        return 1
    except subprocess.CalledProcessError as e:
        print(f"[ERROR] reflex exited with status {e.returncode}")
        return e.returncode
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
