"""
Command line entry point.

    toy-robot serve    run the HTTP API
    toy-robot console  drive a running API from the terminal
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
import uvicorn

from .api.app import create_app
from .client.console import RobotConsole
from .client.http_client import RobotClient
from .config.defaults import AppConfig
from .config.loader import ConfigLoader
from .engine import RobotCommandService
from .errors import ConfigurationError
from .logging.config import configure_logging
from .persistence.robot_store import RobotStore

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toy-robot", description="Toy robot simulation service")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory containing robot.yaml")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--json-logs", action="store_true", default=None,
                        help="Emit logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--db", dest="db_path", default=None, help="SQLite database file")

    console = subparsers.add_parser("console", help="Interactive console for a running API")
    console.add_argument("--url", dest="base_url", default=None,
                         help="Base URL of the robot API, e.g. http://localhost:3000/api/robot")

    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate CLI flags into a nested override dictionary."""
    overrides: dict[str, dict[str, Any]] = {}

    def put(section: str, key: str, value: Any) -> None:
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    put("logging", "level", args.log_level)
    put("logging", "format_json", args.json_logs)
    put("server", "host", getattr(args, "host", None))
    put("server", "port", getattr(args, "port", None))
    put("store", "db_path", getattr(args, "db_path", None))
    put("client", "base_url", getattr(args, "base_url", None))

    return overrides


def build_service(config: AppConfig) -> RobotCommandService:
    """Wire the single store and command service instance."""
    store = RobotStore(config.store.db_path, history_limit=config.store.history_limit)
    return RobotCommandService(store, history_limit=config.store.history_limit)


def serve(config: AppConfig) -> None:
    service = build_service(config)
    app = create_app(service, cors_origins=config.server.cors_origins)

    logger.info(
        "Robot API server starting",
        host=config.server.host,
        port=config.server.port,
        db_path=config.store.db_path
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


def console(config: AppConfig) -> None:
    client = RobotClient(config.client.base_url, timeout_seconds=config.client.timeout_seconds)
    RobotConsole(client).run()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config_dir).load(collect_overrides(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    if args.command == "serve":
        serve(config)
    else:
        console(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
