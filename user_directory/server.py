"""Command-line entry point that hosts the user directory RPC service."""

import argparse
import logging
from typing import Optional, Sequence

import uvicorn

from user_directory.core.logging import configure_logging
from user_directory.core.settings import Settings, settings as default_settings
from user_directory.main import create_app


logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User directory RPC service")
    parser.add_argument("--host", default=settings.server_host, help="Bind address for the listener")
    parser.add_argument("--port", type=int, default=settings.server_port, help="Listener port")
    parser.add_argument(
        "--shutdown-timeout",
        type=int,
        default=settings.shutdown_timeout_seconds,
        help="Seconds in-flight calls may take to finish after a shutdown signal",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    return parser.parse_args(argv)


def build_server(args: argparse.Namespace, settings: Settings) -> uvicorn.Server:
    app = create_app(settings=settings)
    config = uvicorn.Config(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        timeout_graceful_shutdown=args.shutdown_timeout,
    )
    return uvicorn.Server(config)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = default_settings
    args = _parse_args(argv, settings)
    configure_logging(args.log_level)

    logger.info("Starting user directory on %s:%s", args.host, args.port)
    # uvicorn handles SIGINT/SIGTERM: it stops accepting, drains in-flight
    # calls up to the shutdown timeout, then runs the shutdown hooks
    server = build_server(args, settings)
    server.run()
    if not server.started:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
