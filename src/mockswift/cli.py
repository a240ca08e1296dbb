"""CLI entry point for MockSwift."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from mockswift.config import MockSwiftConfig, load_config
from mockswift.logging_config import configure_logging
from mockswift.server import create_app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        prog="mockswift",
        description="MockSwift - in-memory OpenStack Swift API test server",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("mockswift.yaml"),
        help="Path to YAML configuration file (default: mockswift.yaml)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind to (overrides config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config, default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        choices=["text", "json"],
        help="Log format: 'text' (human-readable) or 'json' (structured)",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MockSwiftConfig:
    """Load the config file (defaults if it does not exist) and apply CLI overrides."""
    logger = logging.getLogger("mockswift")

    if args.config.exists():
        config = load_config(args.config)
    else:
        logger.info("Config file %s not found, using defaults", args.config)
        config = MockSwiftConfig()

    if args.host is not None:
        config.server.host = args.host
    if args.port is not None:
        config.server.port = args.port
    if args.log_level is not None:
        config.server.log_level = args.log_level
    if args.log_format is not None:
        config.server.log_format = args.log_format
    return config


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the MockSwift CLI.

    Args:
        argv: Argument list to parse. Defaults to sys.argv[1:].
    """
    args = parse_args(argv)

    # Basic stderr logger for config-loading errors
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    logger = logging.getLogger("mockswift")

    try:
        config = build_config(args)
    except Exception as exc:
        logger.error("Failed to load config: %s", exc)
        sys.exit(1)

    configure_logging(
        level=config.server.log_level,
        fmt=config.server.log_format,
    )

    logger.info(
        "Starting MockSwift on %s:%d (account=%s)",
        config.server.host,
        config.server.port,
        config.auth.account,
    )

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level.lower(),
        timeout_graceful_shutdown=config.server.shutdown_timeout,
    )


if __name__ == "__main__":
    main()
