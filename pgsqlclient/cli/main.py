"""
CLI main application module.

This module contains the command-line entry point: load settings, open a
connection, then either ping the server or run one query and print it.
"""

import logging
import sys
from typing import List, Optional

from ..constants import (
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_QUERY_ERROR,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED_ERROR,
)

from ..database import (
    Connection,
    connect,
)

from .parser import (
    create_argument_parser,
)

from .utils import (
    write_rows,
)

from ..utils import (
    setup_logging,
)

from ..config import ConfigError, ConfigLoader, ConnectionSettings

logger = logging.getLogger(__name__)


def _run(conn: Connection, settings: ConnectionSettings, command: Optional[str], ping: bool) -> None:
    if settings.client_encoding:
        error = conn.set_encoding(settings.client_encoding)
        if error is not None:
            logger.error(f"Could not set client encoding: {error.message.strip()}")
            sys.exit(EXIT_CONFIG_ERROR)

    if ping:
        error = conn.ping()
        if error is not None:
            logger.error(f"Server is not healthy ({error.kind.value}): {error.message}")
            sys.exit(EXIT_CONNECTION_ERROR)
        logger.info(f"Server at {settings.host}:{settings.port} is accepting connections")
        return

    result, error = conn.query(command)
    if error is not None:
        logger.error(f"Query failed: {error.message.strip()}")
        sys.exit(EXIT_QUERY_ERROR)

    with result:
        count = write_rows(result.column_names(), result, sys.stdout)
        logger.info(f"{result.command_status or result.status} ({count} rows)")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        settings = ConfigLoader.load(schema=ConnectionSettings, cli_args=args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)

    conn, error = connect(settings.to_options())
    if error is not None:
        logger.error(f"Failed to connect: {error.message.strip()}")
        sys.exit(EXIT_CONNECTION_ERROR)

    try:
        with conn:
            _run(conn, settings, args.command, args.ping)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)
