"""
Logging utilities for the pgsql client.

This module provides centralized logging configuration and the structured
query log line emitted for every submitted statement.
"""

import json
import logging
import time
from typing import Optional


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # psycopg logs connection internals at DEBUG
    logging.getLogger("psycopg").setLevel(logging.WARNING)


def log_query_event(
    status: str,
    rows: int,
    columns: int,
    duration: float,
    error: Optional[str] = None,
    timestamp: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log one machine-readable record per submitted query.

    The SQL text itself is not logged since it may carry literals the
    caller considers sensitive.

    Args:
        status: libpq completion status name (e.g. TUPLES_OK, FATAL_ERROR)
        rows: Number of rows in the result
        columns: Number of columns in the result
        duration: Round-trip time in seconds
        error: Server diagnostic when the query failed
        timestamp: Event timestamp (defaults to current time)
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if timestamp is None:
        timestamp = time.time()

    query_record = {
        "event_type": "query",
        "timestamp": timestamp,
        "status": status,
        "rows": rows,
        "columns": columns,
        "duration_seconds": round(duration, 3),
        "success": error is None,
    }

    if error is None:
        logger.info(f"QUERY: {json.dumps(query_record, ensure_ascii=False)}")
    else:
        query_record["error_message"] = error
        logger.warning(f"QUERY_FAILURE: {json.dumps(query_record, ensure_ascii=False)}")
