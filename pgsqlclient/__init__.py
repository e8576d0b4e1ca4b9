#!/usr/bin/env python3
"""
pgsql-client Package

A small PostgreSQL client binding on top of libpq: build a connection
descriptor, open and health-check a connection, run one query per call,
and read the rows through a forward-only record iterator.

Every operation reports a value or an error through an Outcome instead of
raising, so callers check ``error`` the same way everywhere.
"""

__version__ = "1.0.0"
__author__ = "pgsql-client contributors"
__description__ = "Minimal PostgreSQL client binding with explicit handle lifecycle"
__license__ = "MIT"

# Import models for public API
from .models import (
    ConnectionOptions,
    Outcome,
    ErrorKind,
    PingStatus,
    ClientError,
    InvalidArgument,
    InvalidOption,
    DescriptorOverflow,
    ConnectionFailed,
    PingFailed,
    EncodingRejected,
    QueryFailed,
    HandleClosedError,
)

# Import database functions for public API
from .database import (
    build_descriptor,
    Connection,
    connect,
    QueryResult,
    RecordIterator,
)

# Import configuration for public API
from .config import (
    ConfigLoader,
    ConnectionSettings,
    ConfigError,
)

# Import utilities for public API
from .utils import (
    setup_logging,
)

# Public API exports
__all__ = [
    # Package metadata
    "__version__",
    "__author__",
    "__description__",
    # Data models
    "ConnectionOptions",
    "Outcome",
    "ErrorKind",
    "PingStatus",
    # Errors
    "ClientError",
    "InvalidArgument",
    "InvalidOption",
    "DescriptorOverflow",
    "ConnectionFailed",
    "PingFailed",
    "EncodingRejected",
    "QueryFailed",
    "HandleClosedError",
    # Database
    "build_descriptor",
    "Connection",
    "connect",
    "QueryResult",
    "RecordIterator",
    # Configuration
    "ConfigLoader",
    "ConnectionSettings",
    "ConfigError",
    # Utilities
    "setup_logging",
]
