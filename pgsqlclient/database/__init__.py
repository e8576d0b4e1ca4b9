#!/usr/bin/env python3
"""
Database package for the pgsql client.

This package provides the connection descriptor builder, the connection
handle, and the query result with its record iterator.
"""

from .descriptor import (
    build_descriptor,
    describe_descriptor,
    escape_value,
)

from .connection import (
    Connection,
    connect,
)

from .result import (
    QueryResult,
    RecordIterator,
)

from .encodings import (
    resolve as resolve_encoding,
)

__all__ = [
    # Descriptor
    "build_descriptor",
    "describe_descriptor",
    "escape_value",
    # Connection management
    "Connection",
    "connect",
    # Results
    "QueryResult",
    "RecordIterator",
    # Encodings
    "resolve_encoding",
]
