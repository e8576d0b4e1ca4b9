#!/usr/bin/env python3
"""
Application Constants

This module contains the descriptor sizing, ping diagnostics and exit
codes used throughout the pgsql client.
"""

# Exit codes for different failure modes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 3
EXIT_CONNECTION_ERROR = 4
EXIT_QUERY_ERROR = 5
EXIT_INTERRUPTED = 130  # Conventional exit code for Ctrl+C
EXIT_UNEXPECTED_ERROR = 10

# Descriptor sizing. A link handle and its descriptor share one page-sized
# slot, so the descriptor gets what is left after a 64-bit handle.
DESCRIPTOR_BUFFER_SIZE = 1024
HANDLE_SIZE = 8
DESCRIPTOR_CAPACITY = DESCRIPTOR_BUFFER_SIZE - HANDLE_SIZE  # includes the NUL

# (option name, libpq keyword, kind) in encoding order
DESCRIPTOR_FIELDS = (
    ("host", "host", "string"),
    ("port", "port", "number"),
    ("user", "user", "string"),
    ("password", "password", "string"),
    ("database", "dbname", "string"),
    ("connect_timeout", "connect_timeout", "string"),
)
REQUIRED_OPTIONS = ("host", "port")

DEFAULT_CLIENT_ENCODING = "UTF8"

# Diagnostics for the three unhealthy ping outcomes (libpq documentation text)
PING_REJECT_MESSAGE = (
    "The server is running but is in a state that disallows connections "
    "(startup, shutdown, or crash recovery)."
)
PING_NO_RESPONSE_MESSAGE = (
    "The server could not be contacted. This might indicate that the server "
    "is not running, or that there is something wrong with the given "
    "connection parameters (for example, wrong port number), or that there "
    "is a network connectivity problem (for example, a firewall blocking "
    "the connection request)."
)
PING_NO_ATTEMPT_MESSAGE = (
    "No attempt was made to contact the server, because the supplied "
    "parameters were obviously incorrect or there was some client-side "
    "problem (for example, out of memory)."
)
