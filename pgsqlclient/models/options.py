#!/usr/bin/env python3
"""
Connection Option Models

This module contains the caller-facing structure for connection
parameters.
"""

from typing import Any, Dict, NamedTuple, Optional, Union


class ConnectionOptions(NamedTuple):
    """
    Parameters for opening a connection.

    Absent optional fields are left out of the descriptor; no defaults are
    synthesized for them.

    Attributes:
        host: Server host name or socket directory
        port: Server port
        user: Role to connect as
        password: Password for the role
        database: Database name (written as libpq's ``dbname``)
        connect_timeout: Seconds libpq waits while connecting
    """

    host: str
    port: int
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    connect_timeout: Optional[Union[str, int]] = None

    def to_mapping(self) -> Dict[str, Any]:
        """Return the present fields as a plain dict."""
        return {key: value for key, value in self._asdict().items() if value is not None}
