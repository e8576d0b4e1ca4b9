#!/usr/bin/env python3
"""
Data Models Module

This module contains all data structures and type definitions used
throughout the pgsql client.
"""

from .options import ConnectionOptions
from .outcome import Outcome
from .errors import (
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

__all__ = [
    "ConnectionOptions",
    "Outcome",
    "ErrorKind",
    "PingStatus",
    "ClientError",
    "InvalidArgument",
    "InvalidOption",
    "DescriptorOverflow",
    "ConnectionFailed",
    "PingFailed",
    "EncodingRejected",
    "QueryFailed",
    "HandleClosedError",
]
