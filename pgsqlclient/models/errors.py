#!/usr/bin/env python3
"""
Error Models

This module contains the error taxonomy shared by every client operation.
Recoverable errors are returned to the caller inside an Outcome; only
HandleClosedError is raised, because using a released handle is a
programming error rather than a runtime condition.
"""

from enum import Enum
from typing import Optional

from ..constants import (
    PING_REJECT_MESSAGE,
    PING_NO_RESPONSE_MESSAGE,
    PING_NO_ATTEMPT_MESSAGE,
)


class ErrorKind(str, Enum):
    """Discriminator carried by every ClientError."""

    INVALID_ARGUMENT = "invalid_argument"
    INVALID_OPTION = "invalid_option"
    DESCRIPTOR_OVERFLOW = "descriptor_overflow"
    CONNECTION_FAILED = "connection_failed"
    SERVER_REJECTING = "server_rejecting"
    UNREACHABLE = "unreachable"
    NOT_ATTEMPTED = "not_attempted"
    ENCODING_REJECTED = "encoding_rejected"
    QUERY_FAILED = "query_failed"
    HANDLE_CLOSED = "handle_closed"


class PingStatus(str, Enum):
    """The four mutually exclusive outcomes of a reachability probe."""

    HEALTHY = "healthy"
    SERVER_REJECTING = "server_rejecting"
    UNREACHABLE = "unreachable"
    NOT_ATTEMPTED = "not_attempted"


class ClientError(Exception):
    """
    Base class for all client errors.

    Attributes:
        kind: ErrorKind discriminator
        message: Human-readable description, never empty
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str):
        self.message = message or self.kind.value.replace("_", " ")
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidArgument(ClientError):
    """The caller passed a value of the wrong shape or type."""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidOption(ClientError):
    """A connection option is missing, wrongly typed or unencodable."""

    kind = ErrorKind.INVALID_OPTION

    def __init__(self, field: str, expected: str, actual: str, message: Optional[str] = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            message
            or f"argument#1::`{field}' is expected to be a {expected}, but a {actual} is provided."
        )


class DescriptorOverflow(ClientError):
    """The encoded connection descriptor does not fit its fixed capacity."""

    kind = ErrorKind.DESCRIPTOR_OVERFLOW

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"connection descriptor needs {size} bytes but only {capacity} are reserved"
        )


class ConnectionFailed(ClientError):
    """libpq could not open the link; message is libpq's diagnostic text."""

    kind = ErrorKind.CONNECTION_FAILED


class PingFailed(ClientError):
    """A reachability probe reported anything other than healthy."""

    _MESSAGES = {
        PingStatus.SERVER_REJECTING: (ErrorKind.SERVER_REJECTING, PING_REJECT_MESSAGE),
        PingStatus.UNREACHABLE: (ErrorKind.UNREACHABLE, PING_NO_RESPONSE_MESSAGE),
        PingStatus.NOT_ATTEMPTED: (ErrorKind.NOT_ATTEMPTED, PING_NO_ATTEMPT_MESSAGE),
    }

    def __init__(self, status: PingStatus):
        if status not in self._MESSAGES:
            raise ValueError(f"{status} is not a failed ping status")
        self.status = status
        self.kind, message = self._MESSAGES[status]
        super().__init__(message)


class EncodingRejected(ClientError):
    """The client encoding could not be applied."""

    kind = ErrorKind.ENCODING_REJECTED


class QueryFailed(ClientError):
    """Query execution failed; message is the server's diagnostic text."""

    kind = ErrorKind.QUERY_FAILED

    def __init__(self, message: str, status: Optional[str] = None):
        self.status = status
        super().__init__(message)


class HandleClosedError(ClientError):
    """A connection or result was used after it had been released."""

    kind = ErrorKind.HANDLE_CLOSED
