"""
Database connection management module.

This module handles opening a libpq link from connection options, probing
server reachability, applying the client encoding, and submitting queries.
Each Connection owns exactly one native link and releases it exactly once.
"""

import logging
import time
import weakref
from typing import Any, Optional

from psycopg import OperationalError, pq
from psycopg.pq import ConnStatus, ExecStatus, Ping

from ..constants import DEFAULT_CLIENT_ENCODING
from ..models import (
    ClientError,
    ConnectionFailed,
    EncodingRejected,
    HandleClosedError,
    InvalidArgument,
    Outcome,
    PingFailed,
    PingStatus,
    QueryFailed,
)
from ..utils.logging import log_query_event
from .descriptor import build_descriptor, describe_descriptor
from .encodings import resolve
from .result import QueryResult
from .utils import decode_diagnostic, type_name

PGconn = pq.PGconn

logger = logging.getLogger(__name__)

_PING_STATUS = {
    Ping.OK: PingStatus.HEALTHY,
    Ping.REJECT: PingStatus.SERVER_REJECTING,
    Ping.NO_RESPONSE: PingStatus.UNREACHABLE,
    Ping.NO_ATTEMPT: PingStatus.NOT_ATTEMPTED,
}

_SUCCESS_STATUSES = (ExecStatus.COMMAND_OK, ExecStatus.TUPLES_OK)


def _release_link(pgconn: Any) -> None:
    pgconn.finish()
    logger.debug("Closed database connection")


def _status_name(status: int) -> str:
    try:
        return ExecStatus(status).name
    except ValueError:
        return f"UNKNOWN({status})"


class Connection:
    """
    One live link to a PostgreSQL server.

    Created by Connection.open() (or connect()). Every operation other than
    close() raises HandleClosedError once the connection has been closed.
    """

    def __init__(self, pgconn: Any, descriptor: str):
        """
        Take ownership of an open native link.

        Args:
            pgconn: psycopg.pq PGconn in the OK state
            descriptor: The descriptor the link was opened with; ping()
                re-dials with it
        """
        self._pgconn = pgconn
        self.descriptor = descriptor
        self._finalizer = weakref.finalize(self, _release_link, pgconn)
        self._encoding = DEFAULT_CLIENT_ENCODING
        self._codec = "utf-8"
        self._sync_encoding()

    @classmethod
    def open(cls, options: Any) -> Outcome:
        """
        Build the descriptor and open a link with it.

        Args:
            options: ConnectionOptions or a mapping with the same keys

        Returns:
            Outcome with the open Connection, or with InvalidArgument,
            InvalidOption, DescriptorOverflow or ConnectionFailed
        """
        built = build_descriptor(options)
        if not built.ok:
            return built
        descriptor = built.value

        logger.debug(f"Opening database connection: {describe_descriptor(descriptor)}")
        pgconn = PGconn.connect(descriptor.encode("utf-8"))
        if pgconn.status != ConnStatus.OK:
            message = decode_diagnostic(pgconn.error_message)
            pgconn.finish()
            logger.error(f"Failed to open database connection: {message.strip()}")
            return Outcome.failure(ConnectionFailed(message))

        logger.info("Database connection opened successfully")
        return Outcome.success(cls(pgconn, descriptor))

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Connection {state} {describe_descriptor(self.descriptor)}>"

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._pgconn is None

    def close(self) -> None:
        """Close the native link. Safe to call any number of times."""
        self._finalizer()
        self._pgconn = None

    def _handle(self) -> Any:
        if self._pgconn is None:
            raise HandleClosedError("connection has been closed")
        return self._pgconn

    @property
    def encoding(self) -> str:
        """Current client encoding, in PostgreSQL spelling."""
        self._handle()
        return self._encoding

    def _sync_encoding(self) -> None:
        reported = self._pgconn.parameter_status(b"client_encoding")
        if not reported:
            return
        name = reported.decode("ascii", errors="replace")
        resolved = resolve(name)
        if resolved is None:
            logger.warning(f"Server client encoding {name} has no Python codec; decoding as UTF-8")
            self._encoding, self._codec = name, "utf-8"
        else:
            self._encoding, self._codec = resolved

    def check_health(self) -> PingStatus:
        """Probe the server with the stored descriptor and classify the answer."""
        self._handle()
        status = PGconn.ping(self.descriptor.encode("utf-8"))
        return _PING_STATUS.get(status, PingStatus.NOT_ATTEMPTED)

    def ping(self) -> Optional[ClientError]:
        """
        Check that the server still accepts connections.

        The probe dials a fresh connection from the descriptor instead of
        using the live link.

        Returns:
            None when healthy, otherwise a PingFailed whose kind is
            SERVER_REJECTING, UNREACHABLE or NOT_ATTEMPTED
        """
        status = self.check_health()
        if status is PingStatus.HEALTHY:
            return None
        logger.warning(f"Database ping reported {status.value}")
        return PingFailed(status)

    def set_encoding(self, name: Any) -> Optional[ClientError]:
        """
        Apply a client-side text encoding.

        Args:
            name: Encoding name in any spelling PostgreSQL accepts

        Returns:
            None on success, InvalidArgument for a non-string name, or
            EncodingRejected when the name has no Python codec, the link
            cannot carry the command, or the server refuses it
        """
        pgconn = self._handle()
        if not isinstance(name, str):
            return InvalidArgument(
                f"argument #1 is expected to be a str, but a {type_name(name)} is provided."
            )

        resolved = resolve(name)
        if resolved is None:
            return EncodingRejected(
                f"invalid client encoding name: \"{name}\" has no Python codec"
            )
        pg_name, codec = resolved

        try:
            pgresult = pgconn.exec_(f"SET client_encoding TO '{pg_name}'".encode("ascii"))
        except OperationalError as e:
            logger.error(f"Client encoding {pg_name} could not be sent: {e}")
            return EncodingRejected(str(e))
        try:
            if pgresult.status != ExecStatus.COMMAND_OK:
                message = decode_diagnostic(pgresult.error_message) or decode_diagnostic(
                    pgconn.error_message
                )
                logger.error(f"Client encoding {pg_name} rejected: {message.strip()}")
                return EncodingRejected(message)
        finally:
            pgresult.clear()

        self._encoding, self._codec = pg_name, codec
        logger.debug(f"Client encoding set to {pg_name}")
        return None

    def query(self, sql: Any) -> Outcome:
        """
        Submit one SQL string and wait for the server's answer.

        Args:
            sql: Non-empty SQL text

        Returns:
            Outcome with a QueryResult, or with InvalidArgument (nothing was
            sent) or QueryFailed (the server reported an error, or libpq
            could not execute the command on this link)
        """
        pgconn = self._handle()
        if not isinstance(sql, str):
            return Outcome.failure(
                InvalidArgument(
                    f"argument #1 expects a sql string, but a {type_name(sql)} is provided."
                )
            )
        if not sql:
            return Outcome.failure(InvalidArgument("invalid SQL statement."))
        if "\x00" in sql:
            return Outcome.failure(InvalidArgument("SQL text must not contain a NUL character."))

        try:
            command = sql.encode(self._codec)
        except UnicodeEncodeError as e:
            return Outcome.failure(
                InvalidArgument(f"SQL text cannot be encoded as {self._encoding}: {e}")
            )

        start_time = time.time()
        try:
            pgresult = pgconn.exec_(command)
        except OperationalError as e:
            # libpq returned no result at all, e.g. the link is no longer usable
            log_query_event(
                status=_status_name(ExecStatus.FATAL_ERROR),
                rows=0,
                columns=0,
                duration=time.time() - start_time,
                error=str(e),
                logger=logger,
            )
            return Outcome.failure(QueryFailed(str(e)))
        duration = time.time() - start_time
        status = pgresult.status
        result = QueryResult(pgresult, codec=self._codec, status=_status_name(status))

        if status in _SUCCESS_STATUSES:
            log_query_event(
                status=result.status,
                rows=result.row_count(),
                columns=pgresult.nfields,
                duration=duration,
                logger=logger,
            )
            return Outcome.success(result)

        message = decode_diagnostic(pgresult.error_message) or (
            f"query finished with unexpected status {result.status}"
        )
        result.close()
        log_query_event(
            status=_status_name(status),
            rows=0,
            columns=0,
            duration=duration,
            error=message.strip(),
            logger=logger,
        )
        return Outcome.failure(QueryFailed(message, _status_name(status)))


def connect(options: Any) -> Outcome:
    """Open a connection; shorthand for Connection.open()."""
    return Connection.open(options)
