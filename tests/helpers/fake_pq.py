#!/usr/bin/env python3
"""
Fake libpq objects for tests.

These stand in for psycopg.pq's PGconn and PGresult so the client can be
exercised without a server. Status values come from the real psycopg.pq
enums, so comparisons in the client behave exactly as they do against
libpq.
"""

from psycopg.pq import ConnStatus, ExecStatus, Ping


def _to_bytes(value):
    if value is None or isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")


class FakePGresult:
    """Result set with scripted columns, rows and status."""

    def __init__(
        self,
        status=ExecStatus.TUPLES_OK,
        columns=(),
        rows=(),
        error_message=b"",
        command_status=None,
    ):
        self.status = status
        self._columns = [_to_bytes(c) for c in columns]
        self._rows = [[_to_bytes(v) for v in row] for row in rows]
        self.error_message = error_message
        if command_status is None and status == ExecStatus.TUPLES_OK:
            command_status = f"SELECT {len(self._rows)}".encode()
        self.command_status = command_status
        self.clear_count = 0

    @property
    def nfields(self):
        return len(self._columns)

    @property
    def ntuples(self):
        return len(self._rows)

    def fname(self, column):
        if 0 <= column < len(self._columns):
            return self._columns[column]
        return None

    def get_value(self, row, column):
        return self._rows[row][column]

    def clear(self):
        self.clear_count += 1


class FakePGconn:
    """Link handle that answers exec_() from a queue of results."""

    def __init__(self, status=ConnStatus.OK, error_message=b"", client_encoding=b"UTF8"):
        self.status = status
        self.error_message = error_message
        self.parameters = {b"client_encoding": client_encoding}
        self.results = []
        self.commands = []
        self.finish_count = 0
        # When set, exec_() raises it the way psycopg does when PQexec returns NULL
        self.exec_error = None

    def parameter_status(self, name):
        return self.parameters.get(name)

    def exec_(self, command):
        self.commands.append(command)
        if self.exec_error is not None:
            raise self.exec_error
        if self.results:
            return self.results.pop(0)
        return FakePGresult(status=ExecStatus.COMMAND_OK, command_status=b"SET")

    def finish(self):
        self.finish_count += 1


class FakeDriver:
    """
    Replacement for the PGconn class itself.

    Patch it over ``pgsqlclient.database.connection.PGconn``; connect() and
    ping() record the descriptor they were given.
    """

    def __init__(self, conn=None, ping_status=Ping.OK):
        self.conn = conn if conn is not None else FakePGconn()
        self.ping_status = ping_status
        self.connect_calls = []
        self.ping_calls = []

    def connect(self, conninfo):
        self.connect_calls.append(conninfo)
        return self.conn

    def ping(self, conninfo):
        self.ping_calls.append(conninfo)
        return self.ping_status
