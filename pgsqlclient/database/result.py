"""
Query result module.

This module wraps one libpq result set. QueryResult owns the native
handle and releases it exactly once; RecordIterator is a forward-only
cursor over the rows that never owns the result it reads from.
"""

import logging
import weakref
from typing import Any, List, Optional, Tuple, Union

from ..models import HandleClosedError

logger = logging.getLogger(__name__)

Cell = Union[str, bytes, None]
Record = Tuple[Cell, ...]


def _release_result(pgresult: Any) -> None:
    pgresult.clear()
    logger.debug("Released query result handle")


class QueryResult:
    """
    One materialized query result.

    Stays usable after the connection that produced it is closed. Release
    it with close(), a ``with`` block, or let the garbage collector do it.
    """

    def __init__(self, pgresult: Any, codec: str = "utf-8", status: Optional[str] = None):
        """
        Take ownership of a native result handle.

        Args:
            pgresult: psycopg.pq PGresult, or None for a result with no handle
            codec: Python codec of the connection's client encoding
            status: libpq status name, e.g. "TUPLES_OK"
        """
        self._pgresult = pgresult
        self.codec = codec
        self.status = status
        if pgresult is not None:
            self._finalizer = weakref.finalize(self, _release_result, pgresult)
        else:
            self._finalizer = None

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.status}"
        return f"<QueryResult {state}>"

    def __enter__(self) -> "QueryResult":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self):
        # Generator frame keeps this result alive for the whole loop
        cursor = self.iterator()
        while True:
            row, has_more = cursor.next()
            if not has_more:
                return
            yield row

    @property
    def closed(self) -> bool:
        return self._pgresult is None

    def close(self) -> None:
        """Release the native result. Safe to call any number of times."""
        if self._finalizer is not None:
            self._finalizer()
        self._pgresult = None

    def _handle(self) -> Any:
        if self._pgresult is None:
            raise HandleClosedError("query result has been released")
        return self._pgresult

    def _decode(self, raw: bytes) -> str:
        return raw.decode(self.codec, errors="surrogateescape")

    def column_names(self) -> List[str]:
        """Return the column names in server-reported order."""
        pgresult = self._handle()
        return [self._decode(pgresult.fname(i) or b"") for i in range(pgresult.nfields)]

    def row_count(self) -> int:
        """Return the number of rows; 0 for command-only results."""
        return self._handle().ntuples

    @property
    def command_status(self) -> str:
        """Command tag reported by the server, e.g. "INSERT 0 1"."""
        tag = self._handle().command_status
        return self._decode(tag) if tag else ""

    def iterator(self, raw: bool = False) -> "RecordIterator":
        """
        Create a fresh cursor positioned at the first row.

        Args:
            raw: Yield undecoded bytes cells instead of text

        Returns:
            RecordIterator bound to this result
        """
        self._handle()
        return RecordIterator(self, raw=raw)

    def _fetch(self, position: int, raw: bool) -> Optional[Record]:
        """Return the row at position, or None past the last row."""
        pgresult = self._handle()
        if position >= pgresult.ntuples:
            return None

        cells: List[Cell] = []
        for column in range(pgresult.nfields):
            # get_value sizes the copy by libpq's reported length, not by NUL
            value = pgresult.get_value(position, column)
            if value is None or raw:
                cells.append(value)
            else:
                cells.append(self._decode(value))
        return tuple(cells)


class RecordIterator:
    """
    Forward-only cursor over a QueryResult.

    Holds only a weak reference to the result: the caller keeps the result
    alive for as long as the cursor is used. Each cursor has its own
    position; build a new one to scan the rows again.
    """

    def __init__(self, result: QueryResult, raw: bool = False):
        self._result = weakref.ref(result)
        self._raw = raw
        self.position = 0
        self._exhausted = False

    def __iter__(self) -> "RecordIterator":
        return self

    def __next__(self) -> Record:
        row, has_more = self.next()
        if not has_more:
            raise StopIteration
        return row

    def next(self) -> Tuple[Optional[Record], bool]:
        """
        Advance by one row.

        Returns:
            (row, True) while rows remain, then (None, False) on this and
            every later call

        SQL NULL cells are None rather than the empty string libpq's
        PQgetvalue reports, so NULL and '' stay distinguishable.
        """
        if self._exhausted:
            return None, False

        result = self._result()
        if result is None:
            raise HandleClosedError("query result has been released")

        row = result._fetch(self.position, self._raw)
        if row is None:
            self._exhausted = True
            return None, False

        self.position += 1
        return row, True
