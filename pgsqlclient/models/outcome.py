#!/usr/bin/env python3
"""
Outcome Model

Every client operation reports a value or an error, never both.
Outcome is a NamedTuple so callers can either unpack it positionally
(``conn, err = connect(...)``) or inspect it by name.
"""

from typing import Any, NamedTuple, Optional

from .errors import ClientError


class Outcome(NamedTuple):
    """
    Result of a client operation.

    Attributes:
        value: The produced object on success, None on failure
        error: The ClientError on failure, None on success
    """

    value: Any = None
    error: Optional[ClientError] = None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: ClientError) -> "Outcome":
        return cls(value=None, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
