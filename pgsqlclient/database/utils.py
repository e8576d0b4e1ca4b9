"""
Database utilities module.

This module provides the value checks shared by the descriptor builder and
the connection handle: type naming for error messages, scalar coercion for
connection options, and libpq diagnostic decoding.
"""

import numbers
from typing import Any, Optional


def type_name(value: Any) -> str:
    """
    Describe the kind of a value for an error message.

    Args:
        value: Any Python object

    Returns:
        "None" for None, otherwise the class name (e.g. "int", "list")
    """
    if value is None:
        return "None"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def coerce_string(value: Any) -> Optional[str]:
    """
    Convert a string-typed option value to text.

    Strings are returned unchanged and real numbers are rendered with str(),
    so ``connect_timeout=10`` is accepted. Anything else yields None.
    """
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    return None


def coerce_port(value: Any) -> Optional[str]:
    """
    Convert a port value to its decimal text.

    Accepts a non-bool integer or a string of ASCII decimal digits. Returns None
    for anything else.
    """
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return str(int(value))
    if isinstance(value, str):
        text = value.strip()
        # str.isdigit() also accepts fullwidth and superscript digits
        if text.isascii() and text.isdigit():
            return text
    return None


def decode_diagnostic(raw: Optional[bytes]) -> str:
    """
    Decode a libpq diagnostic string without losing any of it.

    libpq messages follow the client encoding, which may not be UTF-8 yet
    when a connection fails, so undecodable bytes are escaped rather than
    dropped.
    """
    if not raw:
        return ""
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="backslashreplace")
