"""
Connection descriptor module.

This module validates connection options and encodes them into the libpq
conninfo string that both the connection and the reachability probe use.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List

from ..constants import DESCRIPTOR_CAPACITY, DESCRIPTOR_FIELDS, REQUIRED_OPTIONS
from ..models import (
    ConnectionOptions,
    DescriptorOverflow,
    InvalidArgument,
    InvalidOption,
    Outcome,
)
from .utils import coerce_port, coerce_string, type_name

logger = logging.getLogger(__name__)

# Short spelling accepted for the database option
OPTION_ALIASES = {"db": "database"}

_PASSWORD_TOKEN = re.compile(r"password='(?:[^'\\]|\\.)*'")


def escape_value(value: str) -> str:
    """
    Escape a value for use inside a single-quoted conninfo token.

    libpq reads a backslash inside quotes as an escape for the next
    character, so backslashes and quotes are both prefixed with one.
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _normalize(options: Any) -> Dict[str, Any]:
    if isinstance(options, ConnectionOptions):
        return options.to_mapping()
    normalized = dict(options)
    for alias, name in OPTION_ALIASES.items():
        if alias in normalized and normalized.get(name) is None:
            normalized[name] = normalized.pop(alias)
    return normalized


def _validate(options: Dict[str, Any]) -> Outcome:
    """Check every field before any encoding; return the text values."""
    values: Dict[str, str] = {}
    for name, _keyword, kind in DESCRIPTOR_FIELDS:
        raw = options.get(name)
        if raw is None:
            if name in REQUIRED_OPTIONS:
                return Outcome.failure(InvalidOption(name, kind, type_name(raw)))
            continue

        text = coerce_port(raw) if kind == "number" else coerce_string(raw)
        if text is None:
            return Outcome.failure(InvalidOption(name, kind, type_name(raw)))
        if "\x00" in text:
            return Outcome.failure(
                InvalidOption(
                    name,
                    kind,
                    type_name(raw),
                    message=f"argument#1::`{name}' must not contain a NUL character.",
                )
            )
        values[name] = text
    return Outcome.success(values)


def build_descriptor(options: Any) -> Outcome:
    """
    Validate connection options and encode them as a libpq descriptor.

    Tokens are written as ``key='value'`` in the order host, port, user,
    password, dbname, connect_timeout, separated by single spaces, and only
    for options that are present.

    Args:
        options: ConnectionOptions or a mapping with the same keys

    Returns:
        Outcome whose value is the descriptor text, or whose error is an
        InvalidArgument, InvalidOption or DescriptorOverflow
    """
    if not isinstance(options, (ConnectionOptions, Mapping)):
        return Outcome.failure(
            InvalidArgument(
                f"argument #1 is expected to be a mapping, but a {type_name(options)} is provided."
            )
        )

    checked = _validate(_normalize(options))
    if not checked.ok:
        logger.debug(f"Rejected connection options: {checked.error.message}")
        return checked

    tokens: List[str] = []
    for name, keyword, _kind in DESCRIPTOR_FIELDS:
        if name in checked.value:
            tokens.append(f"{keyword}='{escape_value(checked.value[name])}'")
    descriptor = " ".join(tokens)

    # One byte of the capacity is kept for the terminating NUL
    size = len(descriptor.encode("utf-8")) + 1
    if size > DESCRIPTOR_CAPACITY:
        logger.error(f"Connection descriptor overflow ({size} > {DESCRIPTOR_CAPACITY} bytes)")
        return Outcome.failure(DescriptorOverflow(size, DESCRIPTOR_CAPACITY))

    return Outcome.success(descriptor)


def describe_descriptor(descriptor: str) -> str:
    """Return the descriptor with the password token masked, for logging."""
    return _PASSWORD_TOKEN.sub("password='***'", descriptor)
