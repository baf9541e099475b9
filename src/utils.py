"""Shared utilities for call graph generation."""

from __future__ import annotations

import re

from errors import MalformedInputError

_TIMESTAMP_RE = re.compile(r"-?[0-9]+")


def parse_timestamp(value: object) -> int:
    """Coerce a release timestamp to an integer.

    Args:
        value: Integer or decimal string (batch lines carry ``"date"`` as either)

    Returns:
        The timestamp as an int

    Examples:
        >>> parse_timestamp("1574072773")
        1574072773
        >>> parse_timestamp(0)
        0
    """
    if isinstance(value, bool):
        msg = f"Invalid timestamp: {value!r}"
        raise MalformedInputError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _TIMESTAMP_RE.fullmatch(text):
            return int(text)
    msg = f"Invalid timestamp: {value!r}"
    raise MalformedInputError(msg)
