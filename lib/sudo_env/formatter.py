"""Strict construction of single ``NAME=VALUE`` entries.

The capacity of an entry is computed once up front; every write is checked
against it and a write that would not fit is fatal. Values such as a secure
search path must never be silently shortened.
"""

from __future__ import annotations

import io

from .env_filter import SEPARATOR
from .models import EnvOverflowError


class _FixedBuffer:
    """A text buffer that refuses to grow past its initial capacity.

    One slot of the capacity is reserved for the terminator, so at most
    ``capacity - 1`` characters can be stored.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._used = 0
        self._buf = io.StringIO()

    def write(self, text: str) -> None:
        if self._used + len(text) >= self._capacity:
            raise EnvOverflowError("internal error, format_env() overflow")
        self._buf.write(text)
        self._used += len(text)

    def getvalue(self) -> str:
        return self._buf.getvalue()


def format_env(name: str, *fragments: str) -> str:
    """Build ``name=`` followed by every fragment, concatenated as-is.

    Raises:
        ValueError: ``name`` is empty or contains the separator.
        TypeError: a fragment is not a string.
        EnvOverflowError: the computed capacity was exceeded.
    """
    if not name or SEPARATOR in name:
        raise ValueError(f"Invalid environment variable name: {name!r}")
    parts = tuple(fragments)
    capacity = len(name) + len(SEPARATOR) + 1
    for part in parts:
        if not isinstance(part, str):
            raise TypeError(
                f"format_env({name!r}): fragment must be str, not {type(part).__name__}"
            )
        capacity += len(part)

    buf = _FixedBuffer(capacity)
    buf.write(name)
    buf.write(SEPARATOR)
    for part in parts:
        buf.write(part)
    return buf.getvalue()
