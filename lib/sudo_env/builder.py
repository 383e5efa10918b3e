"""EnvironmentBuilder — growable, sentinel-terminated ``NAME=VALUE`` vector.

Slots are allocated in fixed increments. The slot after the last entry
always holds the ``None`` sentinel, so the buffer can be handed to an exec
collaborator as-is once ``finish()`` is called.
"""

from __future__ import annotations

from collections.abc import Iterator

from .env_filter import SEPARATOR, var_name

GROW_BY = 128


class EnvironmentBuilder:
    """Accumulates environment entries for a single rebuild."""

    def __init__(self) -> None:
        self._slots: list[str | None] = []
        self._len = 0
        self._finished = False

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def insert(self, entry: str, replace: bool = False) -> None:
        """Append ``entry``, or overwrite a same-named entry when ``replace``.

        A replaced entry keeps its original position.
        """
        if self._finished:
            raise RuntimeError("Environment already handed off")
        if SEPARATOR not in entry:
            raise ValueError(f"Environment entry has no separator: {var_name(entry)!r}")

        if replace:
            prefix = var_name(entry) + SEPARATOR
            for i in range(self._len):
                if self._slots[i].startswith(prefix):
                    self._slots[i] = entry
                    return

        # Room for the new entry plus the sentinel.
        if self._len + 2 > len(self._slots):
            self._slots.extend([None] * GROW_BY)
        self._slots[self._len] = entry
        self._len += 1
        self._slots[self._len] = None

    def get(self, name: str) -> str | None:
        """Return the value of the first entry named ``name``."""
        prefix = name + SEPARATOR
        for entry in self:
            if entry.startswith(prefix):
                return entry[len(prefix):]
        return None

    def finish(self) -> list[str | None]:
        """Hand off the sentinel-terminated vector. The builder is closed after."""
        self._finished = True
        envp = self._slots[: self._len]
        envp.append(None)
        self._slots = []
        self._len = 0
        return envp

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        for i in range(self._len):
            yield self._slots[i]

    def __len__(self) -> int:
        return self._len


def envp_to_dict(envp: list[str | None]) -> dict[str, str]:
    """Convert a finished vector into the mapping form ``os.execve`` takes."""
    env: dict[str, str] = {}
    for entry in envp:
        if entry is None:
            break
        name, _, value = entry.partition(SEPARATOR)
        env.setdefault(name, value)
    return env
