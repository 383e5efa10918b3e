"""Environment variable classification against deny / check / keep patterns.

A pattern is a variable name, optionally ending in ``*``. A trailing ``*``
makes it a prefix match on the name; otherwise the name must match exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

WILDCARD = "*"
SEPARATOR = "="

# Bash exports functions as NAME=() { ...; }
EXPORTED_FUNCTION_MARKER = "=()"

# Characters that make a locale-style value look like a path or format string
CHECK_CHARS = frozenset("/%")

EnvSource = Iterable[str | None] | Mapping[str, str]


def var_name(entry: str) -> str:
    """Return the part of ``entry`` before the first separator."""
    return entry.partition(SEPARATOR)[0]


def var_value(entry: str) -> str:
    """Return the part of ``entry`` after the first separator."""
    return entry.partition(SEPARATOR)[2]


def is_exported_function(entry: str) -> bool:
    """True if the value starts with a shell function definition."""
    sep = entry.find(SEPARATOR)
    return sep != -1 and entry.startswith(EXPORTED_FUNCTION_MARKER, sep)


def match(pattern: str, entry: str) -> bool:
    """Match a single pattern against the name of ``entry``."""
    name, sep, _ = entry.partition(SEPARATOR)
    if pattern.endswith(WILDCARD):
        return name.startswith(pattern[:-1])
    return bool(sep) and name == pattern


def iter_entries(source: EnvSource | None) -> Iterator[str]:
    """Yield ``NAME=VALUE`` entries from a vector, list or mapping.

    Iteration over a vector stops at the first ``None`` sentinel.
    A ``None`` source yields nothing.
    """
    if source is None:
        return
    if isinstance(source, Mapping):
        for name, value in source.items():
            yield f"{name}{SEPARATOR}{value}"
        return
    for entry in source:
        if entry is None:
            return
        yield entry


@dataclass(frozen=True)
class PatternList:
    """An immutable, ordered set of name patterns."""

    patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for pattern in self.patterns:
            if not pattern or pattern.startswith(SEPARATOR):
                raise ValueError(f"Invalid environment pattern: {pattern!r}")

    @classmethod
    def of(cls, *patterns: str) -> PatternList:
        return cls(tuple(patterns))

    def extended(self, *patterns: str) -> PatternList:
        """Return a new list with ``patterns`` appended."""
        return PatternList(self.patterns + tuple(patterns))

    def matches(self, entry: str) -> bool:
        return any(match(pattern, entry) for pattern in self.patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self.patterns


@dataclass(frozen=True)
class EnvTables:
    """The three pattern lists consulted during sanitization."""

    delete: PatternList = PatternList()
    check: PatternList = PatternList()
    keep: PatternList = PatternList()


def classify(entry: str, delete: PatternList, check: PatternList) -> bool:
    """Return True if ``entry`` may pass through a filtering rebuild."""
    if is_exported_function(entry):
        return False
    if delete.matches(entry):
        return False
    if check.matches(entry) and not CHECK_CHARS.isdisjoint(var_value(entry)):
        return False
    return True


def classify_keep(entry: str, keep: PatternList) -> bool:
    """Return True if ``entry`` is on the keep list for a reset rebuild."""
    return keep.matches(entry)
