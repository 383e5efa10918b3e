"""EnvSanitizer protocol — the interface an exec front end calls into.

``Sanitizer`` implements it; wrappers such as ``LoggingWrapper`` compose
over any implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .env_filter import EnvSource
from .models import CleanResult, ExecutionMode, InvokingUser, RunAsUser


@runtime_checkable
class EnvSanitizer(Protocol):
    """Prunes the inherited environment and rebuilds one for exec."""

    def clean(self, source: EnvSource | None) -> CleanResult:
        """Prune the tool's own environment and capture side-channel values."""
        ...

    def rebuild(
        self,
        env_b: EnvSource | None,
        *,
        mode: ExecutionMode,
        runas: RunAsUser,
        user: InvokingUser,
        command: str,
        args: str | Sequence[str] | None = None,
    ) -> list[str | None]:
        """Build the command's environment from the cleaned one plus ``env_b``."""
        ...
