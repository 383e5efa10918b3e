"""LoggingWrapper — composable logging for environment sanitizers.

Wraps any EnvSanitizer, logging operations as they pass through. Only
variable names and counts are logged, never values.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from ..env_filter import EnvSource, var_name
from ..models import CleanResult, ExecutionMode, InvokingUser, RunAsUser
from ..protocol import EnvSanitizer


class LoggingWrapper:
    """Logs clean and rebuild calls passing through a sanitizer."""

    def __init__(self, inner: EnvSanitizer, logger_name: str = "sudo_env") -> None:
        self._inner = inner
        self._logger = logging.getLogger(logger_name)

    def clean(self, source: EnvSource | None) -> CleanResult:
        result = self._inner.clean(source)
        self._logger.info(
            "sudo_env: clean kept %d, pruned %d", len(result.env), len(result.pruned)
        )
        if result.pruned:
            self._logger.debug(
                "sudo_env: pruned %s", ", ".join(var_name(e) for e in result.pruned)
            )
        return result

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
        self._logger.info(
            "sudo_env: rebuild for %r as %s (%s)",
            command,
            runas.name or runas.uid,
            "reset" if mode.reset_env else "filter",
        )
        t0 = time.monotonic()
        try:
            envp = self._inner.rebuild(
                env_b, mode=mode, runas=runas, user=user, command=command, args=args
            )
        except Exception as exc:
            self._logger.error("sudo_env: rebuild for %r failed: %s", command, exc)
            raise
        duration_ms = int((time.monotonic() - t0) * 1000)
        self._logger.info(
            "sudo_env: rebuild for %r → %d variable(s) in %dms",
            command,
            len(envp) - 1,
            duration_ms,
        )
        return envp
