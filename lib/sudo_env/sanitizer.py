"""Sanitizer — clean and rebuild bound to one set of operator settings."""

from __future__ import annotations

from collections.abc import Sequence

from .clean import clean_env
from .env_filter import EnvSource
from .models import CleanResult, ExecutionMode, InvokingUser, RunAsUser
from .rebuild import EnvPolicy, rebuild_env
from .settings import EnvSettings


class Sanitizer:
    """Runs the preprocessor once, then rebuilds from its survivors."""

    def __init__(self, settings: EnvSettings, platform: str | None = None) -> None:
        self._settings = settings
        self._policy = settings.to_policy(platform)
        self._cleaned: CleanResult | None = None

    @property
    def settings(self) -> EnvSettings:
        return self._settings

    @property
    def policy(self) -> EnvPolicy:
        return self._policy

    @property
    def cleaned(self) -> CleanResult | None:
        return self._cleaned

    def clean(self, source: EnvSource | None) -> CleanResult:
        self._cleaned = clean_env(source, self._policy.tables)
        return self._cleaned

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
        """Rebuild from the cleaned environment. Raises RuntimeError before clean()."""
        if self._cleaned is None:
            raise RuntimeError("clean() must run before rebuild()")
        return rebuild_env(
            self._cleaned.env,
            env_b,
            mode=mode,
            runas=runas,
            user=user,
            policy=self._policy,
            command=command,
            args=args,
        )
