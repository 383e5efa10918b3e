"""EnvSettings — operator configuration for environment sanitization.

Settings can be built from a mapping (``EnvSettings.model_validate``) or read
from a TOML file with ``load_settings``. Extra patterns are appended to the
built-in tables rather than replacing them.
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .env_filter import EnvTables
from .models import ExecutionMode, InvokingUser
from .rebuild import EnvPolicy
from .tables import init_env_tables

SETTINGS_TABLE = "sudo_env"


class EnvSettings(BaseModel):
    """Policy knobs for building the elevated environment."""

    env_reset: bool = Field(
        default=True, description="Rebuild from the keep list instead of filtering"
    )
    secure_path: str | None = Field(
        default=None, description="PATH forced on every non-exempt user"
    )
    noexec_file: str | None = Field(
        default=None, description="Shared library preloaded in noexec mode"
    )
    exempt_group: str | None = Field(
        default=None, description="Members of this group keep their own PATH"
    )
    env_delete: list[str] = Field(
        default_factory=list, description="Extra patterns always removed"
    )
    env_check: list[str] = Field(
        default_factory=list, description="Extra patterns removed if the value has '/' or '%'"
    )
    env_keep: list[str] = Field(
        default_factory=list, description="Extra patterns preserved in reset mode"
    )
    kerberos4: bool = Field(default=False, description="Delete Kerberos 4 variables")
    kerberos5: bool = Field(default=False, description="Delete Kerberos 5 variables")
    securid: bool = Field(default=False, description="Delete SecurID variables")

    @field_validator("env_delete", "env_check", "env_keep")
    @classmethod
    def _no_empty_patterns(cls, value: list[str]) -> list[str]:
        for pattern in value:
            if not pattern or pattern.startswith("="):
                raise ValueError(f"Invalid environment pattern: {pattern!r}")
        return value

    @field_validator("secure_path", "noexec_file", "exempt_group")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        return value or None

    def to_tables(self, platform: str | None = None) -> EnvTables:
        base = init_env_tables(
            platform,
            kerberos4=self.kerberos4,
            kerberos5=self.kerberos5,
            securid=self.securid,
        )
        return EnvTables(
            delete=base.delete.extended(*self.env_delete),
            check=base.check.extended(*self.env_check),
            keep=base.keep.extended(*self.env_keep),
        )

    def to_policy(self, platform: str | None = None) -> EnvPolicy:
        kwargs: dict[str, Any] = {}
        if platform is not None:
            kwargs["platform"] = platform
        return EnvPolicy(
            tables=self.to_tables(platform),
            secure_path=self.secure_path,
            noexec_file=self.noexec_file,
            is_exempt=self._group_exemption() if self.exempt_group else None,
            **kwargs,
        )

    def mode(
        self, login_shell: bool = False, reset_home: bool = False, noexec: bool = False
    ) -> ExecutionMode:
        return ExecutionMode(
            reset_env=self.env_reset,
            login_shell=login_shell,
            reset_home=reset_home,
            noexec=noexec,
        )

    def _group_exemption(self) -> Callable[[InvokingUser], bool]:
        group = self.exempt_group

        def is_exempt(user: InvokingUser) -> bool:
            return group in user.groups

        return is_exempt


def load_settings(path: str | Path) -> EnvSettings:
    """Read settings from a TOML file.

    Keys may sit at the top level or under a ``[sudo_env]`` table.
    Raises FileNotFoundError, tomllib.TOMLDecodeError or pydantic's
    ValidationError.
    """
    data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    section = data.get(SETTINGS_TABLE, data)
    return EnvSettings.model_validate(section)
