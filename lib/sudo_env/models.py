"""Record types shared across the sanitization engine.

These models define the inputs and outputs of an environment rebuild:
- RunAsUser / InvokingUser: the two identities involved in an elevation
- ExecutionMode: per-invocation flags (reset, login shell, -H, noexec)
- CleanResult: what the preprocessor kept, pruned and captured

Plus the fatal error types raised when a rebuild cannot complete.
"""

from pydantic import BaseModel, ConfigDict, Field


class EnvRebuildError(RuntimeError):
    """A rebuild could not complete; no environment may be handed to exec."""


class EnvOverflowError(EnvRebuildError):
    """A formatted entry would have exceeded its computed capacity."""


class RunAsUser(BaseModel):
    """The identity the command will actually execute as."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Login name of the target user")
    home: str | None = Field(default=None, description="Home directory of the target user")
    shell: str | None = Field(default=None, description="Login shell of the target user")
    uid: int = Field(..., description="Numeric user id")
    gid: int = Field(..., description="Numeric primary group id")


class InvokingUser(BaseModel):
    """The user who ran the tool, as resolved before any privilege change."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Login name of the invoking user")
    uid: int = Field(..., description="Real user id")
    gid: int = Field(..., description="Real primary group id")
    home: str = Field(..., description="Home directory from the password database")
    shell: str = Field(..., description="Login shell from the password database")
    groups: tuple[str, ...] = Field(
        default=(), description="Supplementary group names, used for exemptions"
    )


class ExecutionMode(BaseModel):
    """Flags selecting how the new environment is assembled."""

    model_config = ConfigDict(frozen=True)

    reset_env: bool = Field(
        default=False,
        description="Start from a clean slate plus the keep list instead of filtering",
    )
    login_shell: bool = Field(
        default=False, description="Simulate a login: identity defaults from the target user"
    )
    reset_home: bool = Field(
        default=False, description="Set HOME to the target user's home directory"
    )
    noexec: bool = Field(
        default=False, description="Preload the noexec library into the command"
    )


class CleanResult(BaseModel):
    """Outcome of pruning the tool's own inherited environment."""

    env: list[str] = Field(default_factory=list, description="Entries that passed")
    pruned: list[str] = Field(default_factory=list, description="Entries that were removed")
    user_path: str | None = Field(default=None, description="Inherited PATH value")
    user_shell: str | None = Field(default=None, description="Inherited SHELL value")
    user_prompt: str | None = Field(default=None, description="SUDO_PROMPT override")
    prev_user: str | None = Field(
        default=None, description="SUDO_USER left by an outer invocation"
    )
