"""Rebuild of the environment handed to an elevated command.

Two candidate sources are merged under the execution mode:

- reset: start from nothing, keep only entries on the keep list and fill
  in identity defaults;
- filter: keep everything that passes the delete and check lists.

Both modes then apply the overrides that encode the trust boundary
(secure PATH, target identity, HOME), fill TERM and PATH if still unset,
inject the noexec preload and finish with the SUDO_* metadata.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .builder import EnvironmentBuilder
from .env_filter import (
    SEPARATOR,
    EnvSource,
    EnvTables,
    classify,
    classify_keep,
    is_exported_function,
    iter_entries,
    var_name,
)
from .formatter import format_env
from .models import ExecutionMode, InvokingUser, RunAsUser
from .tables import DEFAULT_PATH, DEFAULT_TERM, preload_entries

logger = logging.getLogger(__name__)

# Converted into PS1 for the command's shell.
PROMPT_OVERRIDE_VAR = "SUDO_PS1"
PROMPT_VAR = "PS1"

# Names whose presence suppresses the matching default in reset mode.
TRACKED_VARS = frozenset({"HOME", "LOGNAME", "PATH", "SHELL", "TERM", "USER"})


@dataclass(frozen=True)
class EnvPolicy:
    """Operator policy consulted by ``rebuild_env``."""

    tables: EnvTables
    secure_path: str | None = None
    noexec_file: str | None = None
    is_exempt: Callable[[InvokingUser], bool] | None = None
    platform: str = field(default_factory=lambda: sys.platform)

    def exempt(self, user: InvokingUser) -> bool:
        return self.is_exempt is not None and bool(self.is_exempt(user))


def _command_line(command: str, args: str | Sequence[str] | None) -> str:
    if args is None or isinstance(args, str):
        return f"{command} {args}" if args else command
    joined = " ".join(args)
    return f"{command} {joined}" if joined else command


def _keep_pass(
    env: EnvironmentBuilder, sources: Sequence[EnvSource | None], tables: EnvTables
) -> tuple[set[str], str | None]:
    supplied: set[str] = set()
    ps1 = None
    for source in sources:
        for entry in iter_entries(source):
            if SEPARATOR not in entry or is_exported_function(entry):
                continue
            name = var_name(entry)
            if name == PROMPT_OVERRIDE_VAR:
                ps1 = PROMPT_VAR + entry[len(name) :]
            if not classify_keep(entry, tables.keep) or name in env:
                continue
            if name in TRACKED_VARS:
                supplied.add(name)
            env.insert(entry)
    return supplied, ps1


def _filter_pass(
    env: EnvironmentBuilder, sources: Sequence[EnvSource | None], tables: EnvTables
) -> tuple[set[str], str | None]:
    supplied: set[str] = set()
    ps1 = None
    for source in sources:
        for entry in iter_entries(source):
            if SEPARATOR not in entry or not classify(entry, tables.delete, tables.check):
                continue
            name = var_name(entry)
            if name == PROMPT_OVERRIDE_VAR:
                ps1 = PROMPT_VAR + entry[len(name) :]
            if name in env:
                continue
            if name in ("PATH", "TERM"):
                supplied.add(name)
            env.insert(entry)
    return supplied, ps1


def rebuild_env(
    env_a: EnvSource | None,
    env_b: EnvSource | None = None,
    *,
    mode: ExecutionMode,
    runas: RunAsUser,
    user: InvokingUser,
    policy: EnvPolicy,
    command: str,
    args: str | Sequence[str] | None = None,
) -> list[str | None]:
    """Build the environment for ``command`` and return it as a vector.

    Args:
        env_a: The current, already cleaned environment.
        env_b: An optional second source, e.g. the target's login profile.
        mode: Reset / login / reset-home / noexec flags.
        runas: The identity the command runs as.
        user: The invoking user.
        policy: Pattern tables, secure path, noexec library, exemptions.
        command: Fully resolved command path.
        args: Command arguments, as a string or a sequence to be joined.

    Returns:
        A ``None``-terminated list of ``NAME=VALUE`` strings. The caller owns it.
    """
    env = EnvironmentBuilder()
    sources = (env_a, env_b)

    if mode.reset_env:
        supplied, ps1 = _keep_pass(env, sources, policy.tables)

        if mode.login_shell:
            # Login simulation reflects the target, whatever was kept.
            env.insert(format_env("HOME", runas.home or user.home), replace=True)
            env.insert(format_env("SHELL", runas.shell or user.shell), replace=True)
            env.insert(format_env("LOGNAME", runas.name or user.name), replace=True)
            env.insert(format_env("USER", runas.name or user.name), replace=True)
        else:
            if "HOME" not in supplied:
                env.insert(format_env("HOME", user.home))
            if "SHELL" not in supplied:
                env.insert(format_env("SHELL", user.shell))
            if "LOGNAME" not in supplied:
                env.insert(format_env("LOGNAME", user.name))
            if "USER" not in supplied:
                env.insert(format_env("USER", user.name))
    else:
        supplied, ps1 = _filter_pass(env, sources, policy.tables)

    if policy.secure_path and not policy.exempt(user):
        env.insert(format_env("PATH", policy.secure_path), replace=True)
        supplied.add("PATH")

    if mode.reset_env and runas.name:
        env.insert(format_env("LOGNAME", runas.name), replace=True)
        env.insert(format_env("USER", runas.name), replace=True)

    if (mode.reset_env or mode.reset_home) and runas.home:
        env.insert(format_env("HOME", runas.home), replace=True)

    if "TERM" not in supplied:
        env.insert(format_env("TERM", DEFAULT_TERM))
    if "PATH" not in supplied:
        env.insert(format_env("PATH", DEFAULT_PATH))

    if mode.noexec and policy.noexec_file:
        for entry in preload_entries(policy.noexec_file, policy.platform):
            env.insert(entry, replace=True)

    if ps1 is not None:
        env.insert(ps1, replace=True)

    env.insert(format_env("SUDO_COMMAND", _command_line(command, args)), replace=True)
    env.insert(format_env("SUDO_USER", user.name), replace=True)
    env.insert(format_env("SUDO_UID", str(user.uid)), replace=True)
    env.insert(format_env("SUDO_GID", str(user.gid)), replace=True)

    logger.debug(
        "rebuild_env: %s mode, %d variable(s) for %s",
        "reset" if mode.reset_env else "filter",
        len(env),
        runas.name or runas.uid,
    )
    return env.finish()
