"""Built-in default pattern tables and per-platform capabilities.

The delete list covers variables that alter dynamic linking, name
resolution, terminal handling and shell startup. Some platforms add their
own loader variables; optional authentication backends add theirs.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum

from .env_filter import EnvTables, PatternList
from .formatter import format_env

# Fallback values used when a rebuild did not supply them.
DEFAULT_TERM = "unknown"
DEFAULT_PATH = "/usr/bin:/bin"


class PlatformFamily(str, Enum):
    """Platform groups that differ in loader variables."""

    GENERIC = "generic"
    DARWIN = "darwin"
    HPUX = "hpux"
    AIX = "aix"
    RLD = "rld"  # OSF/1 and IRIX runtime linker


@dataclass(frozen=True)
class PlatformCaps:
    """Loader-related differences for one platform family."""

    delete: tuple[str, ...]
    preload_var: str
    preload_suffix: str = ""
    flat_namespace_var: str | None = None


PLATFORM_CAPS: dict[PlatformFamily, PlatformCaps] = {
    PlatformFamily.GENERIC: PlatformCaps(delete=(), preload_var="LD_PRELOAD"),
    PlatformFamily.HPUX: PlatformCaps(delete=("SHLIB_PATH",), preload_var="LD_PRELOAD"),
    PlatformFamily.AIX: PlatformCaps(delete=("LIBPATH",), preload_var="LD_PRELOAD"),
    PlatformFamily.DARWIN: PlatformCaps(
        delete=("DYLD_*",),
        preload_var="DYLD_INSERT_LIBRARIES",
        flat_namespace_var="DYLD_FORCE_FLAT_NAMESPACE",
    ),
    PlatformFamily.RLD: PlatformCaps(
        delete=(), preload_var="_RLD_LIST", preload_suffix=":DEFAULT"
    ),
}

# Always removed, listed ahead of the platform additions.
BASE_DELETE: tuple[str, ...] = (
    "IFS",
    "CDPATH",
    "LOCALDOMAIN",
    "RES_OPTIONS",
    "HOSTALIASES",
    "NLSPATH",
    "PATH_LOCALE",
    "LD_*",
    "_RLD*",
)

KERBEROS4_DELETE: tuple[str, ...] = ("KRB_CONF*", "KRBCONFDIR", "KRBTKFILE")
KERBEROS5_DELETE: tuple[str, ...] = ("KRB5_CONFIG*",)
SECURID_DELETE: tuple[str, ...] = ("VAR_ACE", "USR_ACE", "DLC_ACE")

# Always removed, listed after the platform additions.
# TERMCAP is removed whatever its value, even when it is an inline entry.
TERMINAL_SHELL_DELETE: tuple[str, ...] = (
    "TERMINFO",
    "TERMINFO_DIRS",
    "TERMPATH",
    "TERMCAP",
    "ENV",
    "BASH_ENV",
)

DEFAULT_CHECK: tuple[str, ...] = ("LC_*", "LANG", "LANGUAGE")

DEFAULT_KEEP: tuple[str, ...] = ("KRB5CCNAME", "PATH", "TERM", "TZ")


def platform_family(platform: str | None = None) -> PlatformFamily:
    """Map a ``sys.platform`` string to its family."""
    p = (platform or sys.platform).lower()
    if p == "darwin":
        return PlatformFamily.DARWIN
    if p.startswith("hp-ux") or p.startswith("hpux"):
        return PlatformFamily.HPUX
    if p.startswith("aix"):
        return PlatformFamily.AIX
    if p.startswith("osf") or p.startswith("irix"):
        return PlatformFamily.RLD
    return PlatformFamily.GENERIC


def init_env_tables(
    platform: str | None = None,
    *,
    kerberos4: bool = False,
    kerberos5: bool = False,
    securid: bool = False,
) -> EnvTables:
    """Build the default delete / check / keep tables for ``platform``."""
    caps = PLATFORM_CAPS[platform_family(platform)]
    delete = list(BASE_DELETE)
    delete.extend(caps.delete)
    if kerberos4:
        delete.extend(KERBEROS4_DELETE)
    if kerberos5:
        delete.extend(KERBEROS5_DELETE)
    if securid:
        delete.extend(SECURID_DELETE)
    delete.extend(TERMINAL_SHELL_DELETE)
    return EnvTables(
        delete=PatternList(tuple(delete)),
        check=PatternList(DEFAULT_CHECK),
        keep=PatternList(DEFAULT_KEEP),
    )


def preload_entries(noexec_file: str, platform: str | None = None) -> list[str]:
    """Return the entries that force ``noexec_file`` into the command."""
    caps = PLATFORM_CAPS[platform_family(platform)]
    entries = [format_env(caps.preload_var, noexec_file, caps.preload_suffix)]
    if caps.flat_namespace_var:
        entries.append(format_env(caps.flat_namespace_var))
    return entries
