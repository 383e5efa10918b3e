"""Environment sanitization for elevated command execution.

This package decides which variables a command run with elevated rights
inherits:
- env_filter: pattern matching and the delete / check / keep classifier
- builder, formatter: assembly of the new NAME=VALUE vector
- clean: one-time pruning of the tool's own environment
- rebuild: the reset / filter rebuild with mandatory overrides
- tables: built-in, platform-conditioned default tables
- settings: operator configuration
"""

from .builder import EnvironmentBuilder, envp_to_dict
from .clean import clean_env
from .env_filter import (
    EnvTables,
    PatternList,
    classify,
    classify_keep,
    is_exported_function,
    iter_entries,
    match,
)
from .formatter import format_env
from .models import (
    CleanResult,
    EnvOverflowError,
    EnvRebuildError,
    ExecutionMode,
    InvokingUser,
    RunAsUser,
)
from .protocol import EnvSanitizer
from .rebuild import EnvPolicy, rebuild_env
from .sanitizer import Sanitizer
from .settings import EnvSettings, load_settings
from .tables import PlatformFamily, init_env_tables, platform_family, preload_entries

__all__ = [
    "CleanResult",
    "EnvOverflowError",
    "EnvPolicy",
    "EnvRebuildError",
    "EnvSanitizer",
    "EnvSettings",
    "EnvTables",
    "EnvironmentBuilder",
    "ExecutionMode",
    "InvokingUser",
    "PatternList",
    "PlatformFamily",
    "RunAsUser",
    "Sanitizer",
    "classify",
    "classify_keep",
    "clean_env",
    "envp_to_dict",
    "format_env",
    "init_env_tables",
    "is_exported_function",
    "iter_entries",
    "load_settings",
    "match",
    "platform_family",
    "preload_entries",
    "rebuild_env",
]
