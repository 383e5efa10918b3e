"""Preprocessing of the tool's own inherited environment.

Runs once, early. Entries that fail classification are split off into a
pruned list; a few values are captured on the way regardless of whether
their entry survives.
"""

from __future__ import annotations

import logging

from .env_filter import SEPARATOR, EnvSource, EnvTables, classify, iter_entries, var_name
from .models import CleanResult

logger = logging.getLogger(__name__)


def clean_env(source: EnvSource | None, tables: EnvTables) -> CleanResult:
    """Split ``source`` into surviving and pruned entries.

    Captures PATH, SHELL and SUDO_USER (last occurrence wins) and
    SUDO_PROMPT (first occurrence wins). Entries without a separator are
    always pruned.
    """
    result = CleanResult()
    for entry in iter_entries(source):
        name, sep, value = entry.partition(SEPARATOR)
        if not sep:
            result.pruned.append(entry)
            continue
        if name == "PATH":
            result.user_path = value
        elif name == "SHELL":
            result.user_shell = value
        elif name == "SUDO_PROMPT":
            if result.user_prompt is None:
                result.user_prompt = value
        elif name == "SUDO_USER":
            result.prev_user = value

        if classify(entry, tables.delete, tables.check):
            result.env.append(entry)
        else:
            result.pruned.append(entry)

    if result.pruned:
        logger.debug(
            "clean_env: pruned %d variable(s): %s",
            len(result.pruned),
            ", ".join(var_name(e) for e in result.pruned),
        )
    return result
