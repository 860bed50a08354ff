"""abspath config defaults.

No side effects on import. Values can be overridden via ABSPATH_* env vars.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_PREFIX = "ABSPATH_"


def _env(name: str, default: str) -> str:
    if not name.startswith(_PREFIX):
        raise ValueError(f"Only {_PREFIX}* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, str(default))
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class LoggingDefaults:
    log_dir: str = _env("ABSPATH_LOG_DIR", "")
    console: bool = _env_bool("ABSPATH_LOG_CONSOLE", False)
    max_size_mb: int = _env_int("ABSPATH_LOG_MAX_SIZE_MB", 0)
    max_files: int = _env_int("ABSPATH_LOG_MAX_FILES", 5)
    redact_home: bool = _env_bool("ABSPATH_REDACT_HOME", True)


LOG = LoggingDefaults()
