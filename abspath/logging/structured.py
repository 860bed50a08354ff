"""JSON-lines event log for the ``abspath`` command line.

Each call writes one JSON object per line: a timestamp, the level, the
component and session that produced it, the message, and whatever keyword
context was passed, after :class:`DataRedactor` has scrubbed it.
"""

from __future__ import annotations

import json
import os
import sys
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from .redaction import DataRedactor


class LogLevel(Enum):
    INFO = "info"
    ERROR = "error"


class StructuredLogger:
    """Writes redacted JSON lines to stderr, a file, or both.

    ``output_file`` may be a path, which the logger opens, appends to, rotates
    and closes, or an already open text handle, which it only writes to.
    """

    def __init__(
        self,
        component: str,
        session_id: Optional[str] = None,
        output_file: Optional[Union[str, os.PathLike[str], TextIO]] = None,
        enable_console: bool = True,
        redactor: Optional[DataRedactor] = None,
        max_log_size_mb: Optional[int] = None,
        max_log_files: int = 5,
    ) -> None:
        self.component = component
        self.session_id = session_id or uuid.uuid4().hex[:8]
        self.redactor = redactor or DataRedactor()
        self.console_enabled = enable_console

        # rotation only applies to files opened from a path
        self.max_log_size_bytes = max_log_size_mb * 1024 * 1024 if max_log_size_mb else None
        self.max_log_files = max_log_files

        self.log_file_path: Optional[Path] = None
        self.log_file: Optional[TextIO] = None
        if isinstance(output_file, (str, os.PathLike)):
            self.log_file_path = Path(output_file)
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            self._open()
        elif output_file is not None:
            self.log_file = output_file

    def _open(self) -> None:
        assert self.log_file_path is not None
        self.log_file = open(self.log_file_path, "a", encoding="utf-8")

    def _rotated_name(self, index: int) -> Path:
        assert self.log_file_path is not None
        return self.log_file_path.with_suffix(f".{index}{self.log_file_path.suffix}")

    def _rotate_if_needed(self) -> None:
        if self.log_file_path is None or not self.max_log_size_bytes:
            return
        try:
            if (
                not self.log_file_path.exists()
                or self.log_file_path.stat().st_size <= self.max_log_size_bytes
            ):
                return
            if self.log_file:
                self.log_file.close()
                self.log_file = None
            # cli.1.jsonl -> cli.2.jsonl ...; the oldest is overwritten
            for i in range(self.max_log_files - 1, 0, -1):
                older = self._rotated_name(i)
                if older.exists():
                    older.replace(self._rotated_name(i + 1))
            self.log_file_path.replace(self._rotated_name(1))
        except OSError as exc:
            print(f"[abspath] log rotation failed: {exc}", file=sys.stderr)
        if self.log_file is None:
            self._open()

    def log(self, level: LogLevel, message: str, **context: Any) -> None:
        entry: Dict[str, Any] = {
            "timestamp": time.time(),
            "iso_timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()) + "Z",
            "level": level.value,
            "component": self.component,
            "session_id": self.session_id,
            "message": message,
            **self.redactor.redact_dict(context),
        }
        line = json.dumps(entry, default=str, separators=(",", ":"))

        if self.console_enabled:
            print(line, file=sys.stderr, flush=True)
        if self.log_file is not None:
            self._rotate_if_needed()
            self.log_file.write(line + "\n")
            self.log_file.flush()

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log(LogLevel.ERROR, message, **context)

    def close(self) -> None:
        if self.log_file is not None and self.log_file_path is not None:
            self.log_file.close()
        self.log_file = None


def create_logger(
    component: str,
    session_id: Optional[str] = None,
    log_dir: Optional[Union[str, os.PathLike[str]]] = None,
    **kwargs: Any,
) -> StructuredLogger:
    """Build a :class:`StructuredLogger` from the ``ABSPATH_LOG_*`` settings.

    The file is ``<log_dir>/<component>_<session_id or "default">.jsonl``;
    with no ``log_dir`` and ``ABSPATH_LOG_DIR`` unset nothing is written to
    disk. Explicit keyword arguments win over the settings.
    """
    # read at call time so reloaded or patched settings apply
    from ..config import defaults

    cfg = defaults.LOG
    if log_dir is None:
        log_dir = cfg.log_dir or None
    if "max_log_size_mb" not in kwargs and cfg.max_size_mb > 0:
        kwargs["max_log_size_mb"] = cfg.max_size_mb
    kwargs.setdefault("max_log_files", cfg.max_files)
    kwargs.setdefault("enable_console", cfg.console)
    kwargs.setdefault("redactor", DataRedactor(redact_home=cfg.redact_home))

    output_file = None
    if log_dir:
        output_file = Path(log_dir) / f"{component}_{session_id or 'default'}.jsonl"
    return StructuredLogger(
        component=component, session_id=session_id, output_file=output_file, **kwargs
    )
