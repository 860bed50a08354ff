from __future__ import annotations

import os
import stat as _stat
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .path import AbsolutePath


class WalkAction(str, Enum):
    """Signals a walk visitor may return."""

    CONTINUE = "continue"
    SKIP_DIR = "skip_dir"
    STOP = "stop"


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Host file metadata for a single entry."""

    name: str
    size: int
    mode: int
    mtime: datetime
    is_dir: bool
    raw: os.stat_result

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> FileInfo:
        return cls(
            name=name,
            size=st.st_size,
            mode=st.st_mode,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_dir=_stat.S_ISDIR(st.st_mode),
            raw=st,
        )

    @property
    def is_symlink(self) -> bool:
        # only meaningful for lstat results, as handed out by walk()
        return _stat.S_ISLNK(self.mode)


Visitor = Callable[
    ["AbsolutePath", Optional[FileInfo], Optional[OSError]], Optional[WalkAction]
]
