"""Providers for the ambient directories path expansion depends on.

The working directory and home directory are process-global state. Constructors
read them at call time through a :class:`PathEnvironment` so tests can swap in a
:class:`FixedEnvironment` instead of touching the real process state.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from .errors import ExpansionError

logger = logging.getLogger(__name__)


@runtime_checkable
class PathEnvironment(Protocol):
    """Source of the current working directory and home directory."""

    def getcwd(self) -> str: ...

    def home_dir(self) -> str: ...


class HostEnvironment:
    """Reads both directories from the running process."""

    def getcwd(self) -> str:
        try:
            return os.getcwd()
        except OSError as exc:
            logger.warning("working directory lookup failed: %s", exc)
            raise ExpansionError(f"working directory could not be determined: {exc}") from exc

    def home_dir(self) -> str:
        # expanduser consults HOME / USERPROFILE first, then the password database
        home = os.path.expanduser("~")
        if not home or home == "~":
            logger.warning("home directory lookup failed")
            raise ExpansionError("home directory could not be determined")
        return home

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "HostEnvironment()"


@dataclass(frozen=True)
class FixedEnvironment:
    """Static directories, mainly for tests.

    ``None`` for either value makes the matching lookup fail with
    :class:`ExpansionError`.
    """

    cwd: Optional[str] = None
    home: Optional[str] = None

    def getcwd(self) -> str:
        if self.cwd is None:
            raise ExpansionError("working directory could not be determined")
        return self.cwd

    def home_dir(self) -> str:
        if self.home is None:
            raise ExpansionError("home directory could not be determined")
        return self.home


HOST = HostEnvironment()


def resolve_environment(env: Optional[PathEnvironment]) -> PathEnvironment:
    return HOST if env is None else env


__all__ = [
    "PathEnvironment",
    "HostEnvironment",
    "FixedEnvironment",
    "HOST",
    "resolve_environment",
]
