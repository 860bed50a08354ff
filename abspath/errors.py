"""Error taxonomy for abspath.

Every failure raised by the library derives from :class:`AbsolutePathError` and
also from the closest builtin (``ValueError`` for bad input, ``OSError`` for
filesystem failures) so callers can catch either.
"""

from __future__ import annotations

from typing import Optional


class AbsolutePathError(Exception):
    """Base class for all abspath errors."""


class NotAbsolutePathError(AbsolutePathError, ValueError):
    """Raised when a string does not denote an absolute path."""

    def __init__(self, specified: str) -> None:
        self.specified = specified
        super().__init__(f"Not an absolute path: '{specified}'")


class EmptyPathError(NotAbsolutePathError):
    """Raised when an empty string is given for expansion."""

    def __init__(self) -> None:
        self.specified = ""
        Exception.__init__(self, "empty path cannot be expanded")


class ExpansionError(AbsolutePathError, RuntimeError):
    """Raised when the home or working directory cannot be determined."""


class FilesystemError(AbsolutePathError, OSError):
    """Raised when an underlying filesystem call fails.

    Raise it ``from`` the host error; ``errno`` is copied from it unchanged.
    """

    def __init__(
        self,
        operation: str,
        path: str,
        errno: Optional[int] = None,
        strerror: Optional[str] = None,
    ) -> None:
        super().__init__(errno, strerror or "filesystem error", path)
        self.operation = operation

    def __str__(self) -> str:
        return f"{self.operation} failed for '{self.filename}': {self.strerror}"

    @classmethod
    def wrap(cls, operation: str, path: str, exc: OSError) -> "FilesystemError":
        return cls(operation, path, exc.errno, exc.strerror or str(exc))


class PatternError(AbsolutePathError, ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"bad pattern '{pattern}': {reason}")


class NoRelativePathError(AbsolutePathError, ValueError):
    """Raised when no relative path leads from a base to a target."""

    def __init__(self, base: str, target: str, reason: str = "") -> None:
        self.base = base
        self.target = target
        msg = f"Can't make '{target}' relative to '{base}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


__all__ = [
    "AbsolutePathError",
    "NotAbsolutePathError",
    "EmptyPathError",
    "ExpansionError",
    "FilesystemError",
    "PatternError",
    "NoRelativePathError",
]
