"""Typed absolute filesystem paths.

``AbsolutePath`` can only hold a validated, normalized absolute path, so a
function that takes one never has to wonder whether its argument is relative.
"""

from ._types import FileInfo, WalkAction
from .constructors import (
    ExpandedPath,
    expand_from,
    expand_from_slash,
    from_slash,
    getcwd,
    home_dir,
    validate,
)
from .environment import FixedEnvironment, HostEnvironment, PathEnvironment
from .errors import (
    AbsolutePathError,
    EmptyPathError,
    ExpansionError,
    FilesystemError,
    NoRelativePathError,
    NotAbsolutePathError,
    PatternError,
)
from .path import AbsolutePath

__version__ = "0.3.0"

__all__ = [
    "AbsolutePath",
    "ExpandedPath",
    "FileInfo",
    "WalkAction",
    "validate",
    "expand_from",
    "from_slash",
    "expand_from_slash",
    "getcwd",
    "home_dir",
    "PathEnvironment",
    "HostEnvironment",
    "FixedEnvironment",
    "AbsolutePathError",
    "NotAbsolutePathError",
    "EmptyPathError",
    "ExpansionError",
    "FilesystemError",
    "PatternError",
    "NoRelativePathError",
]
