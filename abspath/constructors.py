"""Factory functions for :class:`AbsolutePath`.

Every constructor either returns a fully validated ``AbsolutePath`` or raises
an :class:`~abspath.errors.AbsolutePathError`.

Example:
    >>> a = validate("/path/to/file")
    >>> b = expand_from("relative_path")   # joined onto the working directory
    >>> c = expand_from("~/Documents")     # joined onto the home directory
"""

from __future__ import annotations

import logging
import os
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

from .environment import PathEnvironment, resolve_environment
from .errors import EmptyPathError, ExpansionError, NotAbsolutePathError
from .path import AbsolutePath

logger = logging.getLogger(__name__)


def _from_slash(path: str) -> str:
    if os.sep == "/":
        return path
    return path.replace("/", os.sep)


def validate(path: str) -> AbsolutePath:
    """Wrap ``path``, which must already be absolute.

    Raises:
        NotAbsolutePathError: ``path`` is relative or empty.
    """
    if not os.path.isabs(path):
        raise NotAbsolutePathError(path)
    return AbsolutePath._wrap(os.path.normpath(path))


def expand_from(path: str, *, env: Optional[PathEnvironment] = None) -> AbsolutePath:
    """Build an absolute path from an absolute, relative or ``~``-prefixed string.

    A leading ``~`` stands for the home directory and everything after it is
    joined on. Any other relative path is joined onto the working directory.

    Raises:
        EmptyPathError: ``path`` is empty.
        ExpansionError: the home or working directory could not be determined.
    """
    if os.path.isabs(path):
        return AbsolutePath._wrap(os.path.normpath(path))

    if path == "":
        raise EmptyPathError()

    environment = resolve_environment(env)
    if path[0] == "~":
        home = validate(environment.home_dir())
        logger.debug("expanding %r against home directory", path)
        return home.join(path[1:])

    cwd = validate(environment.getcwd())
    logger.debug("expanding %r against working directory", path)
    return cwd.join(path)


def from_slash(path: str) -> AbsolutePath:
    """Like :func:`validate` for ``/``-separated input."""
    return validate(_from_slash(path))


def expand_from_slash(path: str, *, env: Optional[PathEnvironment] = None) -> AbsolutePath:
    """Like :func:`expand_from` for ``/``-separated input.

    On Windows ``expand_from_slash("relative/path")`` expands to something like
    ``D:\\path\\to\\cwd\\relative\\path``.
    """
    return expand_from(_from_slash(path), env=env)


def getcwd(*, env: Optional[PathEnvironment] = None) -> AbsolutePath:
    """The current working directory as an ``AbsolutePath``."""
    return validate(resolve_environment(env).getcwd())


def home_dir(*, env: Optional[PathEnvironment] = None) -> AbsolutePath:
    """The current user's home directory.

    Raises:
        ExpansionError: the host could not resolve a home directory.
        NotAbsolutePathError: the resolved value is not absolute.
    """
    return validate(resolve_environment(env).home_dir())


def _expand_input(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return str(expand_from(value))
        except ExpansionError as exc:
            # pydantic only reports ValueError as a validation error
            raise ValueError(str(exc)) from exc
    return value


# Model field type that accepts relative and ``~`` input, e.g.
#     class Job(BaseModel):
#         workdir: ExpandedPath
ExpandedPath = Annotated[AbsolutePath, BeforeValidator(_expand_input)]


__all__ = [
    "validate",
    "expand_from",
    "from_slash",
    "expand_from_slash",
    "getcwd",
    "home_dir",
    "ExpandedPath",
]
