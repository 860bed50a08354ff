"""Depth-first traversal behind :meth:`AbsolutePath.walk`.

Visitor protocol:

- ``visitor(path, info, error)`` is called for the root and for every entry
  below it. Names are visited in lexical order at each level and a directory
  is visited before its children.
- ``info`` comes from ``lstat``: symbolic links are reported, not followed.
- Returning ``None`` or ``WalkAction.CONTINUE`` keeps going.
  ``WalkAction.SKIP_DIR`` skips the children of a directory, or the remaining
  siblings when returned for a non-directory. ``WalkAction.STOP`` ends the
  walk and ``walk_tree`` returns normally.
- When an entry cannot be examined ``error`` carries the ``OSError`` (and
  ``info`` may be ``None``). Returning any ``WalkAction`` suppresses it;
  returning ``None`` lets ``walk_tree`` raise :class:`FilesystemError` from it.
- The action may also be given by value (``"stop"``). Any other return value
  raises ``TypeError``.
- Exceptions raised by the visitor propagate unchanged.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from ._types import FileInfo, Visitor, WalkAction
from .errors import FilesystemError
from .path import AbsolutePath, _basename

logger = logging.getLogger(__name__)


def _as_action(result: object) -> Optional[WalkAction]:
    if result is None:
        return None
    try:
        return WalkAction(result)
    except ValueError:
        raise TypeError(
            f"walk visitor must return a WalkAction or None, got {result!r}"
        ) from None


def _visit(
    visitor: Visitor,
    path: str,
    info: Optional[FileInfo],
    error: Optional[OSError],
    operation: str,
) -> WalkAction:
    action = _as_action(visitor(AbsolutePath._wrap(path), info, error))
    if error is not None and action is None:
        logger.debug("walk: unsuppressed %s error at %s: %s", operation, path, error)
        raise FilesystemError.wrap(operation, path, error) from error
    return action or WalkAction.CONTINUE


def _walk(visitor: Visitor, path: str, info: FileInfo) -> WalkAction:
    if not info.is_dir:
        return _visit(visitor, path, info, None, "walk")

    try:
        names = sorted(os.listdir(path))
    except OSError as exc:
        # The directory is reported once, with the listing error; never descended.
        return _visit(visitor, path, info, exc, "listdir")

    action = _visit(visitor, path, info, None, "walk")
    if action is not WalkAction.CONTINUE:
        return action

    for name in names:
        child = os.path.join(path, name)
        try:
            child_info = FileInfo.from_stat(name, os.lstat(child))
        except OSError as exc:
            if _visit(visitor, child, None, exc, "lstat") is WalkAction.STOP:
                return WalkAction.STOP
            continue

        action = _walk(visitor, child, child_info)
        if action is WalkAction.STOP:
            return action
        if action is WalkAction.SKIP_DIR and not child_info.is_dir:
            return action
    return WalkAction.CONTINUE


def walk_tree(root: AbsolutePath, visitor: Visitor) -> None:
    """Walk ``root`` depth first, calling ``visitor`` per entry."""
    path = os.fspath(root)
    try:
        info = FileInfo.from_stat(_basename(path), os.lstat(path))
    except OSError as exc:
        _visit(visitor, path, None, exc, "lstat")
        return
    _walk(visitor, path, info)


__all__ = ["walk_tree"]
