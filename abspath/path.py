"""The :class:`AbsolutePath` value type.

An ``AbsolutePath`` wraps a string that the host considers absolute
(``os.path.isabs``) and that was normalized with ``os.path.normpath`` when the
value was built. Path arithmetic is delegated to ``os.path``; the methods here
only adapt argument and result types so absolute paths stay typed as such.

Example:
    >>> from abspath import validate
    >>> p = validate("/etc/hosts")
    >>> str(p.dir()), str(p.base()), p.ext()
    ('/etc', 'hosts', '')
"""

from __future__ import annotations

import fnmatch
import functools
import logging
import os
import re
import stat as _stat
from typing import Any, List, Tuple

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ._types import FileInfo, Visitor
from .errors import FilesystemError, NoRelativePathError, NotAbsolutePathError, PatternError

logger = logging.getLogger(__name__)

_SEPS = os.sep + (os.altsep or "")
_SEP_RE = re.compile("[" + re.escape(_SEPS) + "]")


def _basename(path: str) -> str:
    _, rest = os.path.splitdrive(path)
    stripped = rest.rstrip(_SEPS)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def _check_pattern(pattern: str) -> None:
    """Reject bracket classes that never close or that contain a separator."""
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                if pattern[j] in _SEPS:
                    raise PatternError(pattern, "separator in character class")
                j += 1
            if j >= n:
                raise PatternError(pattern, "unterminated character class")
            i = j
        i += 1


def _serialize(value: AbsolutePath, info: core_schema.SerializationInfo) -> Any:
    if info.mode_is_json():
        return value._path
    return value


@functools.total_ordering
class AbsolutePath:
    """Validated, normalized absolute filesystem path.

    ``AbsolutePath(s)`` validates exactly like :func:`abspath.validate` and
    raises :class:`NotAbsolutePathError` for anything else, so an instance
    always holds a host-absolute string. Instances are immutable, hashable,
    ordered by their string, and accepted anywhere ``os.PathLike`` is.
    """

    # must stay a plain class: pydantic dumps dataclasses as dicts
    __slots__ = ("_path",)

    def __init__(self, path: str | os.PathLike[str]) -> None:
        raw: Any = path
        if not isinstance(raw, str):
            try:
                raw = os.fspath(raw)
            except TypeError:
                raise TypeError(
                    f"AbsolutePath expects str or os.PathLike, got {type(raw).__name__}"
                ) from None
            if not isinstance(raw, str):
                raise TypeError("AbsolutePath does not accept bytes paths")
        if not os.path.isabs(raw):
            raise NotAbsolutePathError(raw)
        object.__setattr__(self, "_path", os.path.normpath(raw))

    @classmethod
    def _wrap(cls, path: str) -> AbsolutePath:
        # Callers guarantee ``path`` is already normalized.
        obj = object.__new__(cls)
        object.__setattr__(obj, "_path", path)
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"AbsolutePath is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"AbsolutePath is immutable, cannot delete {name!r}")

    def __reduce__(self) -> Tuple[Any, Tuple[str]]:
        return (AbsolutePath, (self._path,))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return self._path == other._path

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        return self._path < other._path

    def __hash__(self) -> int:
        return hash(self._path)

    # ---------- Conversions ----------
    def __str__(self) -> str:
        return self._path

    def __fspath__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"AbsolutePath({self._path!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_str = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_str]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize, info_arg=True
            ),
        )

    # ---------- Pure derivations ----------
    def base(self) -> AbsolutePath:
        """Last element of the path; the root for a root path.

        The result carries only the final element, so it is not absolute.
        """
        return AbsolutePath._wrap(_basename(self._path))

    def dir(self) -> AbsolutePath:
        """Parent directory; a root path is its own parent."""
        return AbsolutePath._wrap(os.path.normpath(os.path.dirname(self._path)))

    def ext(self) -> str:
        """Suffix from the last dot of the final element, or ``""``."""
        name = _basename(self._path)
        i = name.rfind(".")
        return name[i:] if i >= 0 else ""

    def has_prefix(self, prefix: str) -> bool:
        """Plain string prefix test; not aware of path segments."""
        return self._path.startswith(prefix)

    def join(self, *elements: str | os.PathLike[str]) -> AbsolutePath:
        """Append ``elements`` and normalize.

        Elements are always appended, even ones that look absolute, so the
        result stays under the receiver's root. Empty elements are ignored.
        """
        parts = [os.fspath(e) for e in elements]
        parts = [p for p in parts if p]
        if not parts:
            return self
        joined = self._path.rstrip(_SEPS) + os.sep + os.sep.join(parts)
        return AbsolutePath._wrap(os.path.normpath(joined))

    def match(self, pattern: str) -> bool:
        """Match the whole path against a shell glob.

        ``*`` and ``?`` do not cross separators, so the pattern needs one
        segment per path element (``/*/*`` matches ``/foo/bar``). Matching is
        case-sensitive. Raises :class:`PatternError` for a malformed pattern.
        """
        _check_pattern(pattern)
        pat_parts = _SEP_RE.split(pattern)
        path_parts = _SEP_RE.split(self._path)
        if len(pat_parts) != len(path_parts):
            return False
        return all(
            fnmatch.fnmatchcase(name, pat) for name, pat in zip(path_parts, pat_parts)
        )

    def rel(self, target: str | os.PathLike[str]) -> str:
        """Relative path that leads from this path to ``target``.

        Raises :class:`NoRelativePathError` when ``target`` is not absolute or
        sits on a different volume.
        """
        target_str = os.fspath(target)
        if not os.path.isabs(target_str):
            raise NoRelativePathError(self._path, target_str, "target is not absolute")
        try:
            return os.path.relpath(target_str, self._path)
        except ValueError as exc:
            raise NoRelativePathError(self._path, target_str, str(exc)) from exc

    def split(self) -> Tuple[AbsolutePath, str]:
        """Return ``(parent, name)`` with ``parent.join(name) == self``."""
        head, tail = os.path.split(self._path)
        return AbsolutePath._wrap(os.path.normpath(head)), tail

    def parts(self) -> List[str]:
        """Elements after the root, in order."""
        _, rest = os.path.splitdrive(self._path)
        return [p for p in _SEP_RE.split(rest) if p]

    def to_slash(self) -> str:
        if os.sep == "/":
            return self._path
        return self._path.replace(os.sep, "/")

    def volume_name(self) -> str:
        """Drive or UNC share prefix; always ``""`` on POSIX hosts."""
        return os.path.splitdrive(self._path)[0]

    # ---------- Filesystem ----------
    def eval_symlinks(self) -> AbsolutePath:
        """Resolve every symbolic link in the path.

        Raises :class:`FilesystemError` if the path does not exist or a link
        cannot be followed.
        """
        try:
            resolved = os.path.realpath(self._path, strict=True)
        except OSError as exc:
            logger.debug("eval_symlinks failed for %s: %s", self._path, exc)
            raise FilesystemError.wrap("eval_symlinks", self._path, exc) from exc
        return AbsolutePath._wrap(os.path.normpath(os.path.abspath(resolved)))

    def walk(self, visitor: Visitor) -> None:
        """Visit this path and everything beneath it, depth first.

        See :func:`abspath.walk.walk_tree` for the visitor protocol.
        """
        from .walk import walk_tree

        walk_tree(self, visitor)

    # The three predicates below answer "is it there" and nothing else:
    # a missing entry and one we may not stat both read as False.
    def exists(self) -> bool:
        try:
            os.stat(self._path)
        except (OSError, ValueError):
            return False
        return True

    def is_dir(self) -> bool:
        try:
            return _stat.S_ISDIR(os.stat(self._path).st_mode)
        except (OSError, ValueError):
            return False

    def is_file(self) -> bool:
        """True when something exists here and it is not a directory."""
        try:
            return not _stat.S_ISDIR(os.stat(self._path).st_mode)
        except (OSError, ValueError):
            return False

    def stat(self) -> FileInfo:
        """Metadata for the entry, following symlinks."""
        try:
            st = os.stat(self._path)
        except OSError as exc:
            raise FilesystemError.wrap("stat", self._path, exc) from exc
        return FileInfo.from_stat(_basename(self._path), st)


__all__ = ["AbsolutePath"]
