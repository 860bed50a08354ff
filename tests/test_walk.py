"""Tests for AbsolutePath.walk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import pytest

from abspath import AbsolutePath, FileInfo, FilesystemError, WalkAction, expand_from, validate


def _rel(root: Path, p: AbsolutePath) -> str:
    r = os.path.relpath(str(p), str(root))
    return r.replace(os.sep, "/")


def _collect(root: Path, action_for=None) -> List[str]:
    seen: List[str] = []

    def visit(p: AbsolutePath, info: Optional[FileInfo], error: Optional[OSError]):
        assert error is None
        assert info is not None
        seen.append(_rel(root, p))
        if action_for is not None:
            return action_for(_rel(root, p), info)
        return None

    validate(str(root)).walk(visit)
    return seen


def test_walk_visits_everything_depth_first_in_lexical_order(tree: Path):
    assert _collect(tree) == [
        ".",
        "a.txt",
        "b",
        "b/c.txt",
        "b/d",
        "b/d/e.log",
        "f",
    ]


def test_walk_passes_metadata(tree: Path):
    infos = {}

    def visit(p, info, error):
        infos[_rel(tree, p)] = info

    validate(str(tree)).walk(visit)
    assert infos["b"].is_dir is True
    assert infos["b/c.txt"].is_dir is False
    assert infos["b/c.txt"].name == "c.txt"
    assert infos["b/d/e.log"].size == 3


def test_walk_skip_dir_on_directory(tree: Path):
    seen = _collect(
        tree, lambda rel, info: WalkAction.SKIP_DIR if rel == "b" else None
    )
    assert seen == [".", "a.txt", "b", "f"]


def test_walk_skip_dir_on_file_skips_remaining_siblings(tree: Path):
    (tree / "b" / "z.txt").write_text("z", encoding="utf-8")
    seen = _collect(
        tree, lambda rel, info: WalkAction.SKIP_DIR if rel == "b/c.txt" else None
    )
    # d/ and z.txt come after c.txt inside b/, the walk resumes at f/
    assert seen == [".", "a.txt", "b", "b/c.txt", "f"]


def test_walk_stop(tree: Path):
    seen = _collect(
        tree, lambda rel, info: WalkAction.STOP if rel == "b/c.txt" else WalkAction.CONTINUE
    )
    assert seen == [".", "a.txt", "b", "b/c.txt"]


def test_walk_on_a_file_visits_only_it(tree: Path):
    seen: List[AbsolutePath] = []
    root = validate(str(tree / "a.txt"))
    root.walk(lambda p, info, error: seen.append(p))
    assert seen == [root]


def test_walk_missing_root_raises_unless_suppressed(tmp_path: Path):
    root = validate(str(tmp_path / "missing"))
    errors: List[OSError] = []

    def strict(p, info, error):
        errors.append(error)
        return None

    with pytest.raises(FilesystemError) as ei:
        root.walk(strict)
    assert isinstance(ei.value.__cause__, FileNotFoundError)
    assert len(errors) == 1 and isinstance(errors[0], FileNotFoundError)

    def lenient(p, info, error):
        assert info is None
        return WalkAction.CONTINUE

    root.walk(lenient)  # no error


@pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="needs POSIX permissions enforced for the current user",
)
def test_walk_unreadable_directory(tree: Path):
    locked = tree / "b" / "d"
    locked.chmod(0)
    try:
        reported = []

        def lenient(p, info, error):
            if error is not None:
                reported.append(_rel(tree, p))
                return WalkAction.CONTINUE
            return None

        validate(str(tree)).walk(lenient)
        assert reported == ["b/d"]

        with pytest.raises(FilesystemError) as ei:
            validate(str(tree)).walk(lambda p, info, error: None)
        assert ei.value.operation == "listdir"
    finally:
        locked.chmod(0o755)


def test_walk_reports_symlinks_without_following(tree: Path):
    link = tree / "f" / "to-b"
    try:
        link.symlink_to(tree / "b", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this host")

    kinds = {}

    def visit(p, info, error):
        kinds[_rel(tree, p)] = info

    validate(str(tree)).walk(visit)
    assert kinds["f/to-b"].is_symlink is True
    assert "f/to-b/c.txt" not in kinds


def test_visitor_exceptions_propagate(tree: Path):
    class Boom(Exception):
        pass

    def visit(p, info, error):
        if str(p.base()) == "c.txt":
            raise Boom()

    with pytest.raises(Boom):
        validate(str(tree)).walk(visit)


def test_walk_from_relative_cwd(tree: Path, monkeypatch):
    monkeypatch.chdir(tree)
    count = []
    expand_from(".").walk(lambda p, info, error: count.append(p))
    assert len(count) == 7


def test_walk_accepts_action_values(tree: Path):
    seen = _collect(tree, lambda rel, info: "stop" if rel == "b" else "continue")
    assert seen == [".", "a.txt", "b"]


def test_walk_rejects_unknown_return_values(tree: Path):
    seen: List[AbsolutePath] = []

    def visit(p, info, error):
        seen.append(p)
        return True

    with pytest.raises(TypeError, match="WalkAction or None"):
        validate(str(tree)).walk(visit)
    assert len(seen) == 1
