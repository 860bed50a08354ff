"""Tests for the AbsolutePath methods that touch the filesystem."""

from __future__ import annotations

import errno
import os
from datetime import timezone
from pathlib import Path

import pytest

from abspath import AbsolutePath, FilesystemError, FileInfo, expand_from, validate


def test_exists_on_missing_path_is_false(tmp_path: Path):
    p = validate(str(tmp_path / "does-not-exist"))
    assert p.exists() is False
    assert p.is_dir() is False
    assert p.is_file() is False


def test_queries_on_file_and_dir(tree: Path):
    f = validate(str(tree / "a.txt"))
    d = validate(str(tree / "b"))
    assert f.exists() and f.is_file() and not f.is_dir()
    assert d.exists() and d.is_dir() and not d.is_file()


def test_queries_never_raise_through_a_file(tree: Path):
    # a.txt is a file, so nothing can exist below it (ENOTDIR on POSIX)
    p = validate(str(tree / "a.txt" / "child"))
    assert p.exists() is False
    assert p.is_dir() is False
    assert p.is_file() is False


def test_is_file_means_not_a_directory(tree: Path):
    if not hasattr(os, "mkfifo"):
        pytest.skip("fifos not available")
    fifo = tree / "pipe"
    os.mkfifo(fifo)
    assert validate(str(fifo)).is_file() is True


def test_stat(tree: Path):
    info = validate(str(tree / "b" / "c.txt")).stat()
    assert isinstance(info, FileInfo)
    assert info.name == "c.txt"
    assert info.size == 2
    assert info.is_dir is False
    assert info.mtime.tzinfo == timezone.utc
    assert info.raw.st_size == 2

    dinfo = validate(str(tree / "b")).stat()
    assert dinfo.is_dir is True
    assert dinfo.name == "b"


def test_stat_missing_raises(tmp_path: Path):
    missing = str(tmp_path / "nope")
    with pytest.raises(FilesystemError) as ei:
        validate(missing).stat()
    err = ei.value
    assert err.errno == errno.ENOENT
    assert err.filename == missing
    assert err.operation == "stat"
    assert isinstance(err.__cause__, FileNotFoundError)
    # also an OSError for callers that only know the builtin
    assert isinstance(err, OSError)


def test_eval_symlinks(symlink):
    target, link = symlink
    resolved = validate(str(link)).eval_symlinks()
    assert isinstance(resolved, AbsolutePath)
    assert str(resolved) == os.path.realpath(str(target))


def test_eval_symlinks_relative_link(tmp_path: Path):
    (tmp_path / "real").mkdir()
    (tmp_path / "real" / "file").write_text("x", encoding="utf-8")
    link = tmp_path / "alias"
    try:
        link.symlink_to("real", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this host")
    resolved = validate(str(link / "file")).eval_symlinks()
    assert str(resolved) == os.path.realpath(str(tmp_path / "real" / "file"))


def test_eval_symlinks_missing_raises():
    with pytest.raises(FilesystemError) as ei:
        validate(os.path.join(os.sep, "foo", "bar", "definitely-missing")).eval_symlinks()
    assert ei.value.operation == "eval_symlinks"


def test_eval_symlinks_dangling_link(tmp_path: Path):
    link = tmp_path / "dangling"
    try:
        link.symlink_to(tmp_path / "gone")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this host")
    p = validate(str(link))
    assert p.exists() is False
    with pytest.raises(FilesystemError):
        p.eval_symlinks()


def test_stat_follows_symlinks(symlink):
    target, link = symlink
    info = validate(str(link)).stat()
    assert info.is_symlink is False
    assert info.size == target.stat().st_size


def test_expand_then_query(tree: Path, monkeypatch):
    monkeypatch.chdir(tree)
    assert expand_from("a.txt").is_file()
    assert expand_from("b/d").is_dir()
    assert not expand_from("zzz").exists()
