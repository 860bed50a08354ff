# tests/conftest.py
# Deterministic environments and small on-disk trees for path tests.

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

import pytest

from abspath import FixedEnvironment


@pytest.fixture()
def fake_env() -> FixedEnvironment:
    """Working and home directories that never touch the real process state."""
    return FixedEnvironment(
        cwd=os.path.join(os.sep, "work", "project"),
        home=os.path.join(os.sep, "home", "tester"),
    )


@pytest.fixture()
def tree(tmp_path: Path) -> Path:
    """
    tmp_path/
      a.txt
      b/
        c.txt
        d/
          e.log
      f/
    """
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    (tmp_path / "b" / "d").mkdir(parents=True)
    (tmp_path / "b" / "c.txt").write_text("cc", encoding="utf-8")
    (tmp_path / "b" / "d" / "e.log").write_text("eee", encoding="utf-8")
    (tmp_path / "f").mkdir()
    return tmp_path


@pytest.fixture()
def symlink(tmp_path: Path) -> tuple[Path, Path]:
    """A file and a symlink pointing at it; skipped where symlinks are unavailable."""
    target = tmp_path / "test-file"
    target.write_text("x", encoding="utf-8")
    link = tmp_path / "sym-link"
    try:
        link.symlink_to(target)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this host")
    return target, link


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    """Keep tests from writing logs into a developer's ABSPATH_LOG_DIR."""
    from abspath.config import defaults

    monkeypatch.setattr(defaults, "LOG", replace(defaults.LOG, log_dir="", console=False))
