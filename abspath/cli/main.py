"""``abspath`` command-line tool.

Every subcommand prints one JSON document to stdout. Library errors are
reported on stderr with exit code 1; argparse usage errors exit with 2.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from abspath import (
    AbsolutePath,
    AbsolutePathError,
    FileInfo,
    WalkAction,
    expand_from,
    expand_from_slash,
    from_slash,
    validate,
)
from abspath.logging import create_logger


class PathReport(BaseModel):
    """Derived values for a single path."""

    path: AbsolutePath
    base: str
    dir: AbsolutePath
    ext: str
    volume: str
    slash: str
    exists: bool
    is_dir: bool
    is_file: bool

    @classmethod
    def of(cls, p: AbsolutePath) -> PathReport:
        return cls(
            path=p,
            base=str(p.base()),
            dir=p.dir(),
            ext=p.ext(),
            volume=p.volume_name(),
            slash=p.to_slash(),
            exists=p.exists(),
            is_dir=p.is_dir(),
            is_file=p.is_file(),
        )


class StatReport(BaseModel):
    size: int
    mode: str
    mtime: str

    @classmethod
    def of(cls, info: FileInfo) -> StatReport:
        return cls(size=info.size, mode=oct(info.mode), mtime=info.mtime.isoformat())


class WalkEntry(BaseModel):
    path: AbsolutePath
    kind: str
    error: Optional[str] = None


class WalkReport(BaseModel):
    root: AbsolutePath
    entries: List[WalkEntry] = Field(default_factory=list)


def _kind(info: Optional[FileInfo]) -> str:
    if info is None:
        return "unknown"
    if info.is_symlink:
        return "symlink"
    return "dir" if info.is_dir else "file"


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="abspath", description="Inspect absolute paths.")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate", help="accept only absolute paths")
    p.add_argument("path")
    p.add_argument("--slash", action="store_true", help="input uses '/' separators")

    p = sub.add_parser("expand", help="expand relative and ~ paths")
    p.add_argument("path")
    p.add_argument("--slash", action="store_true", help="input uses '/' separators")

    p = sub.add_parser("info", help="path report plus file metadata")
    p.add_argument("path")

    p = sub.add_parser("rel", help="relative path from BASE to TARGET")
    p.add_argument("base")
    p.add_argument("target")

    p = sub.add_parser("match", help="test the whole path against a glob")
    p.add_argument("path")
    p.add_argument("pattern")

    p = sub.add_parser("walk", help="list entries below a path")
    p.add_argument("path")
    p.add_argument("--max-depth", type=int, default=None)

    p = sub.add_parser("resolve", help="resolve symbolic links")
    p.add_argument("path")

    return ap


def _walk(root: AbsolutePath, max_depth: Optional[int]) -> WalkReport:
    report = WalkReport(root=root)
    root_depth = len(root.parts())

    def visit(
        p: AbsolutePath, info: Optional[FileInfo], error: Optional[OSError]
    ) -> Optional[WalkAction]:
        report.entries.append(
            WalkEntry(path=p, kind=_kind(info), error=str(error) if error else None)
        )
        if error is not None:
            # keep going past unreadable entries, the error is in the report
            return WalkAction.CONTINUE
        if (
            max_depth is not None
            and info is not None
            and info.is_dir
            and len(p.parts()) - root_depth >= max_depth
        ):
            return WalkAction.SKIP_DIR
        return None

    root.walk(visit)
    return report


def run(args: argparse.Namespace) -> Dict[str, Any]:
    cmd = args.command
    if cmd == "validate":
        p = from_slash(args.path) if args.slash else validate(args.path)
        return PathReport.of(p).model_dump(mode="json")
    if cmd == "expand":
        p = expand_from_slash(args.path) if args.slash else expand_from(args.path)
        return PathReport.of(p).model_dump(mode="json")
    if cmd == "info":
        p = expand_from(args.path)
        out = PathReport.of(p).model_dump(mode="json")
        out["stat"] = StatReport.of(p.stat()).model_dump() if out["exists"] else None
        return out
    if cmd == "rel":
        base = expand_from(args.base)
        target = expand_from(args.target)
        return {"base": str(base), "target": str(target), "rel": base.rel(target)}
    if cmd == "match":
        p = expand_from(args.path)
        return {"path": str(p), "pattern": args.pattern, "match": p.match(args.pattern)}
    if cmd == "walk":
        return _walk(expand_from(args.path), args.max_depth).model_dump(mode="json")
    if cmd == "resolve":
        p = expand_from(args.path)
        return {"path": str(p), "resolved": str(p.eval_symlinks())}
    raise ValueError(f"unknown command: {cmd}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    log = create_logger("cli")
    try:
        result = run(args)
        log.info("command", command=args.command)
    except AbsolutePathError as exc:
        log.error("command failed", command=args.command, error=str(exc), kind=type(exc).__name__)
        print(f"abspath: {exc}", file=sys.stderr)
        return 1
    finally:
        log.close()
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
