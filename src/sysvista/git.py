"""File discovery respecting .gitignore and hidden-file conventions."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

# directories never worth scanning, even outside a git work tree
EXCLUDED_DIR_NAMES: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        "__pycache__",
        ".venv",
        "venv",
        "target",
        "dist",
        "build",
        ".next",
        ".nuxt",
        "vendor",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "coverage",
        ".coverage",
        ".cache",
    }
)


@dataclass
class WalkedFile:
    """A file found under the scan root."""

    path: Path
    relative_path: str


@dataclass
class WalkResult:
    """Files found by a walk plus the number of unreadable entries."""

    files: list[WalkedFile] = field(default_factory=list)
    skipped: int = 0


def should_ignore_path(path: Path) -> bool:
    """Check whether any component of a path is an excluded directory."""
    return any(part in EXCLUDED_DIR_NAMES for part in path.parts)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts)


def get_tracked_files(root: Path) -> list[Path] | None:
    """Get list of files git considers part of the tree under root.

    Uses `git ls-files --cached --others --exclude-standard` to get:
    - Tracked files (--cached)
    - Untracked but not ignored files (--others --exclude-standard)

    Returns:
        List of Path objects, or None if not in a git repo or git fails.
    """
    try:
        result = subprocess.run(
            [
                "git",
                "ls-files",
                "--cached",
                "--others",
                "--exclude-standard",
            ],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.returncode != 0:
            return None

        files = []
        for line in result.stdout.strip().split("\n"):
            if not line:
                continue
            path = root / line
            if path.is_file():
                files.append(path)
        return files
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return None


def _walk_filesystem(root: Path) -> WalkResult:
    """Walk without git: prune hidden entries and excluded directories."""
    result = WalkResult()

    def on_error(err: OSError) -> None:
        logger.debug("unreadable directory", path=err.filename)
        result.skipped += 1

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [
            d
            for d in dirnames
            if not d.startswith(".") and d not in EXCLUDED_DIR_NAMES
        ]
        for name in filenames:
            if name.startswith("."):
                continue
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            result.files.append(
                WalkedFile(
                    path=path,
                    relative_path=path.relative_to(root).as_posix(),
                )
            )
    return result


def walk_directory(root: Path) -> WalkResult:
    """Collect files under root in lexicographic relative-path order.

    Inside a git work tree, git decides what is ignored (.gitignore, global
    excludes, info/exclude); hidden paths are dropped either way.
    """
    tracked = get_tracked_files(root)
    if tracked is None:
        result = _walk_filesystem(root)
    else:
        result = WalkResult()
        for path in tracked:
            rel = path.relative_to(root)
            if _is_hidden(rel) or should_ignore_path(rel):
                continue
            result.files.append(
                WalkedFile(path=path, relative_path=rel.as_posix())
            )

    result.files.sort(key=lambda f: f.relative_path)
    logger.debug(
        "walked directory",
        root=str(root),
        files=len(result.files),
        skipped=result.skipped,
        git=tracked is not None,
    )
    return result
