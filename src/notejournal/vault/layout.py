"""Journal tree layout and path helpers."""

import os
from datetime import date
from pathlib import Path, PurePosixPath

from notejournal.core.config import VCS_DIRNAME


def get_diary_path(target_date: date) -> str:
    """Tree-relative path of a diary entry.

    Format: 2024/01/2024-01-28.md
    """
    return (
        PurePosixPath(str(target_date.year))
        / f"{target_date.month:02d}"
        / f"{target_date.isoformat()}.md"
    ).as_posix()


def to_relative(root: Path, path: Path) -> str:
    """Forward-slash path of ``path`` relative to the tree root."""
    return PurePosixPath(*path.relative_to(root).parts).as_posix()


def list_note_paths(root: Path) -> list[str]:
    """All ``.md`` files under ``root``, sorted, skipping the git directory."""
    if not root.exists():
        return []
    paths: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != VCS_DIRNAME)
        base = Path(dirpath)
        for name in sorted(filenames):
            if name.endswith(".md"):
                paths.append(to_relative(root, base / name))
    return sorted(paths)
