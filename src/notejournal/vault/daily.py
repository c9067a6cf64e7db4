"""Diary entries: one file per day under YYYY/MM/."""

import logging
from datetime import datetime
from pathlib import Path

from notejournal.vault.layout import get_diary_path

logger = logging.getLogger(__name__)


def diary_header(now: datetime) -> str:
    return f"# Note {now.strftime('%Y-%m-%d')}\n"


def time_heading(now: datetime) -> str:
    return f"## {now.strftime('%H:%M:%S')}\n"


def create_diary_entry(root: Path, now: datetime | None = None) -> tuple[str, bool]:
    """Open today's diary entry for writing.

    Creates the ``YYYY/MM`` directories and the file with its title when
    missing, then appends a ``## HH:MM:SS`` heading for the new session.

    Returns:
        (path, created) - tree-relative path and whether the file is new
    """
    now = now or datetime.now()
    rel_path = get_diary_path(now.date())
    abs_path = root / rel_path
    abs_path.parent.mkdir(parents=True, exist_ok=True)

    created = not abs_path.exists()
    if created:
        content = diary_header(now)
    else:
        existing = abs_path.read_text(encoding="utf-8")
        content = existing if existing.endswith("\n") or not existing else existing + "\n"
    content += "\n" + time_heading(now) + "\n"

    abs_path.write_text(content, encoding="utf-8")
    logger.info("%s diary entry %s", "Created" if created else "Extended", rel_path)
    return rel_path, created
