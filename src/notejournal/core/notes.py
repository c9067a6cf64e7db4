"""Note classification: diary entry vs plain note, and baseline timestamps."""

import logging
import re
from datetime import datetime
from pathlib import Path, PurePosixPath

from notejournal.core.config import ARCHIVE_FILENAME, INDEX_FILENAME
from notejournal.core.errors import NoteNotFoundError, ScanError
from notejournal.core.types import Note, NoteKind

logger = logging.getLogger(__name__)

# 2024/03/2024-03-05.md
DIARY_PATTERN = re.compile(r"^(\d{4})/(\d{2})/(\d{4})-(\d{2})-(\d{2})\.md$")


def is_generated(path: str) -> bool:
    """True for ``index.md``/``*/index.md`` and the root ``archive.md``, which are never scanned."""
    return PurePosixPath(path).name == INDEX_FILENAME or path == ARCHIVE_FILENAME


def match_diary_path(path: str) -> tuple[str, str, str] | None:
    """Return ``(year, month, day)`` when ``path`` is a consistent diary path.

    The folder year and month must repeat in the filename; a diary-shaped
    filename under a mismatched folder is not a diary entry.
    """
    m = DIARY_PATTERN.match(path)
    if m is None:
        return None
    year, month, file_year, file_month, day = m.groups()
    if year != file_year or month != file_month:
        return None
    return file_year, file_month, day


def diary_date(path: str) -> datetime | None:
    """Local midnight of a diary entry's date, or None for non-diary paths."""
    parts = match_diary_path(path)
    if parts is None:
        return None
    year, month, day = parts
    try:
        return datetime(int(year), int(month), int(day))
    except ValueError as e:
        raise ScanError(f"Invalid diary date in '{path}': {e}") from e


def classify(path: str, root: Path) -> Note:
    """Classify a tree-relative path into a Note.

    Diary entries never touch the file system; plain notes use the file's
    modification time and raise NoteNotFoundError if the file is missing.
    """
    baseline = diary_date(path)
    if baseline is not None:
        return Note(path=path, kind=NoteKind.DIARY_ENTRY, baseline_time=baseline)

    try:
        mtime = (root / path).stat().st_mtime
    except FileNotFoundError as e:
        raise NoteNotFoundError(path) from e
    return Note(
        path=path,
        kind=NoteKind.PLAIN_TEXT,
        baseline_time=datetime.fromtimestamp(mtime),
    )
