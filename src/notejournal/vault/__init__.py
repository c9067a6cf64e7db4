"""Journal tree layout: diary paths, note enumeration and new diary entries."""

from notejournal.vault.daily import create_diary_entry
from notejournal.vault.layout import get_diary_path, list_note_paths

__all__ = [
    "create_diary_entry",
    "get_diary_path",
    "list_note_paths",
]
