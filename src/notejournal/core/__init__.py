"""notejournal core - note scanning and tag aggregation engine."""

from notejournal.core.types import Category, Note, NoteKind, Tag

__all__ = [
    "Category",
    "Note",
    "NoteKind",
    "Tag",
]
