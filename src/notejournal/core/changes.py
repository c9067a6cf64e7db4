"""Selection of the notes that need rescanning.

Without a recorded marker every note in the tree is rescanned. With a
marker, only files that git reports as untracked or changed since that
revision are looked at; changed files that no longer exist are reported
as removed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from notejournal.core.notes import classify, is_generated
from notejournal.core.state import JournalState
from notejournal.core.types import Note
from notejournal.git import RevisionTracker
from notejournal.vault.layout import list_note_paths

logger = logging.getLogger(__name__)


@dataclass
class ChangeSet:
    """Result of change detection.

    ``notes`` are rescanned, ``removed`` paths are purged. ``full`` means
    the state must be reset before the notes are processed.
    """

    full: bool
    notes: list[Note] = field(default_factory=list)
    removed: set[str] = field(default_factory=set)


def _is_candidate(path: str) -> bool:
    return path.endswith(".md") and not is_generated(path)


def select_all(root: Path) -> ChangeSet:
    notes = [classify(path, root) for path in list_note_paths(root) if _is_candidate(path)]
    logger.info("Full rescan: %d notes", len(notes))
    return ChangeSet(full=True, notes=notes)


def select_changed(root: Path, marker: str, tracker: RevisionTracker) -> ChangeSet:
    candidates = {
        path
        for path in tracker.list_untracked_files() | tracker.list_changed_files_since(marker)
        if _is_candidate(path)
    }

    changes = ChangeSet(full=False)
    for path in sorted(candidates):
        if (root / path).exists():
            changes.notes.append(classify(path, root))
        else:
            logger.debug("Changed note no longer exists: %s", path)
            changes.removed.add(path)

    logger.info(
        "Incremental rescan since %s: %d changed, %d removed",
        marker[:12],
        len(changes.notes),
        len(changes.removed),
    )
    return changes


def select_notes_to_process(
    state: JournalState, root: Path, tracker: RevisionTracker
) -> ChangeSet:
    """Pick the notes to rescan for this pass."""
    if not state.hash:
        return select_all(root)
    return select_changed(root, state.hash, tracker)
