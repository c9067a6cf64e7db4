"""Journal engine: one processing pass over the note tree.

A pass loads the persisted state, asks the change detector which notes to
look at, rescans them, then writes the state file and the rendered index
together. Nothing is written if any step fails.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from notejournal.core import config
from notejournal.core.changes import ChangeSet, select_all, select_notes_to_process
from notejournal.core.errors import JournalError
from notejournal.core.notes import is_generated, match_diary_path
from notejournal.core.render import render, render_diary_index
from notejournal.core.scanner import scan
from notejournal.core.settings import JournalConfig, JournalConfigLoader
from notejournal.core.state import (
    JournalState,
    load_state,
    state_path,
    temp_sibling,
)
from notejournal.core.types import Note
from notejournal.git import GitRepository, Repository

logger = logging.getLogger(__name__)


def months_old(entry: date, today: date) -> int:
    """Whole calendar months between ``entry``'s month and ``today``'s month."""
    return (today.year * 12 + today.month) - (entry.year * 12 + entry.month)


class Journal:
    """Owns the aggregated state of one journal tree.

    Example:
        journal = Journal.open("~/journal")
        journal.process_changes()
        journal.write()
    """

    def __init__(
        self,
        root: Path | str,
        state: JournalState | None = None,
        repo: Repository | None = None,
        settings: JournalConfig | None = None,
        today: date | None = None,
    ):
        self.root = Path(root).expanduser().resolve()
        self.state = state if state is not None else JournalState()
        self.repo = repo if repo is not None else GitRepository(self.root)
        self.settings = settings if settings is not None else JournalConfig()
        self._today = today
        self._archive_pending = False

    @classmethod
    def open(cls, root: Path | str, repo: Repository | None = None) -> "Journal":
        """Load state and per-tree settings for ``root``."""
        root_path = Path(root).expanduser().resolve()
        settings = JournalConfigLoader(root_path).load()
        state = load_state(root_path)
        if settings.editor:
            state.editor = settings.editor
        return cls(root_path, state=state, repo=repo, settings=settings)

    @property
    def index_path(self) -> Path:
        return self.root / config.INDEX_FILENAME

    @property
    def archive_path(self) -> Path:
        return self.root / config.ARCHIVE_FILENAME

    @property
    def today(self) -> date:
        return self._today or date.today()

    # --- Scanning ---

    def process_note(self, note: Note) -> None:
        """Rescan one note and replace its slot in the state."""
        if is_generated(note.path):
            return
        try:
            text = (self.root / note.path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            if self.state.purge_note(note.path):
                logger.info("Removed tags of deleted note %s", note.path)
            return
        except OSError as e:
            raise JournalError(f"Error processing '{note.path}': {e}") from e

        result = scan(note, text)
        self.state.replace_note(note.path, result)
        logger.debug("Scanned %s: %d tags", note.path, len(result))

    def archive_diary_entry(self, note: Note) -> None:
        """Record an aged diary entry in the month index."""
        parts = match_diary_path(note.path)
        if parts is None:
            return
        year, month, day = parts
        if months_old(note.baseline_time.date(), self.today) > self.settings.retention_months:
            self.state.add_diary_entry(f"{year}-{month}", day, note.path)

    def apply(self, changes: ChangeSet) -> None:
        """Apply a change set to the state."""
        if changes.full:
            self.state.reset()
            self._archive_pending = True
        for note in changes.notes:
            self.process_note(note)
            if changes.full and note.is_diary:
                self.archive_diary_entry(note)
        for path in sorted(changes.removed):
            if self.state.purge_note(path):
                logger.info("Removed tags of deleted note %s", path)

    def process_changes(self) -> ChangeSet:
        """Rescan what changed since the last synchronized revision."""
        changes = select_notes_to_process(self.state, self.root, self.repo)
        self.apply(changes)
        return changes

    def process_all(self) -> ChangeSet:
        """Rescan the whole tree regardless of the recorded revision."""
        changes = select_all(self.root)
        self.apply(changes)
        return changes

    # --- Output ---

    def render_index(self) -> str:
        return render(self.state)

    def write(self) -> None:
        """Write the state file and the index together.

        The archive is written too when a full rescan rebuilt it since the
        last write. Every document is rendered to a temporary sibling first;
        the final files are only replaced once all of them were written.
        """
        outputs = {
            state_path(self.root): self.state.to_json() + "\n",
            self.index_path: self.render_index(),
        }
        if self._archive_pending:
            outputs[self.archive_path] = render_diary_index(self.state)
        staged: list[tuple[Path, Path]] = []
        try:
            for path, content in outputs.items():
                tmp = temp_sibling(path)
                tmp.write_text(content, encoding="utf-8")
                staged.append((tmp, path))
        except OSError as e:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise JournalError(f"Failed to write journal files: {e}") from e

        for tmp, path in staged:
            tmp.replace(path)
        self._archive_pending = False
        counts = self.state.counts()
        logger.info(
            "Wrote %s: %s",
            self.index_path.name,
            ", ".join(f"{c.value}={n}" for c, n in counts.items()),
        )

    # --- Synchronization ---

    def commit(self, message: str | None = None) -> bool:
        """Commit pending changes, recording the pre-commit revision as the marker.

        Returns False when the tree had nothing to commit.
        """
        self.repo.stage_all()
        if not self.repo.has_pending_changes():
            logger.debug("Tree is clean, nothing to commit")
            return False
        self.state.hash = self.repo.current_revision_id()
        self.write()
        return self.repo.commit(message or datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    def push(self) -> None:
        """Commit, rebase onto the remote, and push."""
        self.commit()
        self.repo.pull()
        self.repo.push()

    def sync(self, full: bool = False) -> ChangeSet:
        """One complete pass: scan, write, and commit when enabled."""
        changes = self.process_all() if full else self.process_changes()
        self.write()
        if self.settings.auto_commit:
            self.commit()
        return changes
