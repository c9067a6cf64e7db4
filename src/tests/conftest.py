"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path

import pytest

from notejournal.core.journal import Journal
from notejournal.core.settings import JournalConfig


class FakeRepo:
    """In-memory stand-in for GitRepository.

    Tests set ``untracked``/``changed`` to what git would report and inspect
    ``commits``/``pulled``/``pushed`` afterwards.
    """

    def __init__(self, revision: str = "rev-1"):
        self.revision = revision
        self.untracked: set[str] = set()
        self.changed: set[str] = set()
        self.pending = True
        self.commits: list[str | None] = []
        self.diff_markers: list[str] = []
        self.pulled = False
        self.pushed = False

    def list_untracked_files(self) -> set[str]:
        return set(self.untracked)

    def list_changed_files_since(self, marker: str) -> set[str]:
        self.diff_markers.append(marker)
        return set(self.changed)

    def current_revision_id(self) -> str:
        return self.revision

    def stage_all(self) -> None:
        pass

    def has_pending_changes(self) -> bool:
        return self.pending

    def commit(self, message: str | None = None) -> bool:
        self.commits.append(message)
        self.pending = False
        return True

    def pull(self) -> None:
        self.pulled = True

    def push(self) -> None:
        self.pushed = True


@pytest.fixture
def journal_root(tmp_path):
    """Provide an empty journal tree."""
    root = tmp_path / "journal"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def write_note(journal_root):
    """Factory that writes a note under the journal tree.

    ``mtime`` pins the modification time of plain notes.
    """

    def _write_note(rel_path: str, content: str, mtime: datetime | None = None) -> Path:
        path = journal_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if mtime is not None:
            ts = mtime.timestamp()
            os.utime(path, (ts, ts))
        return path

    return _write_note


@pytest.fixture
def fake_repo():
    return FakeRepo()


@pytest.fixture
def make_journal(journal_root, fake_repo):
    """Factory for a Journal on the temp tree with a fake repository."""

    def _make_journal(
        today: date = date(2024, 7, 15),
        retention_months: int = 3,
        auto_commit: bool = True,
    ) -> Journal:
        return Journal(
            journal_root,
            repo=fake_repo,
            settings=JournalConfig(retention_months=retention_months, auto_commit=auto_commit),
            today=today,
        )

    return _make_journal


@pytest.fixture
def sample_diary():
    """Diary entry from the documented end-to-end scenario."""
    return "# Note 2024-03-05\n## 09:00:00\nbuy milk *TODO*\n"
