"""Revision tracking and synchronization through git.

The engine only depends on the RevisionTracker protocol; GitRepository is
the implementation used against a real tree.
"""

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from notejournal.core.errors import GitError

logger = logging.getLogger(__name__)


@runtime_checkable
class RevisionTracker(Protocol):
    """What the change detector needs from version control.

    All paths are relative to the tree root and forward-slash separated.
    """

    def list_untracked_files(self) -> set[str]:
        ...

    def list_changed_files_since(self, marker: str) -> set[str]:
        ...

    def current_revision_id(self) -> str:
        ...


@runtime_checkable
class Repository(RevisionTracker, Protocol):
    """Revision tracking plus the operations that persist and share the tree."""

    def stage_all(self) -> None:
        ...

    def has_pending_changes(self) -> bool:
        ...

    def commit(self, message: str | None = None) -> bool:
        ...

    def pull(self) -> None:
        ...

    def push(self) -> None:
        ...


def _split_nul(output: str) -> set[str]:
    return {item for item in output.split("\0") if item}


class GitRepository:
    """Runs git against the journal tree."""

    def __init__(self, root: Path | str, timeout_s: float = 60.0):
        self.root = Path(root)
        self.timeout_s = timeout_s

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = ["git", "-C", str(self.root), *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                text=True,
                capture_output=True,
                check=False,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise GitError(list(args), -1, str(e)) from e
        if check and proc.returncode != 0:
            raise GitError(list(args), proc.returncode, proc.stderr or "")
        return proc

    def is_repo(self) -> bool:
        proc = self._run("rev-parse", "--is-inside-work-tree", check=False)
        return proc.returncode == 0 and proc.stdout.strip() == "true"

    def list_untracked_files(self) -> set[str]:
        proc = self._run("ls-files", "-z", "--others", "--exclude-standard", ".")
        return _split_nul(proc.stdout)

    def list_changed_files_since(self, marker: str) -> set[str]:
        proc = self._run("diff", "-z", "--name-only", "--relative", marker)
        return _split_nul(proc.stdout)

    def current_revision_id(self) -> str:
        """HEAD's commit id, or an empty string for a repository without commits."""
        proc = self._run("rev-parse", "HEAD", check=False)
        if proc.returncode != 0:
            logger.debug("No HEAD revision yet: %s", proc.stderr.strip())
            return ""
        return proc.stdout.strip()

    def has_pending_changes(self) -> bool:
        proc = self._run("status", "--porcelain")
        return bool(proc.stdout.strip())

    def stage_all(self) -> None:
        self._run("add", ".")

    def commit(self, message: str | None = None) -> bool:
        """Stage everything and commit. Returns False when there was nothing to commit."""
        self.stage_all()
        if not self.has_pending_changes():
            logger.debug("Nothing to commit")
            return False
        msg = message or datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self._run("commit", "-m", msg)
        logger.info("Committed journal changes: %s", msg)
        return True

    def pull(self) -> None:
        self._run("pull", "--rebase")

    def push(self) -> None:
        self._run("push")
