"""Launch the configured text editor on a journal file."""

import logging
import shlex
import subprocess
from pathlib import Path

from notejournal.core.errors import JournalError

logger = logging.getLogger(__name__)


class EditorError(JournalError):
    """The editor could not be started or exited with an error."""

    pass


def open_in_editor(editor: str, path: Path) -> None:
    """Run ``editor`` on ``path`` in the foreground, attached to the terminal."""
    cmd = [*shlex.split(editor), str(path)]
    if len(cmd) < 2:
        raise EditorError("No editor configured")
    logger.debug("Launching editor: %s", cmd)
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        raise EditorError(f"Failed to run editor '{editor}': {e}") from e
    if result.returncode != 0:
        raise EditorError(f"Editor exited with code {result.returncode}")
