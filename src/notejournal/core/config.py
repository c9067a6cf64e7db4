"""Configuration management for notejournal."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    value = os.getenv(key)
    if value is None:
        if default is not None:
            logger.warning("%s not set, falling back to default value", key)
        return default
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", key, value, default)
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# Journal tree root
JOURNAL_DIR = Path(
    os.getenv("JOURNAL_DIR") or os.path.expanduser("~/journal")
).expanduser()

# Files living at the tree root
STATE_FILENAME = ".journal.json"
INDEX_FILENAME = "index.md"
ARCHIVE_FILENAME = "archive.md"
CONFIG_FILENAME = "journal-config.yaml"

# Directory skipped when walking the tree
VCS_DIRNAME = ".git"

# Editor used when the state file does not name one
DEFAULT_EDITOR = os.getenv("JOURNAL_EDITOR") or "lvim"

# Diary entries older than this many months go to the archive index
RETENTION_MONTHS = get_env_int("JOURNAL_RETENTION_MONTHS", 3)

# Commit the tree through git after each pass
AUTO_COMMIT = get_env_bool("JOURNAL_AUTO_COMMIT", True)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    level_name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return logging.getLogger("notejournal")


def resolve_journal_dir(path: str | Path | None = None) -> Path:
    """Resolve the tree root from an explicit path, $JOURNAL_DIR, or the default."""
    if path:
        return Path(path).expanduser().resolve()
    env_dir = get_env("JOURNAL_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return JOURNAL_DIR.resolve()
