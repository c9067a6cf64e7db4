"""Per-tree settings loaded from journal-config.yaml.

Environment variables give the defaults; a journal-config.yaml at the tree
root overrides them for that tree only.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from notejournal.core import config
from notejournal.core.errors import ConfigError

logger = logging.getLogger(__name__)


class JournalConfig(BaseModel):
    """Typed configuration for one journal tree.

    Frozen to prevent accidental mutation.
    Extra fields are forbidden to catch typos in config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    editor: str | None = None
    retention_months: int = Field(default_factory=lambda: config.RETENTION_MONTHS, ge=0)
    auto_commit: bool = Field(default_factory=lambda: config.AUTO_COMMIT)


class JournalConfigLoader:
    """Loads journal-config.yaml from a tree root.

    Example:
        loader = JournalConfigLoader("~/journal")
        settings = loader.load()
    """

    def __init__(self, path: Path | str):
        self.root = Path(path).expanduser().resolve()
        self.config_file = self.root / config.CONFIG_FILENAME
        self._config: JournalConfig | None = None

    def load(self) -> JournalConfig:
        """Load configuration, falling back to environment defaults.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        if self._config is not None:
            logger.debug("Returning cached config")
            return self._config

        if not self.config_file.exists():
            logger.debug("No config file at %s", self.config_file)
            self._config = JournalConfig()
            return self._config

        try:
            with open(self.config_file, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("Invalid YAML in %s: %s", self.config_file, e)
            raise ConfigError(f"Invalid YAML in {self.config_file}: {e}") from e

        if raw is None:
            self._config = JournalConfig()
            return self._config

        if not isinstance(raw, dict):
            raise ConfigError(
                f"{config.CONFIG_FILENAME} must be a mapping, got {type(raw).__name__}"
            )

        try:
            self._config = JournalConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid {config.CONFIG_FILENAME}: {e}") from e
        logger.info(
            "Journal config loaded: editor=%s, retention_months=%d, auto_commit=%s",
            self._config.editor,
            self._config.retention_months,
            self._config.auto_commit,
        )
        return self._config

    def reload(self) -> JournalConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    @property
    def exists(self) -> bool:
        return self.config_file.exists()

    def __repr__(self) -> str:
        return f"JournalConfigLoader({self.root})"
