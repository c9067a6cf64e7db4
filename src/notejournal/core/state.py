"""Aggregated journal state persisted as .journal.json at the tree root."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from notejournal.core.config import DEFAULT_EDITOR, STATE_FILENAME
from notejournal.core.errors import StateError
from notejournal.core.scanner import ScanResult
from notejournal.core.types import Category, Tag

logger = logging.getLogger(__name__)

_CATEGORY_KEYS = {
    "Doings": Category.DOING,
    "Todos": Category.TODO,
    "Laters": Category.LATER,
}


class JournalState(BaseModel):
    """Everything the engine remembers between runs.

    ``doings``/``todos``/``laters`` map a note path to that note's tags in
    line order. A path with no tags in a category is absent from that
    category's mapping. ``diary`` maps ``YYYY-MM`` to ``(day, path)`` pairs
    for archived diary entries. ``hash`` is the last synchronized revision;
    empty means never synchronized.
    """

    model_config = ConfigDict(populate_by_name=True)

    hash: str = Field(default="", alias="Hash")
    editor: str = Field(default=DEFAULT_EDITOR, alias="Editor")
    doings: dict[str, list[Tag]] = Field(default_factory=dict, alias="Doings")
    todos: dict[str, list[Tag]] = Field(default_factory=dict, alias="Todos")
    laters: dict[str, list[Tag]] = Field(default_factory=dict, alias="Laters")
    diary: dict[str, list[tuple[str, str]]] = Field(default_factory=dict, alias="Diary")

    @model_validator(mode="before")
    @classmethod
    def _fill_legacy_fields(cls, data):
        # Older state files carry null maps and tags with an empty "Tag".
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("Diary") is None:
            data.pop("Diary", None)
        for key, category in _CATEGORY_KEYS.items():
            mapping = data.get(key)
            if mapping is None:
                data.pop(key, None)
                continue
            if not isinstance(mapping, dict):
                continue
            data[key] = {
                path: [
                    {**tag, "Tag": tag.get("Tag") or category.value}
                    if isinstance(tag, dict)
                    else tag
                    for tag in tags
                ]
                if isinstance(tags, list)
                else tags
                for path, tags in mapping.items()
            }
        return data

    @model_validator(mode="after")
    def _attach_paths(self) -> "JournalState":
        for mapping in (self.doings, self.todos, self.laters):
            for path, tags in mapping.items():
                mapping[path] = [
                    tag if tag.path == path else tag.model_copy(update={"path": path})
                    for tag in tags
                ]
        return self

    def tags_for(self, category: Category) -> dict[str, list[Tag]]:
        """The path -> tags mapping for one category."""
        if category is Category.DOING:
            return self.doings
        if category is Category.TODO:
            return self.todos
        return self.laters

    def replace_note(self, path: str, result: ScanResult) -> None:
        """Overwrite a note's slot in every category with a fresh scan.

        Categories where the scan found nothing lose the note entirely.
        """
        for category in Category:
            mapping = self.tags_for(category)
            tags = result.for_category(category)
            if tags:
                mapping[path] = list(tags)
            else:
                mapping.pop(path, None)

    def purge_note(self, path: str) -> bool:
        """Remove a note from every category. Returns True if anything was removed."""
        removed = False
        for category in Category:
            if self.tags_for(category).pop(path, None) is not None:
                removed = True
        return removed

    def reset(self) -> None:
        """Forget all tags and the archive index, keeping marker and editor."""
        self.doings = {}
        self.todos = {}
        self.laters = {}
        self.diary = {}

    def add_diary_entry(self, month_key: str, day: str, path: str) -> None:
        self.diary.setdefault(month_key, []).append((day, path))

    def tracked_paths(self) -> set[str]:
        """Every note path that currently has at least one tag."""
        return set(self.doings) | set(self.todos) | set(self.laters)

    def counts(self) -> dict[Category, int]:
        return {
            category: sum(len(tags) for tags in self.tags_for(category).values())
            for category in Category
        }

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def state_path(root: Path) -> Path:
    return root / STATE_FILENAME


def load_state(root: Path) -> JournalState:
    """Read the state file, or return a fresh state when there is none.

    Raises:
        StateError: The file exists but cannot be read or validated.
    """
    path = state_path(root)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No state file at %s, starting fresh", path)
        return JournalState()
    except OSError as e:
        raise StateError(f"Failed to read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StateError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise StateError(f"{path} must contain a JSON object, got {type(data).__name__}")

    try:
        state = JournalState.model_validate(data)
    except ValidationError as e:
        raise StateError(f"Invalid journal state in {path}: {e}") from e
    logger.debug("Loaded state from %s (hash=%s)", path, state.hash or "<none>")
    return state


def temp_sibling(path: Path) -> Path:
    return path.with_name(f".{path.name}.tmp.{os.getpid()}")

