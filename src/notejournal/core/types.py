"""Shared types and data structures for notejournal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(StrEnum):
    """Annotation categories, in index order."""

    DOING = "DOING"
    TODO = "TODO"
    LATER = "LATER"

    @property
    def marker(self) -> str:
        """The whitespace-isolated token that flags a line, e.g. ``*TODO*``."""
        return f"*{self.value}*"


class NoteKind(Enum):
    """How a note's baseline timestamp is derived."""

    PLAIN_TEXT = "plain_text"
    DIARY_ENTRY = "diary_entry"


@dataclass(frozen=True)
class Note:
    """A single file in the journal tree.

    ``path`` is relative to the tree root and forward-slash separated.
    """

    path: str
    kind: NoteKind
    baseline_time: datetime

    @property
    def is_diary(self) -> bool:
        return self.kind is NoteKind.DIARY_ENTRY


class Tag(BaseModel):
    """One DOING/TODO/LATER occurrence inside a note.

    Serialized with the field names of the on-disk state file; the owning
    path is implied by the mapping key and is not written.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time: datetime = Field(alias="Time")
    line_no: int = Field(alias="LineNo", ge=1)
    category: Category = Field(alias="Tag")
    text: str = Field(alias="Text")
    path: str = Field(default="", exclude=True)

    @field_validator("time")
    @classmethod
    def _as_naive_local(cls, value: datetime) -> datetime:
        # Timestamps are compared as naive local times; aware values from
        # older state files are converted.
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
