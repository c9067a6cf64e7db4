"""Line scanner that extracts DOING/TODO/LATER tags from a note.

A note is read top to bottom. ``## HH:MM:SS`` headings move the current
timestamp forward within the note's date; every line that contains a marker
token becomes a Tag stamped with that timestamp, and the marker is rewritten
into a link back to the heading.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime

from notejournal.core.errors import ScanError
from notejournal.core.types import Category, Note, Tag

TIME_HEADING_PATTERN = re.compile(r"^##\s+(\d\d:\d\d:\d\d)\s*$")

_MARKERS = {category.marker: category for category in Category}


@dataclass
class ScanResult:
    """Tags found in one note, one list per category, in line order."""

    doings: list[Tag] = field(default_factory=list)
    todos: list[Tag] = field(default_factory=list)
    laters: list[Tag] = field(default_factory=list)

    def for_category(self, category: Category) -> list[Tag]:
        if category is Category.DOING:
            return self.doings
        if category is Category.TODO:
            return self.todos
        return self.laters

    def __len__(self) -> int:
        return len(self.doings) + len(self.todos) + len(self.laters)


def marker_link(category: Category, path: str, clock: str) -> str:
    """Markdown link that replaces a marker token, e.g. ``*[TODO](a.md#09:00:00)*``."""
    return f"*[{category.value}]({path}#{clock})*"


def _parse_clock(note: Note, clock: str) -> datetime:
    day = note.baseline_time.strftime("%Y-%m-%d")
    try:
        return datetime.strptime(f"{day}T{clock}", "%Y-%m-%dT%H:%M:%S")
    except ValueError as e:
        raise ScanError(f"Invalid time heading '{clock}' in '{note.path}'") from e


def scan(note: Note, text: str) -> ScanResult:
    """Extract tags from ``text``, which is the content of ``note``.

    Pure: the same note and text always produce the same result.

    Raises:
        ScanError: A time heading names an impossible time of day.
    """
    result = ScanResult()
    current = note.baseline_time
    clock = current.strftime("%H:%M:%S")

    # Only "\n" ends a line; form feeds and other separators stay inline.
    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        heading = TIME_HEADING_PATTERN.match(line)
        if heading:
            clock = heading.group(1)
            current = _parse_clock(note, clock)
            continue

        matched: list[Category] = []
        words: list[str] = []
        for word in line.split():
            category = _MARKERS.get(word)
            if category is None:
                words.append(word)
                continue
            if category not in matched:
                matched.append(category)
            words.append(marker_link(category, note.path, clock))

        if not matched:
            continue

        rendered = " ".join(words)
        for category in matched:
            result.for_category(category).append(
                Tag(
                    time=current,
                    line_no=line_no,
                    category=category,
                    text=rendered,
                    path=note.path,
                )
            )

    return result
