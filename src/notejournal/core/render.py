"""Rendering of the aggregated state into markdown documents."""

from notejournal.core.state import JournalState
from notejournal.core.types import Category, Tag


def sorted_tags(mapping: dict[str, list[Tag]]) -> list[Tag]:
    """All tags of one category, most recent first.

    Ties keep path order, then line order.
    """
    tags = [tag for path in sorted(mapping) for tag in mapping[path]]
    return sorted(tags, key=lambda t: t.time, reverse=True)


def render(state: JournalState) -> str:
    """Render the DOING/TODO/LATER index."""
    sections = []
    for category in Category:
        lines = [f"# {category.value}", ""]
        lines.extend(tag.text for tag in sorted_tags(state.tags_for(category)))
        sections.append("\n".join(lines) + "\n")
    return "\n".join(sections)


def render_diary_index(state: JournalState) -> str:
    """Render the archive of aged diary entries, newest month first."""
    lines = ["# ARCHIVE", ""]
    for month_key in sorted(state.diary, reverse=True):
        lines.append(f"## {month_key}")
        lines.append("")
        for day, path in sorted(state.diary[month_key]):
            lines.append(f"- [{day}]({path})")
        lines.append("")
    return "\n".join(lines)
