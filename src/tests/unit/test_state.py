"""Tests for notejournal.core.state."""

import json
from datetime import datetime

import pytest

from notejournal.core.errors import StateError
from notejournal.core.scanner import ScanResult
from notejournal.core.state import JournalState, load_state, state_path
from notejournal.core.types import Category, Tag


def make_tag(path: str, category: Category, line_no: int = 1, hour: int = 9) -> Tag:
    return Tag(
        time=datetime(2024, 3, 5, hour, 0, 0),
        line_no=line_no,
        category=category,
        text=f"{category.marker} line {line_no}",
        path=path,
    )


class TestReplaceNote:
    """Tests for JournalState.replace_note()."""

    def test_replace_overwrites_previous_tags(self):
        state = JournalState()
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO, 1)]))
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO, 7)]))

        assert [t.line_no for t in state.todos["a.md"]] == [7]

    def test_empty_categories_drop_the_note(self):
        """A note with no tags in a category is absent from that mapping."""
        state = JournalState()
        state.replace_note(
            "a.md",
            ScanResult(
                doings=[make_tag("a.md", Category.DOING)],
                laters=[make_tag("a.md", Category.LATER)],
            ),
        )
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO)]))

        assert "a.md" not in state.doings
        assert "a.md" not in state.laters
        assert "a.md" in state.todos

    def test_replace_leaves_other_notes_alone(self):
        state = JournalState()
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO)]))
        state.replace_note("b.md", ScanResult())

        assert "a.md" in state.todos
        assert "b.md" not in state.todos


class TestPurgeNote:
    """Tests for JournalState.purge_note()."""

    def test_purge_removes_from_all_categories(self):
        state = JournalState()
        state.replace_note(
            "a.md",
            ScanResult(
                doings=[make_tag("a.md", Category.DOING)],
                todos=[make_tag("a.md", Category.TODO)],
                laters=[make_tag("a.md", Category.LATER)],
            ),
        )

        assert state.purge_note("a.md") is True
        assert state.tracked_paths() == set()

    def test_purge_unknown_note(self):
        assert JournalState().purge_note("nope.md") is False


class TestReset:
    def test_reset_keeps_marker_and_editor(self):
        state = JournalState(hash="abc", editor="nano")
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO)]))
        state.add_diary_entry("2024-01", "02", "2024/01/2024-01-02.md")

        state.reset()

        assert state.hash == "abc"
        assert state.editor == "nano"
        assert state.todos == {}
        assert state.diary == {}


class TestCounts:
    def test_counts_per_category(self):
        state = JournalState()
        state.replace_note(
            "a.md",
            ScanResult(todos=[make_tag("a.md", Category.TODO, 1), make_tag("a.md", Category.TODO, 2)]),
        )
        state.replace_note("b.md", ScanResult(laters=[make_tag("b.md", Category.LATER)]))

        assert state.counts() == {Category.DOING: 0, Category.TODO: 2, Category.LATER: 1}


class TestPersistence:
    """Tests for load_state() and the on-disk format."""

    def test_missing_file_gives_fresh_state(self, journal_root):
        state = load_state(journal_root)

        assert state.hash == ""
        assert state.editor
        assert state.tracked_paths() == set()

    def test_json_uses_legacy_keys(self):
        state = JournalState(hash="abc123")
        state.replace_note("a.md", ScanResult(todos=[make_tag("a.md", Category.TODO, 3)]))
        state.add_diary_entry("2024-01", "02", "2024/01/2024-01-02.md")

        data = json.loads(state.to_json())

        assert set(data) == {"Hash", "Editor", "Doings", "Todos", "Laters", "Diary"}
        assert data["Hash"] == "abc123"
        assert data["Todos"]["a.md"] == [
            {"Time": "2024-03-05T09:00:00", "LineNo": 3, "Tag": "TODO", "Text": "*TODO* line 3"}
        ]
        assert data["Diary"] == {"2024-01": [["02", "2024/01/2024-01-02.md"]]}

    def test_round_trip_restores_paths(self, journal_root):
        state = JournalState(hash="abc123", editor="vim")
        state.replace_note("a.md", ScanResult(doings=[make_tag("a.md", Category.DOING)]))
        state_path(journal_root).write_text(state.to_json(), encoding="utf-8")

        loaded = load_state(journal_root)

        assert loaded == state
        assert loaded.doings["a.md"][0].path == "a.md"

    def test_loads_state_written_by_older_versions(self, journal_root):
        """Null maps, empty Tag fields and zoned timestamps are accepted."""
        legacy = {
            "Hash": "deadbeef",
            "Editor": "lvim",
            "Doings": None,
            "Todos": {
                "2024/03/2024-03-05.md": [
                    {
                        "Time": "2024-03-05T09:00:00Z",
                        "LineNo": 3,
                        "Tag": "",
                        "Text": "buy milk",
                    }
                ]
            },
            "Laters": {},
            "Diary": None,
        }
        state_path(journal_root).write_text(json.dumps(legacy), encoding="utf-8")

        state = load_state(journal_root)

        assert state.hash == "deadbeef"
        assert state.doings == {}
        assert state.diary == {}
        tag = state.todos["2024/03/2024-03-05.md"][0]
        assert tag.category is Category.TODO
        assert tag.time.tzinfo is None

    @pytest.mark.parametrize(
        "content,match",
        [
            ("{not json", "Invalid JSON"),
            ("[1, 2]", "must contain a JSON object"),
            ('{"Todos": {"a.md": [{"LineNo": "x"}]}}', "Invalid journal state"),
        ],
    )
    def test_corrupt_state_is_fatal(self, journal_root, content, match):
        state_path(journal_root).write_text(content, encoding="utf-8")

        with pytest.raises(StateError, match=match):
            load_state(journal_root)
