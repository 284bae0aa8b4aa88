"""Tests for version history."""

import pytest

from devnotes.notes.versions import VersionStack


class TestVersionStack:
    """Test the cursor state machine."""

    def test_initial_state(self):
        stack = VersionStack()

        assert len(stack) == 0
        assert stack.cursor is None
        assert stack.current is None

    def test_navigation_on_empty_stack(self):
        stack = VersionStack()

        assert stack.next() is None
        assert stack.previous() is None
        assert stack.cursor is None

    def test_push_moves_cursor_to_last(self):
        stack = VersionStack()

        stack.push("a")
        assert stack.cursor == 0
        stack.push("b")
        assert stack.cursor == 1
        assert stack.current == "b"

    def test_push_after_revert_appends(self):
        stack = VersionStack(["a", "b", "c"])
        stack.previous()
        stack.previous()

        stack.push("d")

        assert stack.items() == ["a", "b", "c", "d"]
        assert stack.cursor == 3

    def test_previous_and_next(self):
        stack = VersionStack(["s1", "s2"])

        assert stack.previous() == "s1"
        assert stack.previous() == "s1"
        assert stack.cursor == 0
        assert stack.next() == "s2"
        assert stack.next() == "s2"
        assert stack.cursor == 1

    def test_single_version_is_clamped_both_ways(self):
        stack = VersionStack(["only"])

        assert stack.previous() == "only"
        assert stack.next() == "only"
        assert stack.cursor == 0

    def test_items_is_a_copy(self):
        stack = VersionStack(["a"])

        items = stack.items()
        items.append("b")

        assert len(stack) == 1

    def test_explicit_cursor(self):
        stack = VersionStack(["a", "b", "c"], cursor=1)

        assert stack.current == "b"

    @pytest.mark.parametrize("cursor", [-1, 3])
    def test_cursor_out_of_range(self, cursor):
        with pytest.raises(ValueError):
            VersionStack(["a", "b", "c"], cursor=cursor)

    def test_cursor_on_empty_stack_rejected(self):
        with pytest.raises(ValueError):
            VersionStack([], cursor=0)

    def test_copy_is_independent(self):
        stack = VersionStack([["a"], ["b"]], cursor=0)

        copied = stack.copy(list)
        copied.current.append("changed")
        copied.push(["c"])

        assert stack.items() == [["a"], ["b"]]
        assert copied.cursor == 2
        assert stack.cursor == 0

    def test_equality(self):
        assert VersionStack(["a", "b"], 0) == VersionStack(["a", "b"], 0)
        assert VersionStack(["a", "b"], 0) != VersionStack(["a", "b"], 1)


class TestNoteVersions:
    """Test versioning through the note API."""

    def test_revert_and_next(self, note_factory):
        note = note_factory(text="first")
        s1 = note.snapshot()
        note.text = "second"
        s2 = note.snapshot()

        note.save_version(s1)
        note.save_version(s2)

        assert note.revert_version() == s1
        assert note.revert_version() == s1
        assert note.next_version() == s2

    def test_no_versions(self, note_factory):
        note = note_factory()

        assert note.next_version() is None
        assert note.revert_version() is None
        assert note.current_version is None
        assert note.version_index is None
        assert note.all_versions() == []

    def test_save_version_copies_state(self, note_factory):
        note = note_factory(text="before")

        note.save_version()
        note.text = "after"

        assert note.current_version.text == "before"

    def test_save_version_copies_given_snapshot(self, note_factory):
        note = note_factory()
        other = note_factory(title="Other")

        note.save_version(other)
        other.title = "Changed"

        assert note.current_version.title == "Other"

    def test_saved_versions_carry_no_nested_history(self, note_factory):
        note = note_factory()
        note.save_version()
        note.save_version()

        assert all(v.version_count == 0 for v in note.all_versions())

    def test_all_versions_returns_copies(self, note_factory):
        note = note_factory(text="kept")
        note.save_version()

        versions = note.all_versions()
        versions[0].text = "mutated"
        versions.clear()

        assert note.version_count == 1
        assert note.current_version.text == "kept"

    def test_version_is_same_note(self, note_factory):
        note = note_factory()
        note.save_version()

        assert note.current_version.is_same_note(note)
