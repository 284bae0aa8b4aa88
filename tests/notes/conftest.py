"""Shared fixtures for notes tests."""

from datetime import date, datetime, timedelta

import pytest

from devnotes.notes.collection import NoteCollection
from devnotes.notes.events import EventBus
from devnotes.notes.manager import NoteManager
from devnotes.notes.models import (
    Note,
    ProgrammingDetails,
    TestingDetails,
    TestStatus,
)
from devnotes.notes.storage import SnapshotStorage


@pytest.fixture
def created_at():
    """Fixed creation timestamp."""
    return datetime(2024, 3, 14, 9, 26, 53, 589793)


@pytest.fixture
def sample_note_data(created_at):
    """Create sample note data."""
    return {
        "title": "Refactor parser",
        "description": "Split tokenizer from parser",
        "text": "Tokenizer should stream tokens lazily.",
        "author": "Ada",
        "created_at": created_at,
        "deadline": date(2024, 3, 20),
    }


@pytest.fixture
def note_factory(created_at):
    """Factory for creating Note instances."""

    def _create_note(**kwargs):
        kwargs.setdefault("title", "Test note")
        kwargs.setdefault("created_at", created_at)
        return Note(**kwargs)

    return _create_note


@pytest.fixture
def programming_note(note_factory):
    """A programming note."""
    return note_factory(
        title="Loop Fix",
        description="Off by one",
        text="Loop runs one time too many",
        author="Grace",
        deadline=date(2024, 3, 15),
        details=ProgrammingDetails(language="Go", coding_snippet="for i:=0;i<n;i++"),
    )


@pytest.fixture
def testing_note(note_factory, created_at):
    """A testing note."""
    return note_factory(
        title="Login smoke test",
        description="Login page",
        text="User can sign in",
        author="Linus",
        created_at=created_at + timedelta(seconds=1),
        details=TestingDetails(
            test_case="valid credentials", is_mandatory=True, status=TestStatus.PENDING
        ),
    )


@pytest.fixture
def mixed_notes(note_factory, programming_note, testing_note, created_at):
    """Notes of every kind, some with version history."""
    plain = note_factory(title="Plain", created_at=created_at - timedelta(days=1))
    plain.save_version()
    plain.text = "Edited text"
    plain.save_version()
    plain.revert_version()

    testing_note.update(status=TestStatus.FAILED)

    return [plain, programming_note, testing_note]


@pytest.fixture
def snapshot_path(tmp_path):
    """Path of a snapshot file in a temporary directory."""
    return tmp_path / "data" / "notes.snapshot"


@pytest.fixture
def storage(snapshot_path):
    """Create snapshot storage in a temporary directory."""
    return SnapshotStorage(snapshot_path)


@pytest.fixture
def collection():
    """Create an empty collection."""
    return NoteCollection()


@pytest.fixture
def event_bus():
    """Create an event bus."""
    return EventBus()


@pytest.fixture
def manager(storage, collection, event_bus):
    """Create a NoteManager backed by a temporary snapshot."""
    manager = NoteManager(storage, collection, event_bus)
    yield manager
    manager.close()
