"""Notes module.

This module provides the note model with its plain, programming and testing
variants, per-note version history, an in-memory collection and snapshot
persistence that runs in the background.
"""

from devnotes.notes.collection import NoteCollection
from devnotes.notes.events import Event, EventBus, EventType
from devnotes.notes.exceptions import (
    NoteError,
    SnapshotNotFoundError,
    StorageCorruptionError,
    StorageError,
    TitleLengthExceeded,
)
from devnotes.notes.manager import NoteManager
from devnotes.notes.models import (
    MAX_TITLE_LENGTH,
    Note,
    NoteKind,
    NoteRecord,
    PlainDetails,
    ProgrammingDetails,
    TestingDetails,
    TestStatus,
)
from devnotes.notes.persistence import PersistenceResult, PersistenceWorker
from devnotes.notes.storage import SnapshotStorage
from devnotes.notes.versions import VersionStack

__all__ = [
    # Models
    "MAX_TITLE_LENGTH",
    "Note",
    "NoteKind",
    "NoteRecord",
    "PlainDetails",
    "ProgrammingDetails",
    "TestingDetails",
    "TestStatus",
    "VersionStack",
    # Collection and storage
    "NoteCollection",
    "SnapshotStorage",
    "PersistenceResult",
    "PersistenceWorker",
    # Manager
    "NoteManager",
    # Events
    "Event",
    "EventBus",
    "EventType",
    # Exceptions
    "NoteError",
    "TitleLengthExceeded",
    "StorageError",
    "SnapshotNotFoundError",
    "StorageCorruptionError",
]
