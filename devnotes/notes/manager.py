"""High-level manager for notes operations.

This module is the boundary a presentation layer talks to: it creates,
edits, deletes and lists notes held in a ``NoteCollection`` and hands
persistence off to a background ``PersistenceWorker``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from datetime import date, datetime
from pathlib import Path
from typing import Any

from devnotes.notes.collection import NoteCollection
from devnotes.notes.events import EventBus, EventPublisher, EventType
from devnotes.notes.models import DETAILS_BY_KIND, Note, NoteKind, build_details
from devnotes.notes.persistence import (
    PersistenceResult,
    PersistenceWorker,
    ResultCallback,
)
from devnotes.notes.storage import SnapshotStorage

logger = logging.getLogger(__name__)


class NoteManager(EventPublisher):
    """High-level manager for notes."""

    def __init__(
        self,
        storage: SnapshotStorage,
        collection: NoteCollection | None = None,
        event_bus: EventBus | None = None,
    ):
        """Initialize manager.

        Args:
            storage: Snapshot storage used by save and load
            collection: Collection to manage; a new empty one by default
            event_bus: Bus for notifications; a new one by default
        """
        super().__init__(event_bus or EventBus())
        self.storage = storage
        self.collection = collection if collection is not None else NoteCollection()
        self.worker = PersistenceWorker(storage, self.collection, self.event_bus)

    @classmethod
    def from_path(cls, path: Path | str) -> NoteManager:
        """Create a manager persisting to the snapshot file at path."""
        return cls(SnapshotStorage(path))

    # Note operations

    def create_note(
        self,
        kind: NoteKind | str = NoteKind.PLAIN,
        title: str | None = "",
        description: str | None = "",
        text: str | None = "",
        author: str | None = "",
        deadline: date | None = None,
        **variant_fields: Any,
    ) -> Note:
        """Create a note and append it to the collection.

        Args:
            kind: Kind of note
            title: Title, at most 50 characters
            description: Description
            text: Main text
            author: Author name
            deadline: Deadline, the creation day by default
            **variant_fields: Fields of the kind's payload, e.g. ``language``
                and ``coding_snippet`` for programming notes

        Returns:
            Created note

        Raises:
            TitleLengthExceeded: If title is too long; nothing is added
            ValueError: If kind or a test status is invalid
            TypeError: If a variant field is unknown for the kind or a value
                has the wrong type
        """
        kind = NoteKind(kind)
        details_cls = DETAILS_BY_KIND[kind]

        unknown = set(variant_fields) - set(details_cls.__struct_fields__)
        if unknown:
            raise TypeError(
                f"Unknown fields for {kind.value} note: {', '.join(sorted(unknown))}"
            )

        note = Note(
            title=title,
            description=description,
            text=text,
            author=author,
            created_at=datetime.now(),
            deadline=deadline,
            details=build_details(details_cls(), **variant_fields),
        )

        self.collection.record_creation()
        self.collection.add(note)
        logger.debug("Created %s note %r", kind.value, note.title)
        self._publish_event(EventType.NOTE_CREATED, note=note)

        return note

    def update_note(self, note: Note, **changes: Any) -> Note | None:
        """Edit a note, keeping its pre-edit state as a version.

        Args:
            note: Note to edit, matched by title and creation date
            **changes: Fields to change

        Returns:
            The edited live note, or None if it is not in the collection

        Raises:
            TitleLengthExceeded: If the new title is too long
            TypeError: If a field is unknown for the note's kind or a value
                has the wrong type
            ValueError: If a test status is invalid
        """
        live = self.collection.find(note)
        if live is None:
            logger.debug("Update skipped, note %r not in collection", note.title)
            return None

        live.update(**changes)

        logger.debug("Updated note %r (%d versions)", live.title, live.version_count)
        self._publish_event(EventType.NOTE_UPDATED, note=live)
        return live

    def delete_note(self, note: Note) -> int:
        """Delete a note by identity rule.

        A second removal is attempted after the first so a duplicate of the
        same note does not linger.

        Returns:
            Number of notes removed, 0 if none matched
        """
        removed = 0
        for _ in range(2):
            if self.collection.remove(note):
                removed += 1

        if removed:
            logger.debug("Deleted %d copies of note %r", removed, note.title)
            self._publish_event(EventType.NOTE_DELETED, note=note, count=removed)

        return removed

    def find_note(self, note: Note) -> Note | None:
        """Find the live note matching note by identity rule."""
        return self.collection.find(note)

    def list_notes(self) -> list[Note]:
        """List notes, most recently added first."""
        return list(reversed(self.collection.notes()))

    @property
    def created_count(self) -> int:
        return self.collection.created_count

    # Persistence

    def save(self, callback: ResultCallback | None = None) -> Future[PersistenceResult]:
        """Save the collection in the background."""
        return self.worker.save(callback)

    def load(self, callback: ResultCallback | None = None) -> Future[PersistenceResult]:
        """Load the collection in the background, replacing it on success."""
        return self.worker.load(callback)

    def close(self) -> None:
        """Wait for queued persistence jobs and stop the worker."""
        self.worker.shutdown(wait=True)

    def __enter__(self) -> NoteManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
