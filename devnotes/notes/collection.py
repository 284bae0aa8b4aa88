"""In-memory ordered collection of notes."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from devnotes.notes.models import Note


class NoteCollection:
    """Ordered list of live notes.

    Lookups and removals use the identity rule (title and creation date),
    never object identity, since the list may hold notes restored from a
    snapshot rather than the instances a caller kept.
    """

    def __init__(self, notes: Iterable[Note] = ()):
        self._notes: list[Note] = list(notes)
        self._created_count = 0
        self._lock = threading.RLock()

    @property
    def created_count(self) -> int:
        """Number of notes constructed through the manager so far."""
        return self._created_count

    def record_creation(self) -> int:
        """Count one constructed note and return the new total."""
        with self._lock:
            self._created_count += 1
            return self._created_count

    def add(self, note: Note) -> None:
        """Append note to the end of the collection."""
        with self._lock:
            self._notes.append(note)

    def find(self, note: Note) -> Note | None:
        """Find the first note matching note by identity rule."""
        with self._lock:
            for candidate in self._notes:
                if candidate.is_same_note(note):
                    return candidate
        return None

    def remove(self, note: Note) -> bool:
        """Remove the first note matching note by identity rule.

        Returns:
            True if a note was removed, False if none matched
        """
        with self._lock:
            for index, candidate in enumerate(self._notes):
                if candidate.is_same_note(note):
                    del self._notes[index]
                    return True
        return False

    def replace_all(self, notes: Iterable[Note]) -> None:
        """Replace the whole collection."""
        replacement = list(notes)
        with self._lock:
            self._notes = replacement

    def clear(self) -> None:
        with self._lock:
            self._notes = []

    def notes(self) -> list[Note]:
        """Get a copy of the list, oldest first."""
        with self._lock:
            return list(self._notes)

    def snapshot(self) -> list[Note]:
        """Get deep copies of all notes, safe to hand to another thread."""
        with self._lock:
            return [note.clone() for note in self._notes]

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes())

    def __contains__(self, note: object) -> bool:
        return isinstance(note, Note) and self.find(note) is not None
