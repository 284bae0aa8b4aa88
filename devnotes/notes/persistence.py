"""Background save and load of the note collection.

All persistence jobs run on a single worker thread, which acts as a
single-writer queue: a save and a load never overlap, and they complete in
the order they were requested. Callers are notified through the event bus,
an optional callback and the returned future; the caller's thread is never
blocked unless it chooses to wait on the future.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from devnotes.notes.collection import NoteCollection
from devnotes.notes.events import EventBus, EventPublisher, EventType
from devnotes.notes.exceptions import NoteError, StorageError
from devnotes.notes.models import Note
from devnotes.notes.storage import SnapshotStorage

logger = logging.getLogger(__name__)


class PersistenceOperation(str, Enum):
    """Kind of persistence job."""

    SAVE = "save"
    LOAD = "load"


@dataclass(frozen=True)
class PersistenceResult:
    """Outcome of a save or load job."""

    operation: PersistenceOperation
    note_count: int = 0
    error: NoteError | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return not self.success


ResultCallback = Callable[[PersistenceResult], None]


class PersistenceWorker(EventPublisher):
    """Runs snapshot saves and loads off the calling thread."""

    def __init__(
        self,
        storage: SnapshotStorage,
        collection: NoteCollection,
        event_bus: EventBus,
    ):
        """Initialize worker.

        Args:
            storage: Snapshot storage to write to and read from
            collection: Collection that loads replace
            event_bus: Bus for completion events
        """
        super().__init__(event_bus)
        self.storage = storage
        self.collection = collection
        self.executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="devnotes-persistence"
        )
        self._lock = threading.Lock()
        self._pending_loads = 0

    def save(self, callback: ResultCallback | None = None) -> Future[PersistenceResult]:
        """Queue a save of the current collection.

        With no load queued ahead of it, the collection is copied on the
        calling thread, so edits made after this call are not part of the
        snapshot. Otherwise the copy is taken on the worker once the queued
        loads have finished, so the save writes the loaded state.
        """
        with self._lock:
            notes = None if self._pending_loads else self.collection.snapshot()
            return self.executor.submit(self._run_save, notes, callback)

    def load(self, callback: ResultCallback | None = None) -> Future[PersistenceResult]:
        """Queue a load that replaces the collection on success."""
        with self._lock:
            self._pending_loads += 1
            try:
                return self.executor.submit(self._run_load, callback)
            except RuntimeError:
                self._pending_loads -= 1
                raise

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs, optionally waiting for queued ones."""
        self.executor.shutdown(wait=wait)

    def _run_save(
        self, notes: list[Note] | None, callback: ResultCallback | None
    ) -> PersistenceResult:
        if notes is None:
            notes = self.collection.snapshot()

        try:
            self.storage.write(notes)
        except StorageError as e:
            logger.error("Saving notes failed: %s", e)
            result = PersistenceResult(PersistenceOperation.SAVE, error=e)
            self._publish_event(EventType.SAVE_FAILED, error=e, result=result)
        else:
            logger.info("Saved %d notes to %s", len(notes), self.storage.path)
            result = PersistenceResult(PersistenceOperation.SAVE, note_count=len(notes))
            self._publish_event(EventType.NOTES_SAVED, result=result)

        return self._notify(result, callback)

    def _run_load(self, callback: ResultCallback | None) -> PersistenceResult:
        try:
            notes = self.storage.read()
        except StorageError as e:
            logger.error("Loading notes failed: %s", e)
            result = PersistenceResult(PersistenceOperation.LOAD, error=e)
            self._publish_event(EventType.LOAD_FAILED, error=e, result=result)
        else:
            self.collection.replace_all(notes)
            logger.info("Loaded %d notes from %s", len(notes), self.storage.path)
            result = PersistenceResult(PersistenceOperation.LOAD, note_count=len(notes))
            self._publish_event(EventType.NOTES_LOADED, result=result)
        finally:
            with self._lock:
                self._pending_loads -= 1

        return self._notify(result, callback)

    def _notify(
        self, result: PersistenceResult, callback: ResultCallback | None
    ) -> PersistenceResult:
        if callback is not None:
            try:
                callback(result)
            except Exception:
                logger.exception("Persistence callback failed")
        return result
