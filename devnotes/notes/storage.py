"""Snapshot storage for the note collection.

The whole collection, every variant and every version history, is written
as one msgspec-encoded JSON snapshot. Each write replaces the previous
snapshot atomically: data goes to a temporary file in the same directory
which is then renamed over the snapshot, so a failed write never leaves a
partial file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

import msgspec

from devnotes.notes.exceptions import (
    NoteError,
    SnapshotNotFoundError,
    StorageCorruptionError,
    StorageError,
)
from devnotes.notes.models import Note, NoteRecord

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_NAME = "notes.snapshot"


class Snapshot(msgspec.Struct, kw_only=True):
    """One persisted image of the entire note collection."""

    notes: list[NoteRecord] = msgspec.field(default_factory=list)
    saved_at: datetime = msgspec.field(default_factory=datetime.now)


class SnapshotStorage:
    """Reads and writes the collection snapshot at a fixed location."""

    def __init__(self, path: Path | str):
        """Initialize storage.

        Args:
            path: Snapshot file path
        """
        self.path = Path(path)
        self.encoder = msgspec.json.Encoder()
        self.decoder = msgspec.json.Decoder(Snapshot)

    @classmethod
    def in_directory(
        cls, data_dir: Path | str, name: str = DEFAULT_SNAPSHOT_NAME
    ) -> SnapshotStorage:
        """Create storage for a snapshot file inside data_dir."""
        return cls(Path(data_dir) / name)

    def exists(self) -> bool:
        return self.path.exists()

    def write(self, notes: list[Note]) -> Snapshot:
        """Serialize notes and atomically replace the snapshot.

        Args:
            notes: Notes in collection order

        Returns:
            The snapshot that was written

        Raises:
            StorageError: If the snapshot cannot be written
        """
        snapshot = Snapshot(notes=[note.to_record() for note in notes])
        data = self.encoder.encode(snapshot)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Failed to save snapshot {self.path}: {e}") from e

        try:
            with open(temp_fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            Path(temp_path).replace(self.path)
        except OSError as e:
            Path(temp_path).unlink(missing_ok=True)
            raise StorageError(f"Failed to save snapshot {self.path}: {e}") from e

        logger.debug(
            "Wrote %d notes (%d bytes) to %s", len(snapshot.notes), len(data), self.path
        )
        return snapshot

    def read(self) -> list[Note]:
        """Read and decode the snapshot.

        Returns:
            Notes in collection order

        Raises:
            SnapshotNotFoundError: If no snapshot exists
            StorageCorruptionError: If the snapshot cannot be decoded
            StorageError: If the snapshot cannot be read
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError as e:
            raise SnapshotNotFoundError(str(self.path)) from e
        except OSError as e:
            raise StorageError(f"Failed to read snapshot {self.path}: {e}") from e

        try:
            snapshot = self.decoder.decode(data)
        except msgspec.DecodeError as e:
            raise StorageCorruptionError(str(self.path), str(e)) from e

        try:
            notes = [Note.from_record(record) for record in snapshot.notes]
        except (NoteError, ValueError) as e:
            raise StorageCorruptionError(str(self.path), str(e)) from e

        logger.debug("Read %d notes from %s", len(notes), self.path)
        return notes

    def delete(self) -> bool:
        """Remove the snapshot.

        Returns:
            True if a snapshot was removed
        """
        try:
            self.path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete snapshot {self.path}: {e}") from e
