"""Exception classes for notes module."""


class NoteError(Exception):
    """Base exception for note-related errors."""

    pass


class TitleLengthExceeded(NoteError, ValueError):
    """Raised when a note title is longer than the allowed maximum."""

    def __init__(self, message: str, title_length: int):
        """Initialize with message and the offending title length."""
        self.title_length = title_length
        super().__init__(message)


class StorageError(NoteError):
    """Base exception for snapshot storage errors."""

    pass


class SnapshotNotFoundError(StorageError):
    """Raised when no snapshot exists at the storage location."""

    def __init__(self, path: str):
        """Initialize with snapshot path."""
        self.path = path
        super().__init__(f"No snapshot found at {path}")


class StorageCorruptionError(StorageError):
    """Raised when a snapshot cannot be decoded."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with path and details."""
        self.path = path
        message = f"Snapshot corruption detected at {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
