"""Linear version history with a movable cursor.

A stack starts empty with no current version. Pushing a snapshot appends it
and points the cursor at it; navigating forward or backward moves the cursor
by one and is clamped at both ends, so stepping past an end leaves the
cursor where it was.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class VersionStack(Generic[T]):
    """Ordered snapshots of a note plus a cursor into them."""

    def __init__(self, items: Iterable[T] = (), cursor: int | None = None):
        """Initialize stack.

        Args:
            items: Existing snapshots, oldest first
            cursor: Index of the current snapshot, or None for no current one

        Raises:
            ValueError: If cursor does not point into items
        """
        self._items: list[T] = list(items)

        if cursor is not None and not 0 <= cursor < len(self._items):
            raise ValueError(
                f"Version cursor {cursor} out of range for {len(self._items)} versions"
            )
        if cursor is None and self._items:
            cursor = len(self._items) - 1

        self._cursor = cursor

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionStack):
            return NotImplemented
        return self._items == other._items and self._cursor == other._cursor

    def __repr__(self) -> str:
        return f"VersionStack(versions={len(self._items)}, cursor={self._cursor})"

    @property
    def cursor(self) -> int | None:
        """Index of the current version, None when nothing was recorded."""
        return self._cursor

    @property
    def current(self) -> T | None:
        """Version under the cursor."""
        if self._cursor is None:
            return None
        return self._items[self._cursor]

    def push(self, item: T) -> None:
        """Append a snapshot and make it current."""
        self._items.append(item)
        self._cursor = len(self._items) - 1

    def next(self) -> T | None:
        """Move one version forward.

        Returns:
            Version at the new cursor, or the current one when already at
            the newest version
        """
        if self._cursor is not None and self._cursor < len(self._items) - 1:
            self._cursor += 1
            return self._items[self._cursor]
        return self.current

    def previous(self) -> T | None:
        """Move one version back.

        Returns:
            Version at the new cursor, or the current one when already at
            the oldest version
        """
        if self._cursor is not None and self._cursor > 0:
            self._cursor -= 1
            return self._items[self._cursor]
        return self.current

    def items(self) -> list[T]:
        """Get a copy of all versions, oldest first."""
        return list(self._items)

    def copy(self, copy_item: Callable[[T], T]) -> VersionStack[T]:
        """Create an independent stack with copied entries and the same cursor.

        Args:
            copy_item: Function producing an independent copy of one entry
        """
        return VersionStack([copy_item(item) for item in self._items], self._cursor)
