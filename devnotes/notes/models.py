"""Data models for notes.

A note carries a fixed set of common fields plus exactly one variant
payload. The payloads form a closed msgspec tagged union, so plain,
programming and testing notes share one entity type and serialize
through the same record struct.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

import msgspec

from devnotes.notes.exceptions import TitleLengthExceeded
from devnotes.notes.versions import VersionStack

MAX_TITLE_LENGTH = 50

DEFAULT_TITLE = "Default Title"
DEFAULT_DESCRIPTION = "Default Description"
DEFAULT_TEXT = "Default Text"
DEFAULT_AUTHOR = "Anonymous"

DATE_FORMAT = "%Y-%m-%d"

COMMON_FIELDS = ("title", "description", "text", "author", "deadline")


class NoteKind(str, Enum):
    """Kinds of notes."""

    PLAIN = "plain"
    PROGRAMMING = "programming"
    TESTING = "testing"


class TestStatus(str, Enum):
    """Execution status of a test case."""

    __test__ = False

    PENDING = "PENDING"
    PASSED = "PASSED"
    FAILED = "FAILED"


class PlainDetails(msgspec.Struct, tag_field="kind", tag="plain", kw_only=True):
    """Payload of a plain note."""

    def render_fields(self) -> list[tuple[str, str]]:
        """Plain notes add no labelled fields."""
        return []


class ProgrammingDetails(
    msgspec.Struct, tag_field="kind", tag="programming", kw_only=True
):
    """Payload of a programming note: language and a code snippet."""

    language: str = ""
    coding_snippet: str = ""

    def render_fields(self) -> list[tuple[str, str]]:
        """Get the payload as (label, value) pairs in display order."""
        return [
            ("Language", self.language),
            ("Code Snippet", self.coding_snippet),
        ]


class TestingDetails(msgspec.Struct, tag_field="kind", tag="testing", kw_only=True):
    """Payload of a testing note: test case, mandatory flag and status."""

    __test__ = False

    test_case: str = ""
    is_mandatory: bool = False
    status: TestStatus = TestStatus.PENDING

    def update_status(self, status: TestStatus | str) -> None:
        """Replace the test status. Any status may follow any other."""
        self.status = TestStatus(status)

    def render_fields(self) -> list[tuple[str, str]]:
        """Get the payload as (label, value) pairs in display order."""
        return [
            ("Test Case", self.test_case),
            ("Is Mandatory", str(self.is_mandatory).lower()),
            ("Test Status", self.status.value),
        ]


NoteDetails = PlainDetails | ProgrammingDetails | TestingDetails

_KIND_BY_DETAILS: dict[type, NoteKind] = {
    PlainDetails: NoteKind.PLAIN,
    ProgrammingDetails: NoteKind.PROGRAMMING,
    TestingDetails: NoteKind.TESTING,
}

DETAILS_BY_KIND: dict[NoteKind, type] = {
    kind: cls for cls, kind in _KIND_BY_DETAILS.items()
}


class NoteRecord(msgspec.Struct, kw_only=True):
    """Serialized form of a note, including its version history."""

    title: str
    description: str
    text: str
    author: str
    created_at: datetime
    deadline: date
    details: NoteDetails
    versions: list[NoteRecord] = msgspec.field(default_factory=list)
    version_index: int | None = None


def validate_title(title: str | None) -> str:
    """Validate a candidate title.

    Args:
        title: Candidate title

    Returns:
        The title itself, or the default title when empty

    Raises:
        TitleLengthExceeded: If title is longer than MAX_TITLE_LENGTH
        TypeError: If title is not a string
    """
    if not title:
        return DEFAULT_TITLE

    if not isinstance(title, str):
        raise TypeError(f"title must be a string, not {type(title).__name__}")

    if len(title) > MAX_TITLE_LENGTH:
        raise TitleLengthExceeded(
            f"Title '{title}' exceeds maximum length of "
            f"{MAX_TITLE_LENGTH} characters.",
            len(title),
        )

    return title


def copy_details(details: NoteDetails) -> NoteDetails:
    """Create an independent copy of a variant payload."""
    return msgspec.structs.replace(details)


def build_details(base: NoteDetails, **changes: Any) -> NoteDetails:
    """Create a payload from base with changes applied and type-checked.

    Struct construction does not validate field types, so the merged
    fields are run through ``msgspec.convert`` against the payload type.

    Args:
        base: Payload supplying the kind and unchanged fields
        **changes: Payload fields to change

    Returns:
        A new payload of the same kind

    Raises:
        ValueError: If a test status is invalid
        TypeError: If a field value has the wrong type
    """
    if "status" in changes:
        changes["status"] = TestStatus(changes["status"])

    data = msgspec.to_builtins(base)
    data.update(msgspec.to_builtins(changes))

    try:
        return msgspec.convert(data, type=type(base))
    except msgspec.ValidationError as e:
        kind = _KIND_BY_DETAILS[type(base)]
        raise TypeError(f"Invalid {kind.value} note field: {e}") from e


def check_text(name: str, value: Any) -> str:
    """Check a free-text field, treating None as empty.

    Raises:
        TypeError: If value is not a string
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, not {type(value).__name__}")
    return value


def check_deadline(value: Any) -> date:
    """Check a deadline value.

    Raises:
        TypeError: If value is not a plain date
    """
    if isinstance(value, datetime) or not isinstance(value, date):
        raise TypeError(f"deadline must be a date, not {type(value).__name__}")
    return value


class Note:
    """A note with common fields, a variant payload and version history.

    Two notes are the same note when their title and creation date match,
    see ``is_same_note``. ``==`` compares every field instead.
    """

    def __init__(
        self,
        title: str | None = "",
        description: str | None = "",
        text: str | None = "",
        author: str | None = "",
        created_at: datetime | None = None,
        deadline: date | None = None,
        details: NoteDetails | None = None,
    ):
        """Initialize note, substituting defaults for empty fields.

        Raises:
            TitleLengthExceeded: If title is too long
            TypeError: If a field has the wrong type
        """
        self._title = validate_title(title)
        self.description = check_text("description", description) or DEFAULT_DESCRIPTION
        self.text = check_text("text", text) or DEFAULT_TEXT
        self.author = check_text("author", author) or DEFAULT_AUTHOR
        self._created_at = created_at or datetime.now()
        self.deadline = (
            check_deadline(deadline)
            if deadline is not None
            else self._created_at.date()
        )
        self.details: NoteDetails = details if details is not None else PlainDetails()
        self._versions: VersionStack[Note] = VersionStack()

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str | None) -> None:
        self._title = validate_title(value)

    @property
    def created_at(self) -> datetime:
        """Creation timestamp, fixed at construction."""
        return self._created_at

    @property
    def kind(self) -> NoteKind:
        return _KIND_BY_DETAILS[type(self.details)]

    def update_status(self, status: TestStatus | str) -> None:
        """Replace the test status of a testing note.

        Raises:
            TypeError: If this is not a testing note
        """
        if not isinstance(self.details, TestingDetails):
            raise TypeError(f"{self.kind.value} notes have no test status")
        self.details.update_status(status)

    def update(self, keep_version: bool = True, **changes: Any) -> None:
        """Apply field changes, recording the pre-edit state first.

        Common fields and the fields of the current payload are accepted.
        All changes are checked before anything is modified, so a failed
        update leaves the note and its history untouched.

        Args:
            keep_version: Save the current state as a version before editing
            **changes: Fields to change

        Raises:
            TypeError: If a field is unknown for this kind of note or a value
                has the wrong type
            TitleLengthExceeded: If the new title is too long
            ValueError: If a test status is invalid
        """
        detail_fields = set(self.details.__struct_fields__)
        unknown = set(changes) - set(COMMON_FIELDS) - detail_fields
        if unknown:
            raise TypeError(
                f"Unknown fields for {self.kind.value} note: "
                f"{', '.join(sorted(unknown))}"
            )

        common = {}
        for name in COMMON_FIELDS:
            if name not in changes:
                continue
            value = changes[name]
            if name == "title":
                common[name] = validate_title(value)
            elif name == "deadline":
                common[name] = check_deadline(value)
            else:
                common[name] = check_text(name, value)

        detail_changes = {k: v for k, v in changes.items() if k in detail_fields}
        details = None
        if detail_changes:
            details = build_details(self.details, **detail_changes)

        if keep_version:
            self.save_version()

        for name, value in common.items():
            setattr(self, name, value)

        if details is not None:
            self.details = details

    # Versioning

    def snapshot(self) -> Note:
        """Copy the current field state without version history."""
        copied = Note.__new__(Note)
        copied._title = self._title
        copied.description = self.description
        copied.text = self.text
        copied.author = self.author
        copied._created_at = self._created_at
        copied.deadline = self.deadline
        copied.details = copy_details(self.details)
        copied._versions = VersionStack()
        return copied

    def clone(self) -> Note:
        """Deep copy including version history and cursor."""
        copied = self.snapshot()
        copied._versions = self._versions.copy(Note.clone)
        return copied

    def save_version(self, snapshot: Note | None = None) -> None:
        """Record a version and make it current.

        Args:
            snapshot: State to record; the note itself when omitted
        """
        source = snapshot if snapshot is not None else self
        self._versions.push(source.snapshot())

    def next_version(self) -> Note | None:
        """Move to the next newer version and return it."""
        return self._versions.next()

    def revert_version(self) -> Note | None:
        """Move to the next older version and return it."""
        return self._versions.previous()

    @property
    def current_version(self) -> Note | None:
        return self._versions.current

    @property
    def version_index(self) -> int | None:
        return self._versions.cursor

    @property
    def version_count(self) -> int:
        return len(self._versions)

    def all_versions(self) -> list[Note]:
        """Get copies of all recorded versions, oldest first."""
        return [version.clone() for version in self._versions.items()]

    # Identity and comparison

    def is_same_note(self, other: Note) -> bool:
        """Check whether other is the same note by title and creation date."""
        return self.title == other.title and self.created_at == other.created_at

    def _fields(self) -> tuple:
        return (
            self._title,
            self.description,
            self.text,
            self.author,
            self._created_at,
            self.deadline,
            self.details,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self._fields() == other._fields() and self._versions == other._versions

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Note(kind={self.kind.value!r}, title={self.title!r}, "
            f"created_at={self.created_at.isoformat()!r})"
        )

    def render_fields(self) -> list[tuple[str, str]]:
        """Get the displayed fields as (label, value) pairs, payload last."""
        fields = [
            ("Title", self.title),
            ("Description", self.description),
            ("Text", self.text),
            ("Author", self.author),
            ("Creation Date", self.created_at.strftime(DATE_FORMAT)),
            ("Deadline", self.deadline.strftime(DATE_FORMAT)),
        ]
        fields.extend(self.details.render_fields())
        return fields

    def __str__(self) -> str:
        return "\n".join(f"{label}: {value}" for label, value in self.render_fields())

    # Serialization

    def to_record(self) -> NoteRecord:
        """Convert note and its history to a serializable record."""
        return NoteRecord(
            title=self.title,
            description=self.description,
            text=self.text,
            author=self.author,
            created_at=self.created_at,
            deadline=self.deadline,
            details=copy_details(self.details),
            versions=[version.to_record() for version in self._versions.items()],
            version_index=self._versions.cursor,
        )

    @classmethod
    def from_record(cls, record: NoteRecord) -> Note:
        """Rebuild a note from a record.

        Raises:
            TitleLengthExceeded: If the recorded title is too long
            ValueError: If the recorded version index is out of range
        """
        note = cls(
            title=record.title,
            description=record.description,
            text=record.text,
            author=record.author,
            created_at=record.created_at,
            deadline=record.deadline,
            details=copy_details(record.details),
        )
        # Recorded values are restored as-is, even when empty.
        note.description = record.description
        note.text = record.text
        note.author = record.author
        note._versions = VersionStack(
            [cls.from_record(version) for version in record.versions],
            record.version_index,
        )
        return note

    def to_dict(self) -> dict[str, Any]:
        """Convert note to dictionary."""
        return msgspec.to_builtins(self.to_record())
