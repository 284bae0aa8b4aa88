"""CLI output formatters."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from devnotes.notes.models import DATE_FORMAT, Note, TestingDetails, TestStatus

STATUS_STYLES = {
    TestStatus.PENDING: "yellow",
    TestStatus.PASSED: "green",
    TestStatus.FAILED: "red",
}


def format_notes_table(notes: list[Note]) -> Table:
    """Build a table listing notes with their position numbers.

    Args:
        notes: Notes in display order

    Returns:
        Rich table
    """
    table = Table(title="Notes", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="magenta")
    table.add_column("Title", style="cyan")
    table.add_column("Author")
    table.add_column("Created")
    table.add_column("Deadline")
    table.add_column("Versions", justify="right")

    for position, note in enumerate(notes, start=1):
        table.add_row(
            str(position),
            note.kind.value,
            note.title,
            note.author,
            note.created_at.strftime(DATE_FORMAT),
            note.deadline.strftime(DATE_FORMAT),
            str(note.version_count),
        )

    return table


def format_note_panel(note: Note, title: str | None = None) -> Panel:
    """Render a note's full summary in a panel."""
    status_style = None
    if isinstance(note.details, TestingDetails):
        status_style = STATUS_STYLES.get(note.details.status, "white")

    body = Text()
    for label, value in note.render_fields():
        body.append(f"{label}: ", style="bold cyan")
        if label == "Test Status" and status_style:
            body.append(value, style=status_style)
        else:
            body.append(value)
        body.append("\n")
    body.rstrip()

    return Panel(body, title=title or note.title, title_align="left")


def format_history_table(note: Note) -> Table:
    """Build a table of a note's recorded versions."""
    table = Table(title=f"History of {note.title}")
    table.add_column("Version", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Description")
    table.add_column("Deadline")
    table.add_column("Current", justify="center")

    for index, version in enumerate(note.all_versions()):
        marker = "[green]●[/green]" if index == note.version_index else ""
        table.add_row(
            str(index + 1),
            version.title,
            version.description,
            version.deadline.strftime(DATE_FORMAT),
            marker,
        )

    return table
