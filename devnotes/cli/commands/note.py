"""Note management commands.

Notes are addressed by their position in ``devnotes list``, which shows the
most recently added note first.
"""

from __future__ import annotations

from datetime import date, datetime

import click

from devnotes.cli.formatters import (
    format_history_table,
    format_note_panel,
    format_notes_table,
)
from devnotes.notes.exceptions import StorageError
from devnotes.notes.models import Note, NoteKind, TestStatus

KIND_CHOICES = [kind.value for kind in NoteKind]
STATUS_CHOICES = [status.value for status in TestStatus]

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def get_manager(ctx: click.Context):
    """Get the note manager from context."""
    return ctx.obj.manager


def resolve_note(ctx: click.Context, position: int) -> Note:
    """Find the note at a 1-based list position."""
    notes = get_manager(ctx).list_notes()
    if not 1 <= position <= len(notes):
        raise click.BadParameter(
            f"no note at position {position} ({len(notes)} notes)",
            param_hint="POSITION",
        )
    return notes[position - 1]


def save_notes(ctx: click.Context) -> None:
    """Save the collection and wait for the result.

    Raises:
        StorageError: If saving failed
    """
    result = get_manager(ctx).save().result()
    if result.failed:
        raise StorageError(f"Notes were not saved: {result.error}")


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def _variant_fields(
    kind: NoteKind,
    language: str | None,
    snippet: str | None,
    test_case: str | None,
    mandatory: bool | None,
    test_status: str | None,
) -> dict:
    """Collect the payload options that apply to a kind of note."""
    if kind is NoteKind.PROGRAMMING:
        fields = {"language": language, "coding_snippet": snippet}
    elif kind is NoteKind.TESTING:
        fields = {
            "test_case": test_case,
            "is_mandatory": mandatory,
            "status": test_status,
        }
    else:
        fields = {}

    return {name: value for name, value in fields.items() if value is not None}


@click.command()
@click.option(
    "--kind",
    "-k",
    type=click.Choice(KIND_CHOICES),
    default=NoteKind.PLAIN.value,
    show_default=True,
    help="Kind of note",
)
@click.option("--title", "-t", default="", help="Title (max 50 characters)")
@click.option("--description", default="", help="Short description")
@click.option("--text", default="", help="Note body")
@click.option("--author", "-a", default=None, help="Author name")
@click.option("--deadline", type=DATE_TYPE, help="Deadline (YYYY-MM-DD)")
@click.option("--language", help="Programming language")
@click.option("--snippet", help="Code snippet")
@click.option("--test-case", help="Test case description")
@click.option("--mandatory/--optional", default=None, help="Mandatory test")
@click.option(
    "--test-status", type=click.Choice(STATUS_CHOICES), help="Initial test status"
)
@click.pass_context
def add(
    ctx,
    kind,
    title,
    description,
    text,
    author,
    deadline,
    language,
    snippet,
    test_case,
    mandatory,
    test_status,
):
    """Create a note."""
    console = ctx.obj.console
    manager = get_manager(ctx)
    kind = NoteKind(kind)

    if author is None:
        author = ctx.obj.config.get("default_author", "")

    note = manager.create_note(
        kind,
        title=title,
        description=description,
        text=text,
        author=author,
        deadline=_as_date(deadline),
        **_variant_fields(kind, language, snippet, test_case, mandatory, test_status),
    )
    save_notes(ctx)

    console.print(f"[green]✓[/green] Created {kind.value} note: {note.title}")


@click.command()
@click.pass_context
def list_cmd(ctx):
    """List notes, newest first."""
    console = ctx.obj.console
    notes = get_manager(ctx).list_notes()

    if not notes:
        console.print("[yellow]No notes yet[/yellow]")
        return

    console.print(format_notes_table(notes))


@click.command()
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
def show(ctx, position):
    """Show a note."""
    note = resolve_note(ctx, position)
    ctx.obj.console.print(format_note_panel(note))


@click.command()
@click.argument("position", type=click.IntRange(min=1))
@click.option("--title", "-t", help="New title")
@click.option("--description", help="New description")
@click.option("--text", help="New body")
@click.option("--author", "-a", help="New author")
@click.option("--deadline", type=DATE_TYPE, help="New deadline (YYYY-MM-DD)")
@click.option("--language", help="New programming language")
@click.option("--snippet", help="New code snippet")
@click.option("--test-case", help="New test case")
@click.option("--mandatory/--optional", default=None, help="Mandatory test")
@click.option("--test-status", type=click.Choice(STATUS_CHOICES), help="New status")
@click.pass_context
def edit(
    ctx,
    position,
    title,
    description,
    text,
    author,
    deadline,
    language,
    snippet,
    test_case,
    mandatory,
    test_status,
):
    """Edit a note, keeping the previous state in its history."""
    console = ctx.obj.console
    note = resolve_note(ctx, position)

    changes = {
        name: value
        for name, value in {
            "title": title,
            "description": description,
            "text": text,
            "author": author,
            "deadline": _as_date(deadline),
        }.items()
        if value is not None
    }
    changes.update(
        _variant_fields(note.kind, language, snippet, test_case, mandatory, test_status)
    )

    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    get_manager(ctx).update_note(note, **changes)
    save_notes(ctx)

    console.print(f"[green]✓[/green] Updated note: {note.title}")


@click.command()
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
def delete(ctx, position):
    """Delete a note."""
    console = ctx.obj.console
    note = resolve_note(ctx, position)

    get_manager(ctx).delete_note(note)
    save_notes(ctx)

    console.print(f"[green]✓[/green] Deleted note: {note.title}")


@click.command()
@click.argument("position", type=click.IntRange(min=1))
@click.option("--revert", "direction", flag_value="revert", help="Step back")
@click.option("--next", "direction", flag_value="next", help="Step forward")
@click.pass_context
def history(ctx, position, direction):
    """Show a note's version history, optionally moving the cursor."""
    console = ctx.obj.console
    note = resolve_note(ctx, position)

    if note.version_count == 0:
        console.print(f"[yellow]No versions recorded for {note.title}[/yellow]")
        return

    if direction:
        version = note.revert_version() if direction == "revert" else note.next_version()
        save_notes(ctx)
        if version is not None:
            console.print(format_note_panel(version, title="Current version"))

    console.print(format_history_table(note))


@click.command()
@click.argument("position", type=click.IntRange(min=1))
@click.argument("new_status", type=click.Choice(STATUS_CHOICES))
@click.pass_context
def status(ctx, position, new_status):
    """Set the status of a testing note."""
    console = ctx.obj.console
    note = resolve_note(ctx, position)

    if note.kind is not NoteKind.TESTING:
        raise click.UsageError(f"'{note.title}' is a {note.kind.value} note")

    note.update_status(new_status)
    save_notes(ctx)

    console.print(f"[green]✓[/green] {note.title}: {new_status}")
