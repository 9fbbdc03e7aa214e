"""Note commands for the Material Notes CLI."""

import logging
from enum import Enum
from typing import Iterable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from materialnotes import actions
from materialnotes.cli.utils.config import confirm_action, get_preferences, get_store
from materialnotes.document import (
    decode_markdown,
    document_from_text,
    dump_document,
)
from materialnotes.document.debug_tools import annotate_lines_html, map_lines
from materialnotes.exceptions import MalformedDocument, MaterialNotesError
from materialnotes.models import Note
from materialnotes.ordering import sort_notes
from materialnotes.preferences import (
    Preferences,
    SortMethod,
    SwipeAction,
    SwipeDirection,
)

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Note commands")
console = Console()


class OutputFormat(str, Enum):
    TEXT = "text"
    PREVIEW = "preview"
    MARKDOWN = "markdown"
    DELTA = "delta"


def _content(text: Optional[str], markdown: Optional[str]) -> Optional[str]:
    """Delta content from the --text or --markdown option, if any."""
    if text is not None and markdown is not None:
        raise typer.BadParameter("Use either --text or --markdown, not both")
    if markdown is not None:
        return dump_document(decode_markdown(markdown))
    if text is not None:
        return dump_document(document_from_text(text))
    return None


def _preview(note: Note) -> str:
    try:
        return note.content_preview
    except MalformedDocument:
        LOGGER.warning("notes.cli.malformed_content id=%s", note.id)
        return "<malformed content>"


def _notes_table(notes: Iterable[Note], preferences: Preferences) -> Table:
    show_labels = (
        preferences.enable_labels and preferences.show_labels_list_on_note_tile
    )

    table = Table("ID", "", "Title")
    if not preferences.show_titles_only:
        table.add_column("Preview", overflow="ellipsis", no_wrap=True, max_width=50)
    if show_labels:
        table.add_column("Labels")
    table.add_column("Edited")

    for note in notes:
        row = [str(note.id), "📌" if note.pinned else "", escape(note.title)]
        if not preferences.show_titles_only:
            row.append(escape(_preview(note).replace("\n", " ")))
        if show_labels:
            row.append(escape(", ".join(note.labels_names_visible_sorted)))
        row.append(note.edited_time.astimezone().strftime("%Y-%m-%d %H:%M"))
        table.add_row(*row)
    return table


def _print_notes(notes: List[Note], preferences: Preferences) -> None:
    if not notes:
        console.print("No notes found")
        return
    console.print(_notes_table(notes, preferences))


@app.command("list")
def list_notes(
    bin_: bool = typer.Option(False, "--bin", help="List the notes in the bin"),
    sort: Optional[SortMethod] = typer.Option(
        None, "--sort", "-s", help="Sort method (defaults to the preferences)"
    ),
    ascending: Optional[bool] = typer.Option(
        None, "--ascending/--descending", help="Sort direction"
    ),
    label: Optional[str] = typer.Option(
        None, "--label", "-l", help="Only list notes with this label"
    ),
):
    """List notes, pinned notes first."""
    preferences = get_preferences()

    try:
        store = get_store()
        notes = store.notes(deleted=bin_)
        if label:
            wanted = store.get_label(label)
            notes = [note for note in notes if wanted in note.labels]
        notes = sort_notes(
            notes,
            sort or preferences.sort_method,
            preferences.sort_ascending if ascending is None else ascending,
        )
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    _print_notes(notes, preferences)


@app.command("show")
def show_note(
    note_id: int,
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", "-f", help="Content output format"
    ),
    dump_lines: bool = typer.Option(
        False, "--dump-lines", help="Show how the content is split into lines"
    ),
    html: bool = typer.Option(False, "--html", help="Dump lines as an HTML table"),
):
    """Show a note."""
    try:
        note = get_store().get(note_id)

        if dump_lines:
            document = note.document
            if html:
                typer.echo(annotate_lines_html(document))
                return
            table = Table(
                "#", "Block", "Checked", "Heading", "Indent", "Embeds", "Text"
            )
            for row in map_lines(document):
                table.add_row(
                    str(row["index"]),
                    str(row["block"] or ""),
                    "yes" if row["checked"] else "",
                    str(row["heading"] or ""),
                    str(row["indent"]),
                    ", ".join(row["embeds"]),
                    escape(str(row["text"])),
                )
            console.print(table)
            return

        if output_format == OutputFormat.DELTA:
            body = note.content
        elif output_format == OutputFormat.MARKDOWN:
            body = note.markdown
        elif output_format == OutputFormat.PREVIEW:
            body = note.content_preview
        else:
            body = note.plain_text
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if not note.is_title_empty:
        console.print(f"[bold]{escape(note.title)}[/bold]")
    if note.labels_names_visible_sorted:
        labels = ", ".join(note.labels_names_visible_sorted)
        console.print(f"Labels: {escape(labels)}")
    typer.echo(body)


@app.command("new")
def new_note(
    title: str = typer.Option("", "--title", "-t", help="Note title"),
    text: Optional[str] = typer.Option(None, "--text", help="Plain text content"),
    markdown: Optional[str] = typer.Option(
        None, "--markdown", "-m", help="Markdown content"
    ),
    label: Optional[List[str]] = typer.Option(
        None, "--label", "-l", help="Label to add (repeatable)"
    ),
    pin: bool = typer.Option(False, "--pin", help="Pin the note"),
):
    """Create a note."""
    content = _content(text, markdown)
    note = Note.from_content(content) if content is not None else Note.empty()
    note.title = title
    note.pinned = pin

    try:
        if note.is_empty:
            console.print("[yellow]Warning:[/yellow] Empty note discarded")
            return
        note = get_store().add(note, label or ())
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Created note [bold]{note.id}[/bold]")


@app.command("edit")
def edit_note(
    note_id: int,
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    text: Optional[str] = typer.Option(None, "--text", help="New plain text content"),
    markdown: Optional[str] = typer.Option(
        None, "--markdown", "-m", help="New markdown content"
    ),
):
    """Edit the title or content of a note."""
    content = _content(text, markdown)
    if title is None and content is None:
        console.print("[yellow]Warning:[/yellow] No updates specified")
        return

    try:
        store = get_store()
        note = store.get(note_id)
        if title is not None:
            note.title = title
        if content is not None:
            note.content = content
        store.update(note)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Updated note [bold]{note_id}[/bold]")


@app.command("pin")
def pin_note(note_id: int):
    """Pin or unpin a note."""
    try:
        store = get_store()
        note = actions.toggle_pin(store, store.get(note_id))
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    state = "Pinned" if note.pinned else "Unpinned"
    console.print(f"{state} note [bold]{note_id}[/bold]")


@app.command("delete")
def delete_note(
    note_id: int,
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Move a note to the bin."""
    if not confirm_action(
        get_preferences(), f"Move note {note_id} to the bin?", False, force
    ):
        console.print("Deletion cancelled")
        return

    try:
        store = get_store()
        actions.delete(store, store.get(note_id))
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Moved note [bold]{note_id}[/bold] to the bin")


@app.command("restore")
def restore_note(note_id: int):
    """Restore a note from the bin."""
    try:
        store = get_store()
        actions.restore(store, store.get(note_id))
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Restored note [bold]{note_id}[/bold]")


@app.command("purge")
def purge_notes(
    note_id: Optional[int] = typer.Argument(None, help="Note to delete forever"),
    all_: bool = typer.Option(False, "--all", help="Empty the whole bin"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Permanently delete a note, or every note in the bin."""
    if note_id is None and not all_:
        console.print("[bold red]Error:[/bold red] Give a note ID or --all")
        raise typer.Exit(1)

    target = "every note in the bin" if note_id is None else f"note {note_id}"
    if not confirm_action(
        get_preferences(), f"Permanently delete {target}?", True, force
    ):
        console.print("Deletion cancelled")
        return

    try:
        store = get_store()
        if note_id is None:
            count = store.empty_bin()
            console.print(f"Deleted [bold]{count}[/bold] notes forever")
            return
        actions.delete_permanently(store, store.get(note_id))
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Deleted note [bold]{note_id}[/bold] forever")


@app.command("search")
def search_notes(query: str):
    """Search notes by title and content."""
    preferences = get_preferences()

    try:
        notes = sort_notes(
            get_store().search(query),
            preferences.sort_method,
            preferences.sort_ascending,
        )
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    _print_notes(notes, preferences)


@app.command("share")
def share_note(note_id: int):
    """Print the text shared or copied for a note."""
    try:
        text = actions.share_text(get_store().get(note_id))
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    typer.echo(text)


@app.command("swipe")
def swipe_note(
    note_id: int,
    direction: SwipeDirection,
    force: bool = typer.Option(
        False, "--force", "-f", help="Run the action without confirmation"
    ),
):
    """Run the swipe action configured for a direction."""
    preferences = get_preferences()
    right = preferences.right_swipe_action
    left = preferences.left_swipe_action

    try:
        store = get_store()
        note = store.get(note_id)

        allowed = actions.dismiss_direction(note, right, left)
        action = actions.swipe_action_for(direction, right, left)
        if allowed == actions.DismissDirection.NONE or action.is_disabled:
            console.print(
                f"[yellow]Warning:[/yellow] No {direction.value} swipe action "
                f"for note {note_id}"
            )
            return

        if action == SwipeAction.DELETE and not confirm_action(
            preferences, f"Move note {note_id} to the bin?", False, force
        ):
            console.print("Deletion cancelled")
            return

        shared = None
        if action in (SwipeAction.SHARE, SwipeAction.COPY):
            shared = actions.share_text(note)
        dismissed = actions.perform_swipe_action(store, note, action)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if shared is not None:
        typer.echo(shared)
    console.print(
        f"Ran [bold]{action.value}[/bold] on note {note_id}"
        + (" (dismissed)" if dismissed else "")
    )


@app.command("menu")
def note_menu(note_id: int):
    """List the menu actions available for a note."""
    preferences = get_preferences()

    try:
        note = get_store().get(note_id)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    for option in actions.menu_options(note, preferences.enable_labels):
        console.print(option.value)
