"""Label commands for the Material Notes CLI."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from materialnotes.cli.utils.config import confirm_action, get_preferences, get_store
from materialnotes.exceptions import MaterialNotesError

app = typer.Typer(help="Label commands")
console = Console()


def _warn_if_disabled() -> None:
    if not get_preferences().enable_labels:
        console.print("[yellow]Warning:[/yellow] Labels are disabled in preferences")


@app.command("list")
def list_labels():
    """List all labels."""
    _warn_if_disabled()

    try:
        store = get_store()
        labels = store.labels()
        notes = store.notes(deleted=None)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if not labels:
        console.print("No labels found")
        return

    table = Table("Name", "Visible", "Notes")
    for label in labels:
        count = sum(1 for note in notes if label in note.labels)
        table.add_row(escape(label.name), "yes" if label.visible else "no", str(count))
    console.print(table)


@app.command("add")
def add_label(
    name: str,
    hidden: bool = typer.Option(False, "--hidden", help="Hide the label on notes"),
):
    """Create a label."""
    _warn_if_disabled()

    try:
        label = get_store().add_label(name, visible=not hidden)
    except (MaterialNotesError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Added label [bold]{escape(label.name)}[/bold]")


@app.command("remove")
def remove_label(
    name: str,
    force: bool = typer.Option(
        False, "--force", "-f", help="Remove without confirmation"
    ),
):
    """Remove a label from every note and delete it."""
    if not confirm_action(get_preferences(), f"Delete label {name}?", True, force):
        console.print("Deletion cancelled")
        return

    try:
        get_store().remove_label(name)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Removed label [bold]{escape(name)}[/bold]")


def _set_visibility(name: str, visible: bool) -> None:
    try:
        get_store().set_label_visibility(name, visible)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    state = "visible" if visible else "hidden"
    console.print(f"Label [bold]{escape(name)}[/bold] is now {state}")


@app.command("hide")
def hide_label(name: str):
    """Hide a label on the note tiles."""
    _set_visibility(name, False)


@app.command("show")
def show_label(name: str):
    """Show a hidden label again."""
    _set_visibility(name, True)


@app.command("assign")
def assign_label(note_id: int, name: str):
    """Add a label to a note."""
    _warn_if_disabled()

    try:
        get_store().assign_label(note_id, name)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Labelled note [bold]{note_id}[/bold] with {escape(name)}")


@app.command("unassign")
def unassign_label(note_id: int, name: str):
    """Remove a label from a note."""
    try:
        get_store().unassign_label(note_id, name)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Removed label {escape(name)} from note [bold]{note_id}[/bold]")
