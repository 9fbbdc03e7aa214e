"""Backup commands for the Material Notes CLI."""

from pathlib import Path
from typing import Optional

import typer
from keyring.errors import KeyringError
from rich.console import Console

from materialnotes import backup as notes_backup
from materialnotes.cli.utils.config import (
    KEYRING_ACCOUNT,
    get_backup_password,
    get_store,
    save_backup_password,
)
from materialnotes.exceptions import MaterialNotesError
from materialnotes.utils import delete_password_in_keyring, password_exists_in_keyring

app = typer.Typer(help="Backup commands")
console = Console()


@app.command("export")
def export_backup(
    path: Path,
    encrypt: bool = typer.Option(
        False, "--encrypt", "-e", help="Encrypt titles and contents"
    ),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Encryption password"
    ),
    save_password: bool = typer.Option(
        False, "--save-password", help="Keep the password in the system keyring"
    ),
):
    """Export every note to a JSON backup."""
    secret = get_backup_password(password, confirm=True) if encrypt else None

    try:
        notes = get_store().notes(deleted=None)
        notes_backup.write_backup(path, notes, secret)
    except (MaterialNotesError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if secret and save_password:
        save_backup_password(secret)
    state = "encrypted " if secret else ""
    console.print(f"Exported {len(notes)} notes to {state}backup [bold]{path}[/bold]")


@app.command("import")
def import_backup(
    path: Path,
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Password of an encrypted backup"
    ),
):
    """Import the notes of a JSON backup."""
    try:
        data = notes_backup.load_backup(path)
        if notes_backup.is_encrypted(data) and not password:
            password = get_backup_password()
        entries = notes_backup.import_json(data, password)
        store = get_store()
        for note, label_names in entries:
            store.add(note, label_names)
    except MaterialNotesError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Imported [bold]{len(entries)}[/bold] notes")


@app.command("markdown")
def export_markdown(
    directory: Path,
    bin_: bool = typer.Option(False, "--bin", help="Also export notes in the bin"),
):
    """Export every note as a markdown file."""
    try:
        notes = get_store().notes(deleted=None if bin_ else False)
        written = notes_backup.export_markdown(notes, directory)
    except (MaterialNotesError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print(f"Exported {len(written)} notes to [bold]{directory}[/bold]")


@app.command("forget-password")
def forget_password():
    """Delete the backup password from the system keyring."""
    try:
        if not password_exists_in_keyring(KEYRING_ACCOUNT):
            console.print("No password stored")
            return
        delete_password_in_keyring(KEYRING_ACCOUNT)
    except KeyringError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    console.print("Password removed from keyring")
