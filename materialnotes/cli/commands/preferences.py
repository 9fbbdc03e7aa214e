"""Preference commands for the Material Notes CLI."""

import typer
from rich.console import Console
from rich.table import Table

from materialnotes.cli.utils.config import get_preferences, set_preferences

app = typer.Typer(help="Preference commands")
console = Console()


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command("show")
def show_preferences():
    """Show the current preferences."""
    preferences = get_preferences()

    table = Table("Key", "Value")
    for key, value in preferences.model_dump(mode="json").items():
        table.add_row(key, _display(value))
    console.print(table)


@app.command("set")
def set_preference(key: str, value: str):
    """Set a preference, e.g. `set sort_method title`."""
    try:
        preferences = get_preferences().with_value(key, value)
        set_preferences(preferences)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    value = preferences.model_dump(mode="json")[key]
    console.print(f"Set [bold]{key}[/bold] to {_display(value)}")
