#!/usr/bin/env python
"""Command line interface for Material Notes."""

import logging

import typer
from rich.logging import RichHandler

from materialnotes.cli.commands import backup, labels, notes, preferences

app = typer.Typer(help="Command Line Interface for Material Notes")

# Add command groups
app.add_typer(notes.app, name="notes")
app.add_typer(labels.app, name="labels")
app.add_typer(backup.app, name="backup")
app.add_typer(preferences.app, name="preferences")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                rich_tracebacks=True,
                markup=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
    )
    logging.getLogger("materialnotes").setLevel(
        logging.DEBUG if verbose else logging.WARNING
    )


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
):
    """Manage rich text notes, labels and backups."""
    _setup_logging(verbose)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
