"""Command modules for the Material Notes CLI."""

from materialnotes.cli.commands import backup, labels, notes, preferences

__all__ = ["backup", "labels", "notes", "preferences"]
