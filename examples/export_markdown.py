"""Export notes: write every note of a notes file as markdown.

Run: python examples/export_markdown.py --notes ~/.config/materialnotes/notes.json

Focus: load the notes, order them the way the note list does and write one
markdown file per note, showing previews of the ones that were exported.
"""

from __future__ import annotations

import argparse
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from materialnotes.backup import export_markdown
from materialnotes.exceptions import MaterialNotesError
from materialnotes.ordering import sort_notes
from materialnotes.preferences import SortMethod
from materialnotes.store import NoteStore

console = Console()

logger = logging.getLogger("notes.export")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Export notes as markdown")
    p.add_argument(
        "--notes",
        dest="notes",
        default=os.path.expanduser("~/.config/materialnotes/notes.json"),
        help="Notes file to read",
    )
    p.add_argument(
        "--output-dir",
        dest="output_dir",
        default=os.path.join("workspace", "notes_markdown"),
        help="Directory to write markdown files to",
    )
    p.add_argument(
        "--sort",
        dest="sort",
        choices=[m.value for m in SortMethod],
        default=SortMethod.EDITED_DATE.value,
        help="Sort method",
    )
    p.add_argument(
        "--bin",
        dest="include_bin",
        action="store_true",
        default=False,
        help="Also export the notes in the bin",
    )
    p.add_argument(
        "--verbose",
        dest="verbose",
        action="store_true",
        default=False,
        help="Enable verbose logs",
    )
    return p.parse_args()


def main() -> None:
    # Rich logging with timestamps
    logging.basicConfig(
        level=logging.INFO,
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

    args = parse_args()
    if args.verbose:
        logging.getLogger("materialnotes").setLevel(logging.DEBUG)

    try:
        store = NoteStore(args.notes)
    except MaterialNotesError as e:
        logger.error(f"Cannot load notes: {e}")
        return

    notes = store.notes(deleted=None if args.include_bin else False)
    notes = sort_notes(notes, SortMethod(args.sort), ascending=False)
    logger.info(f"Exporting [bold]{len(notes)}[/bold] notes to {args.output_dir}")

    try:
        paths = export_markdown(notes, args.output_dir)
    except MaterialNotesError as e:
        logger.error(f"Export failed: {e}")
        return

    for note, path in zip(notes, paths):
        console.rule(path.name)
        console.print(note.content_preview or "(empty)", markup=False)


if __name__ == "__main__":
    main()
