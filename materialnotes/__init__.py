"""Material Notes: rich text notes with labels, ordering, backups and a CLI."""

import logging

from materialnotes.exceptions import (
    BackupError,
    DecryptionError,
    InvalidSortKey,
    LabelExistsError,
    LabelNotFound,
    MalformedDocument,
    MaterialNotesError,
    NoteNotFound,
    StoreError,
)
from materialnotes.models import Label, Note
from materialnotes.ordering import compare, sort_notes
from materialnotes.preferences import Preferences, SortMethod
from materialnotes.store import NoteStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BackupError",
    "DecryptionError",
    "InvalidSortKey",
    "Label",
    "LabelExistsError",
    "LabelNotFound",
    "MalformedDocument",
    "MaterialNotesError",
    "Note",
    "NoteNotFound",
    "NoteStore",
    "Preferences",
    "SortMethod",
    "StoreError",
    "compare",
    "sort_notes",
]
