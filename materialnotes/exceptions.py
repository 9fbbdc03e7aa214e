"""Library exceptions."""

from typing import Optional


class MaterialNotesError(Exception):
    """Base materialnotes error."""


class MalformedDocument(MaterialNotesError):
    """Note content is not a valid delta document."""

    def __init__(self, message: str, content: Optional[str] = None):
        super().__init__(message)
        self.content = content


class InvalidSortKey(MaterialNotesError):
    """An unknown sort method reached the comparator."""


class DecryptionError(MaterialNotesError):
    """Wrong password or corrupt ciphertext."""


class NoteNotFound(MaterialNotesError):
    pass


class LabelNotFound(MaterialNotesError):
    pass


class LabelExistsError(MaterialNotesError):
    pass


class BackupError(MaterialNotesError):
    """Backup payload cannot be imported."""


class StoreError(MaterialNotesError):
    """The notes file cannot be read or written."""
