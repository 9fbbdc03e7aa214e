"""
Backup helpers: JSON export/import (plain or password encrypted) and
markdown export.

These functions are thin, testable wrappers around the note model and the
store. They perform file I/O only in `write_backup`, `read_backup` and
`export_markdown`.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from pydantic import ValidationError

from .exceptions import BackupError, DecryptionError
from .models import Note

LOGGER = logging.getLogger(__name__)

BACKUP_VERSION = 1


def export_json(
    notes: Iterable[Note], password: Optional[str] = None
) -> Dict[str, Any]:
    """Return the backup payload for `notes`, encrypted when a password is given."""
    encrypted = bool(password)
    out: List[Dict[str, Any]] = []
    for note in notes:
        out.append(note.encrypted(password).to_json() if password else note.to_json())
    LOGGER.debug("notes.backup.export notes=%d encrypted=%s", len(out), encrypted)
    return {"version": BACKUP_VERSION, "encrypted": encrypted, "notes": out}


def import_json(
    data: Dict[str, Any], password: Optional[str] = None
) -> List[Tuple[Note, List[str]]]:
    """Parse a backup payload.

    Returns (note, label names) pairs; the caller stores them. Raises
    BackupError when the payload is malformed, when an encrypted backup is
    imported without a password or when the password is wrong.
    """
    if not isinstance(data, dict) or not isinstance(data.get("notes"), list):
        raise BackupError("Backup is not a notes export")
    encrypted = is_encrypted(data)
    if encrypted and not password:
        raise BackupError("Backup is encrypted; a password is required")

    out: List[Tuple[Note, List[str]]] = []
    for idx, item in enumerate(data["notes"]):
        if not isinstance(item, dict):
            raise BackupError(f"Backup entry {idx} is not an object")
        try:
            if encrypted:
                note = Note.from_json_encrypted(item, password or "")
            else:
                note = Note.from_json(item)
        except ValidationError as e:
            raise BackupError(f"Backup entry {idx} is invalid: {e}") from e
        except DecryptionError as e:
            raise BackupError(f"Cannot decrypt backup entry {idx}: {e}") from e
        labels = [str(name) for name in item.get("labels", [])]
        out.append((note, labels))
    LOGGER.debug("notes.backup.import notes=%d encrypted=%s", len(out), encrypted)
    return out


def write_backup(
    path: Union[str, Path], notes: Iterable[Note], password: Optional[str] = None
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = export_json(notes, password)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    LOGGER.info("notes.backup.written path=%s notes=%d", path, len(payload["notes"]))
    return path


def load_backup(path: Union[str, Path]) -> Dict[str, Any]:
    """Raw backup payload stored at `path`."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        raise BackupError(f"Cannot read backup {path}: {e}") from e
    if not isinstance(data, dict):
        raise BackupError(f"Backup {path} is not a JSON object")
    return data


def is_encrypted(data: Dict[str, Any]) -> bool:
    return bool(data.get("encrypted", False))


def read_backup(
    path: Union[str, Path], password: Optional[str] = None
) -> List[Tuple[Note, List[str]]]:
    return import_json(load_backup(path), password)


def _safe_name(s: Optional[str]) -> str:
    if not s:
        return "untitled"
    # collapse whitespace and strip
    s = re.sub(r"\s+", " ", s).strip()
    # keep alnum, space, dash, underscore; replace others with '-'
    s = re.sub(r"[^\w\- ]+", "-", s)
    return s[:60] or "untitled"


def note_to_markdown(note: Note) -> str:
    body = note.markdown
    if note.is_title_empty:
        return body
    return f"# {note.title}\n\n{body}"


def export_markdown(
    notes: Iterable[Note], directory: Union[str, Path]
) -> List[Path]:
    """Write one markdown file per note into `directory`; return the paths."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    used: Set[str] = set()
    written: List[Path] = []
    for note in notes:
        base = _safe_name(note.title)
        name = base
        n = 2
        while name.lower() in used:
            name = f"{base} ({n})"
            n += 1
        used.add(name.lower())
        path = directory / f"{name}.md"
        path.write_text(note_to_markdown(note) + "\n", encoding="utf-8")
        written.append(path)
    LOGGER.info("notes.backup.markdown dir=%s files=%d", directory, len(written))
    return written
