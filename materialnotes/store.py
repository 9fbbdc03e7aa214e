"""
JSON file note store.

Holds every note and label of a user in a single JSON document:

    {"version": 1, "next_id": 3,
     "labels": [{"name": "work", "visible": true, "pinned": false}],
     "notes": [{"id": 1, "title": "...", "content": "...", "labels": ["work"], ...}]}

Notes reference the store's `Label` instances, so a label change is seen by
every note carrying it. Each mutation rewrites the file atomically.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from .exceptions import (
    LabelExistsError,
    LabelNotFound,
    MalformedDocument,
    NoteNotFound,
    StoreError,
)
from .models import Label, Note

LOGGER = logging.getLogger(__name__)

STORE_VERSION = 1


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _atomic_write_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


class NoteStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._notes: Dict[int, Note] = {}
        self._labels: Dict[str, Label] = {}
        self._next_id = 1
        self._load()

    # ----------------------------- Persistence --------------------------------

    def _load(self) -> None:
        if not self.path.exists():
            LOGGER.debug("notes.store.new path=%s", self.path)
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise StoreError(f"Cannot read notes file {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise StoreError(f"Notes file {self.path} is not a JSON object")

        try:
            for item in raw.get("labels", []):
                label = Label.model_validate(item)
                self._labels[label.name] = label
            for item in raw.get("notes", []):
                note = Note.from_json(item)
                note.id = int(item["id"])
                note.labels = self._resolve_labels(item.get("labels", []))
                self._notes[note.id] = note
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Notes file {self.path} is corrupt: {e}") from e

        self._next_id = max(
            int(raw.get("next_id", 1)), max(self._notes, default=0) + 1
        )
        LOGGER.debug(
            "notes.store.loaded path=%s notes=%d labels=%d",
            self.path,
            len(self._notes),
            len(self._labels),
        )

    def _reload(self) -> None:
        self._notes = {}
        self._labels = {}
        self._next_id = 1
        self._load()

    def _save(self) -> None:
        data = {
            "version": STORE_VERSION,
            "next_id": self._next_id,
            "labels": [label.model_dump(mode="json") for label in self.labels()],
            "notes": [
                {"id": note.id, **note.to_json()}
                for note in sorted(self._notes.values(), key=lambda n: n.id or 0)
            ],
        }
        try:
            _atomic_write_json(self.path, data)
        except OSError as e:
            # Drop the unsaved changes so memory matches the file again.
            self._reload()
            raise StoreError(f"Cannot write notes file {self.path}: {e}") from e
        LOGGER.debug(
            "notes.store.saved path=%s notes=%d", self.path, len(self._notes)
        )

    def _resolve_labels(self, names: Iterable[str]) -> List[Label]:
        labels: List[Label] = []
        for name in names:
            label = self._labels.get(name)
            if label is None:
                # Labels referenced by a note but missing from the label list.
                label = Label(name=name)
                self._labels[name] = label
            if label not in labels:
                labels.append(label)
        return labels

    # ----------------------------- Notes --------------------------------------

    def add(self, note: Note, label_names: Iterable[str] = ()) -> Note:
        """Store `note` under a new id and return it."""
        note.id = self._next_id
        self._next_id += 1
        if label_names:
            note.labels = self._resolve_labels(label_names)
        else:
            note.labels = self._resolve_labels(label.name for label in note.labels)
        self._notes[note.id] = note
        self._save()
        LOGGER.info("notes.store.added id=%d", note.id)
        return note

    def get(self, note_id: int) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NoteNotFound(f"Note not found: {note_id}")
        return note

    def update(self, note: Note, *, touch: bool = True) -> Note:
        """Persist changes made to `note`; `touch` refreshes its edited time."""
        if note.id is None or note.id not in self._notes:
            raise NoteNotFound(f"Note not found: {note.id}")
        if touch:
            note.edited_time = _utc_now()
        self._notes[note.id] = note
        self._save()
        return note

    def remove(self, note_id: int) -> None:
        """Permanently delete a note."""
        if self._notes.pop(note_id, None) is None:
            raise NoteNotFound(f"Note not found: {note_id}")
        self._save()
        LOGGER.info("notes.store.removed id=%d", note_id)

    def notes(self, *, deleted: Optional[bool] = False) -> List[Note]:
        """Notes in the bin (`deleted=True`), out of it (False) or all (None)."""
        return [
            n for n in self._notes.values() if deleted is None or n.deleted == deleted
        ]

    def search(self, query: str) -> List[Note]:
        """Non-deleted notes whose title or plain text contains `query`."""
        needle = query.strip().lower()
        if not needle:
            return self.notes()
        found: List[Note] = []
        for note in self.notes():
            if needle in note.title.lower():
                found.append(note)
                continue
            try:
                text = note.plain_text
            except MalformedDocument:
                LOGGER.warning("notes.store.search_skip_content id=%s", note.id)
                continue
            if needle in text.lower():
                found.append(note)
        return found

    def empty_bin(self) -> int:
        deleted = [n.id for n in self.notes(deleted=True)]
        for note_id in deleted:
            del self._notes[note_id]
        if deleted:
            self._save()
        LOGGER.info("notes.store.bin_emptied count=%d", len(deleted))
        return len(deleted)

    # ----------------------------- Labels -------------------------------------

    def labels(self) -> List[Label]:
        return sorted(self._labels.values())

    def get_label(self, name: str) -> Label:
        label = self._labels.get(name)
        if label is None:
            raise LabelNotFound(f"Label not found: {name}")
        return label

    def add_label(self, name: str, *, visible: bool = True) -> Label:
        name = name.strip()
        if not name:
            raise ValueError("Label name must not be empty")
        if name in self._labels:
            raise LabelExistsError(f"Label already exists: {name}")
        label = Label(name=name, visible=visible)
        self._labels[name] = label
        self._save()
        return label

    def remove_label(self, name: str) -> None:
        label = self.get_label(name)
        for note in self._notes.values():
            if label in note.labels:
                note.labels = [lb for lb in note.labels if lb != label]
        del self._labels[name]
        self._save()

    def set_label_visibility(self, name: str, visible: bool) -> Label:
        label = self.get_label(name)
        label.visible = visible
        self._save()
        return label

    def assign_label(self, note_id: int, name: str) -> Note:
        note = self.get(note_id)
        label = self.get_label(name)
        if label not in note.labels:
            note.labels = [*note.labels, label]
            self.update(note)
        return note

    def unassign_label(self, note_id: int, name: str) -> Note:
        note = self.get(note_id)
        label = self.get_label(name)
        if label in note.labels:
            note.labels = [lb for lb in note.labels if lb != label]
            self.update(note)
        return note
