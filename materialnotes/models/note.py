"""Note and label models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from .._base import NotesModel
from ..document import (
    EMPTY_CONTENT,
    Document,
    encode_markdown,
    is_empty,
    parse_document,
    plain_text,
    preview_text,
)
from ..encryption import decrypt, encrypt
from ..utils import underscore_to_camelcase


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Label(NotesModel):
    """Label used to categorize notes. Labels are identified and ordered by name."""

    name: str
    visible: bool = True
    pinned: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Label):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: "Label") -> bool:
        return self.name < other.name


class Note(NotesModel):
    """Rich text note with title, content and metadata."""

    model_config = ConfigDict(alias_generator=underscore_to_camelcase)

    # Assigned by the store; None until the note is saved.
    id: Optional[int] = None
    deleted: bool = False
    pinned: bool = False
    # Last edition, including events such as toggling the pinned state.
    created_time: datetime = Field(default_factory=_utc_now)
    edited_time: datetime = Field(default_factory=_utc_now)
    title: str = ""
    # Rich text as serialized delta JSON.
    content: str = EMPTY_CONTENT
    labels: List[Label] = Field(default_factory=list)

    @field_validator("created_time", "edited_time")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def empty(cls) -> "Note":
        return cls()

    @classmethod
    def from_content(cls, content: str) -> "Note":
        return cls(content=content)

    # ----------------------------- JSON ---------------------------------------

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Note":
        """Note from exported JSON data.

        Labels are exported by name only and are not restored here; the store
        links them back.
        """
        fields = {k: v for k, v in data.items() if k not in ("id", "labels")}
        return cls.model_validate(fields)

    @classmethod
    def from_json_encrypted(cls, data: Dict[str, Any], password: str) -> "Note":
        note = cls.from_json(data)
        return note.model_copy(
            update={
                "title": "" if not note.title else decrypt(password, note.title),
                "content": decrypt(password, note.content),
            }
        )

    def to_json(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude={"id", "labels"})
        data["labels"] = [label.name for label in self.labels]
        return data

    def encrypted(self, password: str) -> "Note":
        """Copy of this note with the title (unless empty) and content encrypted."""
        return self.model_copy(
            update={
                "title": "" if self.is_title_empty else encrypt(password, self.title),
                "content": encrypt(password, self.content),
            }
        )

    # ----------------------------- Derived views ------------------------------

    @property
    def labels_visible_sorted(self) -> List[Label]:
        return sorted(label for label in self.labels if label.visible)

    @property
    def labels_names_visible_sorted(self) -> List[str]:
        return [label.name for label in self.labels_visible_sorted]

    @property
    def document(self) -> Document:
        """Parsed content. Raises MalformedDocument for invalid content."""
        return parse_document(self.content)

    @property
    def plain_text(self) -> str:
        return plain_text(self.document)

    @property
    def content_preview(self) -> str:
        """Content for the note tiles: checklist glyphs, no horizontal rules."""
        return preview_text(self.document)

    @property
    def markdown(self) -> str:
        return encode_markdown(self.document)

    @property
    def share_text(self) -> str:
        return f"{self.title}\n\n{self.content_preview}"

    @property
    def is_title_empty(self) -> bool:
        return not self.title

    @property
    def is_content_empty(self) -> bool:
        return self.content == EMPTY_CONTENT

    @property
    def is_content_preview_empty(self) -> bool:
        return not self.content_preview

    @property
    def is_empty(self) -> bool:
        """Both the title and the content preview are empty."""
        return is_empty(self.title, self.document)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)
