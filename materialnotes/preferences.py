"""
User preferences.

Preferences are persisted as a flat JSON object. Each value is validated on
its own: a malformed or unknown value is reset to its default (and logged)
instead of invalidating the whole file.
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from ._base import NotesModel

LOGGER = logging.getLogger(__name__)


class SortMethod(str, Enum):
    """Secondary sort key applied after the pinned partition."""

    CREATED_DATE = "created_date"
    EDITED_DATE = "edited_date"
    TITLE = "title"


class SwipeAction(str, Enum):
    DISABLED = "disabled"
    DELETE = "delete"
    TOGGLE_PIN = "toggle_pin"
    SHARE = "share"
    COPY = "copy"

    @property
    def is_enabled(self) -> bool:
        return self != SwipeAction.DISABLED

    @property
    def is_disabled(self) -> bool:
        return self == SwipeAction.DISABLED


class SwipeDirection(str, Enum):
    RIGHT = "right"
    LEFT = "left"


class Layout(str, Enum):
    LIST = "list"
    GRID = "grid"


class Confirmations(str, Enum):
    """Which user actions ask for a confirmation."""

    NONE = "none"
    IRREVERSIBLE = "irreversible"
    ALL = "all"


class Preferences(NotesModel):
    sort_method: SortMethod = SortMethod.EDITED_DATE
    sort_ascending: bool = False
    layout: Layout = Layout.LIST
    right_swipe_action: SwipeAction = SwipeAction.TOGGLE_PIN
    left_swipe_action: SwipeAction = SwipeAction.DELETE
    confirmations: Confirmations = Confirmations.IRREVERSIBLE
    enable_labels: bool = True
    show_labels_list_on_note_tile: bool = True
    show_titles_only: bool = False

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Preferences":
        """Build preferences, resetting malformed values to their defaults."""
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in cls.model_fields:
                LOGGER.debug("notes.preferences.unknown key=%s", key)
                continue
            try:
                cls.model_validate({key: raw})
            except ValidationError:
                LOGGER.warning(
                    "notes.preferences.reset key=%s value=%r default=%r",
                    key,
                    raw,
                    cls.model_fields[key].default,
                )
                continue
            values[key] = raw
        return cls.model_validate(values)

    def with_value(self, key: str, raw: Any) -> "Preferences":
        """Return a copy with `key` set to `raw`, validated.

        Raises ValueError for an unknown key and ValidationError for a bad value.
        """
        if key not in type(self).model_fields:
            raise ValueError(f"Unknown preference: {key}")
        data = self.model_dump(mode="json")
        data[key] = raw
        return type(self).model_validate(data)


def load_preferences(path: Union[str, Path]) -> Preferences:
    path = Path(path)
    if not path.exists():
        return Preferences()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        LOGGER.warning("notes.preferences.unreadable path=%s err=%s", path, exc)
        return Preferences()
    if not isinstance(data, dict):
        LOGGER.warning("notes.preferences.not_an_object path=%s", path)
        return Preferences()
    return Preferences.from_mapping(data)


def save_preferences(preferences: Preferences, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(preferences.model_dump(mode="json"), f, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)
    LOGGER.debug("notes.preferences.saved path=%s", path)
