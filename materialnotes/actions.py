"""
Note actions shared by the note tiles, the editor menu and the CLI.

Swipe gestures map to a `DismissDirection` depending on which swipe actions
are enabled; performing an action returns whether the tile is dismissed
(i.e. the note leaves the current list).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from .models import Note
from .preferences import Confirmations, SwipeAction, SwipeDirection
from .store import NoteStore

LOGGER = logging.getLogger(__name__)


class DismissDirection(str, Enum):
    NONE = "none"
    HORIZONTAL = "horizontal"
    START_TO_END = "start_to_end"
    END_TO_START = "end_to_start"


class MenuOption(str, Enum):
    COPY = "copy"
    SHARE = "share"
    TOGGLE_PIN = "toggle_pin"
    SELECT_LABELS = "select_labels"
    DELETE = "delete"
    RESTORE = "restore"
    DELETE_PERMANENTLY = "delete_permanently"
    ABOUT = "about"


# ----------------------------- Note operations -------------------------------


def toggle_pin(store: NoteStore, note: Note) -> Note:
    note.pinned = not note.pinned
    LOGGER.debug("notes.actions.pin id=%s pinned=%s", note.id, note.pinned)
    return store.update(note)


def delete(store: NoteStore, note: Note) -> Note:
    """Move the note to the bin."""
    note.deleted = True
    LOGGER.debug("notes.actions.delete id=%s", note.id)
    return store.update(note)


def restore(store: NoteStore, note: Note) -> Note:
    note.deleted = False
    LOGGER.debug("notes.actions.restore id=%s", note.id)
    return store.update(note)


def delete_permanently(store: NoteStore, note: Note) -> None:
    if note.id is None:
        raise ValueError("Only stored notes can be deleted")
    store.remove(note.id)


def share_text(note: Note) -> str:
    return note.share_text


def requires_confirmation(confirmations: Confirmations, irreversible: bool) -> bool:
    if confirmations == Confirmations.ALL:
        return True
    if confirmations == Confirmations.IRREVERSIBLE:
        return irreversible
    return False


# ----------------------------- Tiles & menus ---------------------------------


def dismiss_direction(
    note: Note, right: SwipeAction, left: SwipeAction
) -> DismissDirection:
    """Swipe directions available on the tile of `note`.

    Deleted notes have no swipe actions.
    """
    if note.deleted:
        return DismissDirection.NONE
    if right.is_enabled and left.is_enabled:
        return DismissDirection.HORIZONTAL
    if right.is_enabled:
        return DismissDirection.START_TO_END
    if left.is_enabled:
        return DismissDirection.END_TO_START
    return DismissDirection.NONE


def swipe_action_for(
    direction: SwipeDirection, right: SwipeAction, left: SwipeAction
) -> SwipeAction:
    return right if direction == SwipeDirection.RIGHT else left


def perform_swipe_action(store: NoteStore, note: Note, action: SwipeAction) -> bool:
    """Run `action` on `note`; return True when the tile is dismissed."""
    if action == SwipeAction.DELETE:
        delete(store, note)
        return True
    if action == SwipeAction.TOGGLE_PIN:
        toggle_pin(store, note)
        return False
    if action in (SwipeAction.SHARE, SwipeAction.COPY):
        # Sharing and copying leave the note in place; the caller
        # delivers share_text(note) to the clipboard or share sheet.
        return False
    raise ValueError(f"Unexpected swipe action: {action!r}")


def menu_options(note: Note, enable_labels: bool) -> List[MenuOption]:
    """Editor menu entries for `note`."""
    if note.deleted:
        return [MenuOption.RESTORE, MenuOption.DELETE_PERMANENTLY, MenuOption.ABOUT]
    options = [MenuOption.COPY, MenuOption.SHARE, MenuOption.TOGGLE_PIN]
    if enable_labels:
        options.append(MenuOption.SELECT_LABELS)
    options.extend([MenuOption.DELETE, MenuOption.ABOUT])
    return options
