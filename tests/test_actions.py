"""Tests for note actions, swipe gestures and menus."""

import shutil
import tempfile
import unittest
from pathlib import Path

from materialnotes import actions
from materialnotes.actions import DismissDirection, MenuOption
from materialnotes.exceptions import NoteNotFound
from materialnotes.models import Note
from materialnotes.preferences import Confirmations, SwipeAction, SwipeDirection
from materialnotes.store import NoteStore

D = SwipeAction.DISABLED
DEL = SwipeAction.DELETE
PIN = SwipeAction.TOGGLE_PIN


class StoreActionsTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.store = NoteStore(self.tmpdir / "notes.json")
        self.note = self.store.add(Note(title="t"))

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_toggle_pin(self):
        actions.toggle_pin(self.store, self.note)
        self.assertTrue(self.note.pinned)
        actions.toggle_pin(self.store, self.note)
        self.assertFalse(self.note.pinned)

    def test_delete_and_restore(self):
        actions.delete(self.store, self.note)
        self.assertEqual(self.store.notes(deleted=True), [self.note])
        actions.restore(self.store, self.note)
        self.assertEqual(self.store.notes(), [self.note])

    def test_delete_permanently(self):
        actions.delete_permanently(self.store, self.note)
        with self.assertRaises(NoteNotFound):
            self.store.get(self.note.id)

    def test_delete_permanently_unsaved(self):
        with self.assertRaises(ValueError):
            actions.delete_permanently(self.store, Note())

    def test_swipe_delete_dismisses(self):
        self.assertTrue(actions.perform_swipe_action(self.store, self.note, DEL))
        self.assertTrue(self.note.deleted)

    def test_swipe_pin_keeps_tile(self):
        self.assertFalse(actions.perform_swipe_action(self.store, self.note, PIN))
        self.assertTrue(self.note.pinned)

    def test_swipe_share_and_copy_keep_note(self):
        for action in (SwipeAction.SHARE, SwipeAction.COPY):
            dismissed = actions.perform_swipe_action(self.store, self.note, action)
            self.assertFalse(dismissed)
        self.assertFalse(self.note.deleted)
        self.assertFalse(self.note.pinned)

    def test_swipe_disabled(self):
        with self.assertRaises(ValueError):
            actions.perform_swipe_action(self.store, self.note, D)

    def test_share_text(self):
        note = Note(title="Title", content='[{"insert":"Body\\n"}]')
        self.assertEqual(actions.share_text(note), "Title\n\nBody")


class DismissDirectionTest(unittest.TestCase):
    def test_table(self):
        cases = [
            (PIN, DEL, DismissDirection.HORIZONTAL),
            (PIN, D, DismissDirection.START_TO_END),
            (D, DEL, DismissDirection.END_TO_START),
            (D, D, DismissDirection.NONE),
        ]
        for right, left, expected in cases:
            with self.subTest(right=right, left=left):
                self.assertEqual(
                    actions.dismiss_direction(Note(), right, left), expected
                )

    def test_deleted_note_cannot_swipe(self):
        note = Note(deleted=True)
        self.assertEqual(
            actions.dismiss_direction(note, PIN, DEL), DismissDirection.NONE
        )

    def test_swipe_action_for(self):
        self.assertEqual(actions.swipe_action_for(SwipeDirection.RIGHT, PIN, DEL), PIN)
        self.assertEqual(actions.swipe_action_for(SwipeDirection.LEFT, PIN, DEL), DEL)


class MenuOptionsTest(unittest.TestCase):
    def test_note(self):
        self.assertEqual(
            actions.menu_options(Note(), enable_labels=True),
            [
                MenuOption.COPY,
                MenuOption.SHARE,
                MenuOption.TOGGLE_PIN,
                MenuOption.SELECT_LABELS,
                MenuOption.DELETE,
                MenuOption.ABOUT,
            ],
        )

    def test_labels_disabled(self):
        options = actions.menu_options(Note(), enable_labels=False)
        self.assertNotIn(MenuOption.SELECT_LABELS, options)

    def test_deleted_note(self):
        self.assertEqual(
            actions.menu_options(Note(deleted=True), enable_labels=True),
            [MenuOption.RESTORE, MenuOption.DELETE_PERMANENTLY, MenuOption.ABOUT],
        )


class ConfirmationTest(unittest.TestCase):
    def test_requires_confirmation(self):
        self.assertFalse(actions.requires_confirmation(Confirmations.NONE, True))
        self.assertTrue(actions.requires_confirmation(Confirmations.IRREVERSIBLE, True))
        self.assertFalse(
            actions.requires_confirmation(Confirmations.IRREVERSIBLE, False)
        )
        self.assertTrue(actions.requires_confirmation(Confirmations.ALL, False))


if __name__ == "__main__":
    unittest.main()
