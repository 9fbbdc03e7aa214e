"""Tests for the note and label models."""

import json
import os
import unittest
from datetime import datetime, timezone
from unittest import mock

from materialnotes._base import _env_extra_mode
from materialnotes.document import EMPTY_CONTENT
from materialnotes.exceptions import DecryptionError, MalformedDocument
from materialnotes.models import Label, Note


class NoteModelTest(unittest.TestCase):
    def setUp(self):
        path = os.path.join(os.path.dirname(__file__), "fixtures", "note_fixture.json")
        with open(path, "r", encoding="utf-8") as f:
            self.fixture = json.load(f)
        data = dict(self.fixture["note"], content=json.dumps(self.fixture["delta"]))
        self.note = Note.from_json(data)

    def test_empty(self):
        note = Note.empty()
        self.assertEqual(note.title, "")
        self.assertEqual(note.content, EMPTY_CONTENT)
        self.assertFalse(note.pinned)
        self.assertFalse(note.deleted)
        self.assertTrue(note.is_empty)
        self.assertTrue(note.is_content_empty)

    def test_from_content(self):
        note = Note.from_content('[{"insert":"x\\n"}]')
        self.assertEqual(note.plain_text, "x")
        self.assertFalse(note.is_empty)

    def test_from_json(self):
        self.assertEqual(self.note.title, "Shopping")
        self.assertTrue(self.note.pinned)
        self.assertEqual(
            self.note.created_time, datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        )
        self.assertIsNone(self.note.id)
        self.assertEqual(self.note.labels, [])

    def test_naive_times_are_utc(self):
        note = Note(created_time=datetime(2024, 1, 1, 12, 0))
        self.assertEqual(note.created_time.tzinfo, timezone.utc)

    def test_to_json(self):
        self.note.labels = [Label(name="home"), Label(name="errands")]
        data = self.note.to_json()
        self.assertEqual(
            set(data),
            {
                "deleted",
                "pinned",
                "createdTime",
                "editedTime",
                "title",
                "content",
                "labels",
            },
        )
        self.assertEqual(data["labels"], ["home", "errands"])
        self.assertEqual(Note.from_json(data).content, self.note.content)

    def test_derived_views(self):
        self.assertEqual(self.note.plain_text, self.fixture["plain_text"])
        self.assertEqual(self.note.content_preview, self.fixture["preview"])
        self.assertEqual(self.note.markdown, self.fixture["markdown"])
        self.assertEqual(
            self.note.share_text, "Shopping\n\n" + self.fixture["preview"]
        )

    def test_malformed_content(self):
        note = Note(content="{broken")
        with self.assertRaises(MalformedDocument):
            note.content_preview

    def test_is_empty_with_title(self):
        self.assertFalse(Note(title="t").is_empty)

    def test_visible_labels_sorted(self):
        self.note.labels = [
            Label(name="work"),
            Label(name="hidden", visible=False),
            Label(name="home"),
        ]
        self.assertEqual(self.note.labels_names_visible_sorted, ["home", "work"])

    def test_equality_by_id(self):
        a = Note(id=1, title="a")
        b = Note(id=1, title="b")
        self.assertEqual(a, b)
        self.assertNotEqual(Note(title="a"), Note(title="a"))
        self.assertEqual(len({a, b}), 1)


class EncryptedNoteTest(unittest.TestCase):
    def test_round_trip(self):
        note = Note(title="Secret", content='[{"insert":"hidden\\n"}]')
        encrypted = note.encrypted("pw")
        self.assertNotEqual(encrypted.title, note.title)
        self.assertNotEqual(encrypted.content, note.content)
        self.assertEqual(note.title, "Secret")

        restored = Note.from_json_encrypted(encrypted.to_json(), "pw")
        self.assertEqual(restored.title, "Secret")
        self.assertEqual(restored.content, note.content)

    def test_empty_title_stays_empty(self):
        encrypted = Note(content='[{"insert":"x\\n"}]').encrypted("pw")
        self.assertEqual(encrypted.title, "")
        self.assertEqual(Note.from_json_encrypted(encrypted.to_json(), "pw").title, "")

    def test_wrong_password(self):
        encrypted = Note(title="t").encrypted("pw")
        with self.assertRaises(DecryptionError):
            Note.from_json_encrypted(encrypted.to_json(), "other")


class LabelTest(unittest.TestCase):
    def test_identity_by_name(self):
        self.assertEqual(Label(name="a"), Label(name="a", visible=False))
        self.assertLess(Label(name="a"), Label(name="b"))
        self.assertEqual(len({Label(name="a"), Label(name="a")}), 1)


class ExtraModeTest(unittest.TestCase):
    def test_env_extra_mode(self):
        cases = {"forbid": "forbid", "ALLOW": "allow", "on": "forbid", "off": "ignore"}
        for raw, expected in cases.items():
            with mock.patch.dict(os.environ, {"MATERIALNOTES_EXTRA": raw}):
                self.assertEqual(_env_extra_mode(), expected)
        with mock.patch.dict(os.environ, {"MATERIALNOTES_EXTRA": "bogus"}):
            self.assertEqual(_env_extra_mode(), "ignore")


if __name__ == "__main__":
    unittest.main()
