"""Tests for the plain text and preview derivations."""

import json
import os
import unittest

from materialnotes.document import (
    EMPTY_CONTENT,
    document_from_text,
    dump_document,
    is_empty,
    parse_document,
    plain_text,
    preview_text,
)


def preview(ops):
    return preview_text(parse_document(json.dumps(ops)))


class PreviewTextTest(unittest.TestCase):
    def test_single_line(self):
        self.assertEqual(preview([{"insert": "Hello\n"}]), "Hello")

    def test_horizontal_rule_elided(self):
        result = preview(
            [{"insert": "A\n"}, {"insert": {"_type": "hr"}}, {"insert": "B\n"}]
        )
        self.assertIn("A", result)
        self.assertIn("B", result)
        self.assertNotIn("hr", result)
        self.assertNotIn("{", result)

    def test_checked_item(self):
        result = preview(
            [
                {"insert": "Buy milk"},
                {"insert": "\n", "attributes": {"block": "cl", "checked": True}},
            ]
        )
        self.assertIn("✅ Buy milk", result)

    def test_unchecked_item(self):
        result = preview(
            [{"insert": "Buy milk"}, {"insert": "\n", "attributes": {"block": "cl"}}]
        )
        self.assertIn("⬜ Buy milk", result)

    def test_glyph_prefixes_whole_styled_line(self):
        result = preview(
            [
                {"insert": "Buy "},
                {"insert": "fresh", "attributes": {"b": True}},
                {"insert": " milk"},
                {"insert": "\n", "attributes": {"block": "cl", "checked": True}},
            ]
        )
        self.assertEqual(result, "✅ Buy fresh milk")

    def test_checklist_inside_longer_note(self):
        result = preview(
            [
                {"insert": "Todo\none"},
                {"insert": "\n", "attributes": {"block": "cl"}},
                {"insert": "two"},
                {"insert": "\n", "attributes": {"block": "cl", "checked": True}},
                {"insert": "end\n"},
            ]
        )
        self.assertEqual(result, "Todo\n⬜ one\n✅ two\nend")

    def test_stripped(self):
        self.assertEqual(preview([{"insert": "\n\n  Hi  \n\n"}]), "Hi")

    def test_fixture(self):
        path = os.path.join(os.path.dirname(__file__), "fixtures", "note_fixture.json")
        with open(path, "r", encoding="utf-8") as f:
            fixture = json.load(f)
        document = parse_document(json.dumps(fixture["delta"]))
        self.assertEqual(preview_text(document), fixture["preview"])
        self.assertEqual(plain_text(document), fixture["plain_text"])


class PlainTextTest(unittest.TestCase):
    def test_empty_document(self):
        document = parse_document(EMPTY_CONTENT)
        self.assertEqual(plain_text(document), "")
        self.assertEqual(preview_text(document), "")

    def test_no_lines(self):
        document = parse_document("[]")
        self.assertEqual(plain_text(document), "")
        self.assertEqual(preview_text(document), "")

    def test_no_checklist_glyphs(self):
        document = parse_document(
            json.dumps(
                [{"insert": "Task"}, {"insert": "\n", "attributes": {"block": "cl"}}]
            )
        )
        self.assertEqual(plain_text(document), "Task")

    def test_embeds_have_no_text(self):
        document = parse_document(
            json.dumps(
                [
                    {"insert": "x"},
                    {"insert": {"_type": "image", "source": "a.png"}},
                    {"insert": "\n"},
                ]
            )
        )
        self.assertEqual(plain_text(document), "x")

    def test_document_from_text(self):
        document = document_from_text("first\n\nthird")
        self.assertEqual(plain_text(document), "first\n\nthird")
        self.assertEqual(dump_document(document_from_text("")), EMPTY_CONTENT)


class IsEmptyTest(unittest.TestCase):
    def test_empty(self):
        self.assertTrue(is_empty("", parse_document(EMPTY_CONTENT)))

    def test_title_not_empty(self):
        self.assertFalse(is_empty("Title", parse_document(EMPTY_CONTENT)))

    def test_content_not_empty(self):
        self.assertFalse(is_empty("", parse_document('[{"insert":"x\\n"}]')))

    def test_only_a_rule_is_empty(self):
        document = parse_document('[{"insert":{"_type":"hr"}},{"insert":"\\n"}]')
        self.assertTrue(is_empty("", document))


if __name__ == "__main__":
    unittest.main()
