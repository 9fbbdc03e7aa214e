"""Tests for the delta content format."""

import json
import os
import unittest

from materialnotes.document import (
    EMPTY_CONTENT,
    BlockType,
    Document,
    EmbedKind,
    InlineStyle,
    Line,
    LineStyle,
    TextSegment,
    document_to_delta,
    dump_document,
    parse_document,
)
from materialnotes.exceptions import MalformedDocument


class ParseDocumentTest(unittest.TestCase):
    def setUp(self):
        path = os.path.join(os.path.dirname(__file__), "fixtures", "note_fixture.json")
        with open(path, "r", encoding="utf-8") as f:
            self.fixture = json.load(f)

    def test_empty_content(self):
        document = parse_document(EMPTY_CONTENT)
        self.assertEqual(len(document), 1)
        self.assertEqual(document.lines[0], Line())

    def test_empty_list(self):
        self.assertEqual(len(parse_document("[]")), 0)

    def test_lines_take_the_trailing_newline_style(self):
        document = parse_document(json.dumps(self.fixture["delta"]))
        styles = [line.style for line in document]
        self.assertEqual(styles[0], LineStyle(heading=1))
        self.assertEqual(styles[1], LineStyle(block=BlockType.CHECKLIST, checked=True))
        self.assertEqual(styles[2], LineStyle(block=BlockType.CHECKLIST))
        self.assertEqual(styles[4], LineStyle(block=BlockType.BULLET_LIST))
        self.assertEqual(len(document), 6)

    def test_inline_styles(self):
        document = parse_document(json.dumps(self.fixture["delta"]))
        self.assertEqual(
            document.lines[0].items, (TextSegment("Groceries", InlineStyle(bold=True)),)
        )
        self.assertEqual(
            document.lines[5].items,
            (
                TextSegment("See "),
                TextSegment("shop", InlineStyle(link="https://example.com")),
            ),
        )

    def test_embed_line(self):
        document = parse_document(json.dumps(self.fixture["delta"]))
        line = document.lines[3]
        self.assertTrue(line.is_block_embed)
        self.assertEqual(line.embeds[0].kind, EmbedKind.HORIZONTAL_RULE)

    def test_multiline_insert_splits_lines(self):
        document = parse_document('[{"insert":"one\\ntwo\\n"}]')
        self.assertEqual([line.text for line in document], ["one", "two"])

    def test_checked_false_is_unchecked(self):
        content = json.dumps(
            [
                {"insert": "Task"},
                {"insert": "\n", "attributes": {"block": "cl", "checked": False}},
            ]
        )
        style = parse_document(content).lines[0].style
        self.assertTrue(style.is_checklist)
        self.assertFalse(style.checked)

    def test_unknown_attributes_ignored(self):
        content = json.dumps(
            [
                {"insert": "x", "attributes": {"sparkle": True, "b": True}},
                {"insert": "\n", "attributes": {"block": "table"}},
            ]
        )
        line = parse_document(content).lines[0]
        self.assertEqual(line.items, (TextSegment("x", InlineStyle(bold=True)),))
        self.assertIsNone(line.style.block)

    def test_unknown_embed(self):
        content = '[{"insert":{"_type":"video","src":"v"}},{"insert":"\\n"}]'
        embed = parse_document(content).lines[0].embeds[0]
        self.assertEqual(embed.kind, EmbedKind.UNKNOWN)
        self.assertEqual(embed.get("src"), "v")

    def test_adjacent_equal_styles_merge(self):
        document = parse_document('[{"insert":"ab"},{"insert":"cd\\n"}]')
        self.assertEqual(document.lines[0].items, (TextSegment("abcd"),))

    def test_malformed_json(self):
        with self.assertRaises(MalformedDocument) as ctx:
            parse_document("not json")
        self.assertEqual(ctx.exception.content, "not json")

    def test_malformed_operations(self):
        for content in ('{"insert":"\\n"}', '[{"delete":1}]', '[{"insert":5}]'):
            with self.subTest(content=content):
                with self.assertRaises(MalformedDocument):
                    parse_document(content)

    def test_missing_trailing_newline(self):
        with self.assertRaises(MalformedDocument):
            parse_document('[{"insert":"no newline"}]')
        with self.assertRaises(MalformedDocument):
            parse_document('[{"insert":{"_type":"hr"}}]')


class DumpDocumentTest(unittest.TestCase):
    def test_empty_line_dumps_to_empty_content(self):
        self.assertEqual(dump_document(Document(lines=(Line(),))), EMPTY_CONTENT)

    def test_fixture_round_trip(self):
        path = os.path.join(os.path.dirname(__file__), "fixtures", "note_fixture.json")
        with open(path, "r", encoding="utf-8") as f:
            delta = json.load(f)["delta"]
        document = parse_document(json.dumps(delta))
        self.assertEqual(parse_document(dump_document(document)), document)

    def test_plain_text_merges_newlines(self):
        document = Document(
            lines=(Line(items=(TextSegment("a"),)), Line(items=(TextSegment("b"),)))
        )
        self.assertEqual(document_to_delta(document), [{"insert": "a\nb\n"}])

    def test_block_attributes_on_newline(self):
        document = Document(
            lines=(
                Line(
                    items=(TextSegment("done"),),
                    style=LineStyle(block=BlockType.CHECKLIST, checked=True),
                ),
            )
        )
        self.assertEqual(
            document_to_delta(document),
            [
                {"insert": "done"},
                {"insert": "\n", "attributes": {"block": "cl", "checked": True}},
            ],
        )

    def test_non_ascii_kept(self):
        document = Document(lines=(Line(items=(TextSegment("café"),)),))
        self.assertEqual(dump_document(document), '[{"insert":"café\\n"}]')


if __name__ == "__main__":
    unittest.main()
