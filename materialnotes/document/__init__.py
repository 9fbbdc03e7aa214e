"""Rich note content: delta parsing and text derivations.

Contains:
- tree: typed document lines, inline and line styles, embeds
- delta: parse/dump of the persisted JSON delta format
- flattener: plain text and tile preview text
- markdown: line-oriented markdown codec
- debug_tools: line dumps for troubleshooting
"""

from .delta import EMPTY_CONTENT, document_to_delta, dump_document, parse_document
from .flattener import document_from_text, is_empty, plain_text, preview_text
from .markdown import MarkdownCodec, decode_markdown, encode_markdown
from .tree import (
    BlockType,
    Document,
    Embed,
    EmbedKind,
    InlineStyle,
    Line,
    LineStyle,
    TextSegment,
)

__all__ = [
    "EMPTY_CONTENT",
    "BlockType",
    "Document",
    "Embed",
    "EmbedKind",
    "InlineStyle",
    "Line",
    "LineStyle",
    "MarkdownCodec",
    "TextSegment",
    "decode_markdown",
    "document_from_text",
    "document_to_delta",
    "dump_document",
    "encode_markdown",
    "is_empty",
    "parse_document",
    "plain_text",
    "preview_text",
]
