"""
Delta wire format for note content.

Content is persisted as a JSON array of insert operations:

    [{"insert": "Buy milk"}, {"insert": "\\n", "attributes": {"block": "cl"}}]

Block-level attributes (list type, checked state, heading...) sit on the
newline that terminates a line; inline attributes sit on the text itself.
`parse_document` groups operations into lines and returns a typed `Document`;
`dump_document` writes it back in the same compact form.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    ConfigDict,
    Field,
    JsonValue,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .._base import NotesModel
from ..exceptions import MalformedDocument
from .tree import (
    BlockType,
    Document,
    Embed,
    InlineStyle,
    Line,
    LineItem,
    LineStyle,
    TextSegment,
)

LOGGER = logging.getLogger(__name__)

EMPTY_CONTENT = '[{"insert":"\\n"}]'


class DeltaAttributes(NotesModel):
    """Attribute vocabulary of the delta format; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    bold: Optional[bool] = Field(default=None, alias="b")
    italic: Optional[bool] = Field(default=None, alias="i")
    underline: Optional[bool] = Field(default=None, alias="u")
    strikethrough: Optional[bool] = Field(default=None, alias="s")
    code: Optional[bool] = Field(default=None, alias="c")
    link: Optional[str] = Field(default=None, alias="a")
    foreground: Optional[int] = Field(default=None, alias="fg")
    background: Optional[int] = Field(default=None, alias="bg")

    heading: Optional[int] = None
    block: Optional[BlockType] = None
    checked: Optional[bool] = None
    indent: Optional[int] = None
    alignment: Optional[str] = None
    direction: Optional[str] = None

    @field_validator("block", mode="before")
    @classmethod
    def _known_block(cls, v):
        if v is None:
            return None
        try:
            return BlockType(v)
        except ValueError:
            LOGGER.debug("notes.delta.unknown_block value=%r", v)
            return None

    def inline_style(self) -> InlineStyle:
        return InlineStyle(
            bold=bool(self.bold),
            italic=bool(self.italic),
            underline=bool(self.underline),
            strikethrough=bool(self.strikethrough),
            code=bool(self.code),
            link=self.link,
            foreground=self.foreground,
            background=self.background,
        )

    def line_style(self) -> LineStyle:
        return LineStyle(
            block=self.block,
            checked=bool(self.checked),
            heading=self.heading,
            indent=max(0, self.indent or 0),
            alignment=self.alignment,
            direction=self.direction,
        )


_NO_ATTRIBUTES = DeltaAttributes()


class DeltaOperation(NotesModel):
    model_config = ConfigDict(extra="forbid")

    insert: Union[StrictStr, Dict[str, JsonValue]]
    attributes: Optional[DeltaAttributes] = None


_OPERATIONS = TypeAdapter(List[DeltaOperation])


def _append_text(items: List[LineItem], text: str, style: InlineStyle) -> None:
    if items and isinstance(items[-1], TextSegment) and items[-1].style == style:
        items[-1] = TextSegment(items[-1].text + text, style)
    else:
        items.append(TextSegment(text, style))


def build_document(operations: List[DeltaOperation]) -> Document:
    """Group validated operations into lines."""
    if operations:
        last = operations[-1].insert
        if not isinstance(last, str) or not last.endswith("\n"):
            raise MalformedDocument("Document must end with a newline")

    lines: List[Line] = []
    items: List[LineItem] = []
    for op in operations:
        attrs = op.attributes or _NO_ATTRIBUTES
        if not isinstance(op.insert, str):
            items.append(Embed.from_payload(op.insert))
            continue
        style = attrs.inline_style()
        parts = op.insert.split("\n")
        for idx, part in enumerate(parts):
            if part:
                _append_text(items, part, style)
            if idx < len(parts) - 1:
                lines.append(Line(items=tuple(items), style=attrs.line_style()))
                items = []
    return Document(lines=tuple(lines))


def parse_document(content: str) -> Document:
    """Parse serialized delta JSON into a `Document`.

    Raises MalformedDocument when the content is not valid delta JSON.
    """
    try:
        raw = json.loads(content)
    except (TypeError, ValueError) as e:
        LOGGER.debug("notes.delta.json_fail %s", e)
        raise MalformedDocument(f"Content is not valid JSON: {e}", content) from e
    try:
        operations = _OPERATIONS.validate_python(raw)
    except ValidationError as e:
        LOGGER.debug("notes.delta.validation_fail errors=%d", e.error_count())
        raise MalformedDocument(f"Content is not a delta document: {e}", content) from e
    try:
        return build_document(operations)
    except MalformedDocument as e:
        e.content = content
        raise


def _push(ops: List[Dict[str, Any]], text: str, attributes: Dict[str, Any]) -> None:
    if ops:
        prev = ops[-1]
        if isinstance(prev["insert"], str) and prev.get("attributes", {}) == attributes:
            prev["insert"] += text
            return
    op: Dict[str, Any] = {"insert": text}
    if attributes:
        op["attributes"] = attributes
    ops.append(op)


def document_to_delta(document: Document) -> List[Dict[str, Any]]:
    """Return the list of insert operations for `document`."""
    ops: List[Dict[str, Any]] = []
    for line in document.lines:
        for item in line.items:
            if isinstance(item, TextSegment):
                _push(ops, item.text, item.style.to_attributes())
            else:
                ops.append({"insert": item.payload})
        _push(ops, "\n", line.style.to_attributes())
    return ops


def dump_document(document: Document) -> str:
    """Serialize `document` to compact delta JSON."""
    return json.dumps(
        document_to_delta(document), ensure_ascii=False, separators=(",", ":")
    )
