"""
Typed document tree built from a delta.

A document is a sequence of lines. Each line holds text segments and embeds,
plus the block-level style that the delta format stores on the line's
trailing newline operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class BlockType(str, Enum):
    BULLET_LIST = "ul"
    NUMBERED_LIST = "ol"
    CHECKLIST = "cl"
    QUOTE = "quote"
    CODE = "code"


_LIST_BLOCKS = (BlockType.BULLET_LIST, BlockType.NUMBERED_LIST, BlockType.CHECKLIST)


class EmbedKind(str, Enum):
    HORIZONTAL_RULE = "hr"
    IMAGE = "image"
    UNKNOWN = "unknown"

    @classmethod
    def from_type(cls, value: Any) -> "EmbedKind":
        for kind in (cls.HORIZONTAL_RULE, cls.IMAGE):
            if value == kind.value:
                return kind
        return cls.UNKNOWN


@dataclass(frozen=True)
class InlineStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    link: Optional[str] = None
    foreground: Optional[int] = None
    background: Optional[int] = None

    def to_attributes(self) -> Dict[str, Any]:
        attrs: Dict[str, Any] = {}
        if self.bold:
            attrs["b"] = True
        if self.italic:
            attrs["i"] = True
        if self.underline:
            attrs["u"] = True
        if self.strikethrough:
            attrs["s"] = True
        if self.code:
            attrs["c"] = True
        if self.link is not None:
            attrs["a"] = self.link
        if self.foreground is not None:
            attrs["fg"] = self.foreground
        if self.background is not None:
            attrs["bg"] = self.background
        return attrs


PLAIN = InlineStyle()


@dataclass(frozen=True)
class LineStyle:
    block: Optional[BlockType] = None
    checked: bool = False
    heading: Optional[int] = None
    indent: int = 0
    alignment: Optional[str] = None
    direction: Optional[str] = None

    @property
    def is_checklist(self) -> bool:
        return self.block == BlockType.CHECKLIST

    @property
    def is_list(self) -> bool:
        return self.block in _LIST_BLOCKS

    def to_attributes(self) -> Dict[str, Any]:
        attrs: Dict[str, Any] = {}
        if self.heading is not None:
            attrs["heading"] = self.heading
        if self.block is not None:
            attrs["block"] = self.block.value
        if self.checked:
            attrs["checked"] = True
        if self.indent:
            attrs["indent"] = self.indent
        if self.alignment is not None:
            attrs["alignment"] = self.alignment
        if self.direction is not None:
            attrs["direction"] = self.direction
        return attrs


PARAGRAPH = LineStyle()


@dataclass(frozen=True)
class TextSegment:
    text: str
    style: InlineStyle = PLAIN


@dataclass(frozen=True)
class Embed:
    kind: EmbedKind
    # Raw embed payload as stored in the delta, "_type" included.
    data: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Embed":
        return cls(
            kind=EmbedKind.from_type(payload.get("_type")),
            data=tuple(payload.items()),
        )

    @classmethod
    def horizontal_rule(cls) -> "Embed":
        return cls.from_payload({"_type": "hr", "_inline": False})

    @classmethod
    def image(cls, source: str) -> "Embed":
        return cls.from_payload(
            {"_type": "image", "_inline": False, "source_type": "url", "source": source}
        )

    @property
    def payload(self) -> Dict[str, Any]:
        return dict(self.data)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)


LineItem = Union[TextSegment, Embed]


@dataclass(frozen=True)
class Line:
    items: Tuple[LineItem, ...] = ()
    style: LineStyle = PARAGRAPH

    @property
    def text(self) -> str:
        return "".join(i.text for i in self.items if isinstance(i, TextSegment))

    @property
    def embeds(self) -> Tuple[Embed, ...]:
        return tuple(i for i in self.items if isinstance(i, Embed))

    @property
    def is_block_embed(self) -> bool:
        """True when the line holds a single embed and no text."""
        return len(self.items) == 1 and isinstance(self.items[0], Embed)


@dataclass(frozen=True)
class Document:
    lines: Tuple[Line, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
