"""
Markdown codec for note documents.

The dialect is line oriented: every document line maps to exactly one
markdown line (plus the fences around code blocks), so that decoding an
encoded document yields the same tree.

    # Heading            heading 1..6
    **bold** _italic_ ~~strike~~ `code` [text](url)
    * item               bullet list (two spaces per indent level)
    1. item              numbered list
    - [ ] item / - [x]   checklist
    > text               quote
    ```                  code block fence
    ---                  horizontal rule
    ![](source)          image

Underline, colors, alignment and direction have no markdown form and are
dropped by `encode`.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from .tree import (
    PARAGRAPH,
    BlockType,
    Document,
    Embed,
    EmbedKind,
    InlineStyle,
    Line,
    LineItem,
    LineStyle,
    TextSegment,
)

LOGGER = logging.getLogger(__name__)

FENCE = "```"
RULE = "---"
INDENT = "  "

_ESCAPE_RE = re.compile(r"([\\`*_~!\[\]()])")
_NUMBERED_START_RE = re.compile(r"^( *\d+)\.( |$)")

_CHECKLIST_RE = re.compile(r"^( *)- \[( |x)\] (.*)$")
_BULLET_RE = re.compile(r"^( *)\* (.*)$")
_NUMBERED_RE = re.compile(r"^( *)\d+\. (.*)$")
_HEADING_RE = re.compile(r"^(#{1,6}) (.*)$")


def _escape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\\\1", text)


# ----------------------------- Encoding --------------------------------------


def _encode_segment(segment: TextSegment) -> str:
    style = segment.style
    out = _escape(segment.text)
    if style.code:
        out = f"`{out}`"
    if style.strikethrough:
        out = f"~~{out}~~"
    if style.italic:
        out = f"_{out}_"
    if style.bold:
        out = f"**{out}**"
    if style.link is not None:
        out = f"[{out}]({_escape(style.link)})"
    return out


def _encode_embed(embed: Embed) -> str:
    if embed.kind == EmbedKind.IMAGE:
        return f"![]({_escape(str(embed.get('source', '')))})"
    # Rules only exist as whole lines; other embeds have no markdown form.
    return ""


def _encode_items(items: Tuple[LineItem, ...]) -> str:
    parts: List[str] = []
    for item in items:
        if isinstance(item, TextSegment):
            parts.append(_encode_segment(item))
        else:
            parts.append(_encode_embed(item))
    return "".join(parts)


def _escape_code_line(text: str) -> str:
    """Code lines are raw; only a leading fence or backslash is escaped."""
    if text.startswith(FENCE) or text.startswith("\\"):
        return "\\" + text
    return text


def _protect_line_start(content: str, paragraph: bool) -> str:
    """Escape leading characters that would otherwise read as a block marker."""
    if content.startswith("#"):
        return "\\" + content
    if not paragraph:
        return content
    if content.startswith(">") or content == RULE:
        return "\\" + content
    m = _NUMBERED_START_RE.match(content)
    if m:
        return f"{m.group(1)}\\.{content[m.end(1) + 1:]}"
    return content


class MarkdownCodec:
    """Encode documents to markdown and decode them back."""

    def encode(self, document: Document) -> str:
        out: List[str] = []
        in_code = False
        numbers: Dict[int, int] = {}

        for line in document.lines:
            style = line.style
            if style.block != BlockType.NUMBERED_LIST:
                numbers.clear()
            if style.block == BlockType.CODE:
                if not in_code:
                    out.append(FENCE)
                    in_code = True
                out.append(_escape_code_line(line.text))
                continue
            if in_code:
                out.append(FENCE)
                in_code = False

            if (
                line.is_block_embed
                and line.items[0].kind == EmbedKind.HORIZONTAL_RULE
                and style == PARAGRAPH
            ):
                out.append(RULE)
                continue

            prefix = self._block_prefix(style, numbers)
            if style.heading:
                prefix += "#" * min(6, style.heading) + " "
            paragraph = style.block is None and not style.heading
            content = _protect_line_start(_encode_items(line.items), paragraph)
            out.append(prefix + content)

        if in_code:
            out.append(FENCE)
        return "\n".join(out)

    @staticmethod
    def _block_prefix(style: LineStyle, numbers: Dict[int, int]) -> str:
        indent = INDENT * style.indent
        if style.block == BlockType.BULLET_LIST:
            return f"{indent}* "
        if style.block == BlockType.NUMBERED_LIST:
            for deeper in [k for k in numbers if k > style.indent]:
                del numbers[deeper]
            numbers[style.indent] = numbers.get(style.indent, 0) + 1
            return f"{indent}{numbers[style.indent]}. "
        if style.block == BlockType.CHECKLIST:
            mark = "x" if style.checked else " "
            return f"{indent}- [{mark}] "
        if style.block == BlockType.QUOTE:
            return "> "
        return ""

    # ----------------------------- Decoding ----------------------------------

    def decode(self, text: str) -> Document:
        lines: List[Line] = []
        in_code = False

        for raw in text.split("\n"):
            if raw == FENCE:
                in_code = not in_code
                continue
            if in_code:
                if raw.startswith("\\"):
                    raw = raw[1:]
                items = (TextSegment(raw),) if raw else ()
                lines.append(Line(items=items, style=LineStyle(block=BlockType.CODE)))
                continue
            if raw == RULE:
                lines.append(Line(items=(Embed.horizontal_rule(),)))
                continue

            block, indent, checked, rest = self._split_block(raw)
            heading = None
            m = _HEADING_RE.match(rest)
            if m:
                heading = len(m.group(1))
                rest = m.group(2)
            style = LineStyle(
                block=block, checked=checked, heading=heading, indent=indent
            )
            lines.append(Line(items=tuple(_decode_inline(rest)), style=style))

        if in_code:
            LOGGER.debug("notes.markdown.unclosed_fence")
        return Document(lines=tuple(lines))

    @staticmethod
    def _split_block(raw: str) -> Tuple[Optional[BlockType], int, bool, str]:
        m = _CHECKLIST_RE.match(raw)
        if m:
            indent = len(m.group(1)) // 2
            return BlockType.CHECKLIST, indent, m.group(2) == "x", m.group(3)
        m = _BULLET_RE.match(raw)
        if m:
            return BlockType.BULLET_LIST, len(m.group(1)) // 2, False, m.group(2)
        m = _NUMBERED_RE.match(raw)
        if m:
            return BlockType.NUMBERED_LIST, len(m.group(1)) // 2, False, m.group(2)
        if raw.startswith("> "):
            return BlockType.QUOTE, 0, False, raw[2:]
        return None, 0, False, raw


def _scan_until(text: str, start: int, stop: str) -> Optional[Tuple[str, int]]:
    """Read from `start` up to the first unescaped `stop`.

    Returns the unescaped content and the index of `stop`, or None.
    """
    buf: List[str] = []
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n:
            buf.append(text[i + 1])
            i += 2
            continue
        if ch == stop:
            return "".join(buf), i
        buf.append(ch)
        i += 1
    return None


def _scan_raw_until(text: str, start: int, stop: str) -> Optional[int]:
    """Index of the first unescaped `stop` at or after `start`, or None."""
    i = start
    n = len(text)
    while i < n:
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == stop:
            return i
        i += 1
    return None


def _scan_link(text: str, start: int) -> Optional[Tuple[str, str, int]]:
    """Parse `[label](url)` with text[start] == "[".

    Returns the raw label, the unescaped url and the index after ")".
    """
    close = _scan_raw_until(text, start + 1, "]")
    if close is None or not text.startswith("(", close + 1):
        return None
    url = _scan_until(text, close + 2, ")")
    if url is None:
        return None
    return text[start + 1 : close], url[0], url[1] + 1


def _append(items: List[LineItem], item: LineItem) -> None:
    prev = items[-1] if items else None
    if (
        isinstance(item, TextSegment)
        and isinstance(prev, TextSegment)
        and prev.style == item.style
    ):
        items[-1] = TextSegment(prev.text + item.text, item.style)
    else:
        items.append(item)


def _decode_inline(
    text: str,
    *,
    link: Optional[str] = None,
    bold: bool = False,
    italic: bool = False,
    strike: bool = False,
) -> List[LineItem]:
    items: List[LineItem] = []
    buf: List[str] = []

    def add(content: str, code: bool = False) -> None:
        if content:
            style = InlineStyle(
                bold=bold, italic=italic, strikethrough=strike, code=code, link=link
            )
            _append(items, TextSegment(content, style))

    def flush() -> None:
        add("".join(buf))
        buf.clear()

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\" and i + 1 < n:
            buf.append(text[i + 1])
            i += 2
            continue
        if text.startswith("**", i):
            flush()
            bold = not bold
            i += 2
            continue
        if text.startswith("~~", i):
            flush()
            strike = not strike
            i += 2
            continue
        if ch == "_":
            flush()
            italic = not italic
            i += 1
            continue
        if ch == "`":
            code = _scan_until(text, i + 1, "`")
            if code is not None:
                flush()
                add(code[0], code=True)
                i = code[1] + 1
                continue
        if ch == "!" and text.startswith("![", i):
            parsed = _scan_link(text, i + 1)
            if parsed is not None:
                flush()
                items.append(Embed.image(parsed[1]))
                i = parsed[2]
                continue
        if ch == "[":
            parsed = _scan_link(text, i)
            if parsed is not None:
                flush()
                for item in _decode_inline(
                    parsed[0], link=parsed[1], bold=bold, italic=italic, strike=strike
                ):
                    _append(items, item)
                i = parsed[2]
                continue
        buf.append(ch)
        i += 1
    flush()
    return items


_CODEC = MarkdownCodec()


def encode_markdown(document: Document) -> str:
    return _CODEC.encode(document)


def decode_markdown(text: str) -> Document:
    return _CODEC.decode(text)
