"""
Plain-text views of a note document.

Pure functions over a parsed `Document`; the tree is only read, never mutated.
"""

from __future__ import annotations

from .tree import Document, Line, TextSegment

CHECKED_GLYPH = "✅"
UNCHECKED_GLYPH = "⬜"


def plain_text(document: Document) -> str:
    """Text of every line joined by newlines. Embeds contribute nothing."""
    return "\n".join(line.text for line in document.lines)


def _preview_line(line: Line) -> str:
    # Horizontal rules and other embeds have no text form.
    text = "".join(i.text for i in line.items if isinstance(i, TextSegment))
    if line.style.is_checklist:
        glyph = CHECKED_GLYPH if line.style.checked else UNCHECKED_GLYPH
        return f"{glyph} {text}"
    return text


def preview_text(document: Document) -> str:
    """Text for note tiles.

    Checklist lines are prefixed with a checked/unchecked glyph taken from the
    line's own style, horizontal rules are skipped, and the result is stripped.
    """
    return "\n".join(_preview_line(line) for line in document.lines).strip()


def is_empty(title: str, document: Document) -> bool:
    return not title and not preview_text(document)


def document_from_text(text: str) -> Document:
    """Unstyled document with one paragraph per line of `text`."""
    return Document(
        lines=tuple(
            Line(items=(TextSegment(part),) if part else ())
            for part in text.split("\n")
        )
    )
