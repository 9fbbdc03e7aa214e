"""
Debug helpers for mapping delta operations to the lines they build.

These utilities are intended for troubleshooting preview and markdown issues.
They do not perform any I/O and can be safely used in tests.
"""

from __future__ import annotations

import html
from typing import Dict, List

from .tree import Document, Embed, TextSegment


def map_lines(document: Document) -> List[Dict[str, object]]:
    """Return a list of dictionaries describing each document line.

    Each dict contains:
      - index: line index
      - text: the line's plain text
      - block, checked, heading, indent: the line style
      - segments: number of text segments
      - embeds: embed kinds carried by the line
    """
    out: List[Dict[str, object]] = []
    for idx, line in enumerate(document.lines):
        style = line.style
        out.append(
            {
                "index": idx,
                "text": line.text,
                "block": style.block.value if style.block is not None else None,
                "checked": style.checked,
                "heading": style.heading,
                "indent": style.indent,
                "segments": sum(1 for i in line.items if isinstance(i, TextSegment)),
                "embeds": [i.kind.value for i in line.items if isinstance(i, Embed)],
            }
        )
    return out


def annotate_lines_html(document: Document) -> str:
    """Render a simple HTML table of `map_lines` output for side-by-side inspection."""
    rows = map_lines(document)
    parts: List[str] = [
        "<table><thead><tr><th>#</th><th>block</th><th>checked</th>"
        "<th>heading</th><th>indent</th><th>embeds</th><th>text</th></tr>"
        "</thead><tbody>"
    ]
    for r in rows:
        embeds = ", ".join(str(e) for e in r["embeds"])  # type: ignore[union-attr]
        parts.append(
            "<tr>"
            f"<td>{r['index']}</td>"
            f"<td>{html.escape(str(r['block'] or ''))}</td>"
            f"<td>{'yes' if r['checked'] else ''}</td>"
            f"<td>{r['heading'] or ''}</td>"
            f"<td>{r['indent']}</td>"
            f"<td>{html.escape(embeds)}</td>"
            f"<td><code>{html.escape(str(r['text']))}</code></td>"
            "</tr>"
        )
    parts.append("</tbody></table>")
    return "".join(parts)
