"""Public exports for note data models."""

from __future__ import annotations

from .note import Label, Note

__all__ = [
    "Label",
    "Note",
]
