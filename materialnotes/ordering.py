"""
Note ordering.

Pinned notes always come first; inside each partition notes are ordered by the
chosen sort method and direction. The preferences are explicit arguments so
the comparator is a pure function.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterable, List

from .exceptions import InvalidSortKey
from .models.note import Note
from .preferences import SortMethod


def _cmp(x: Any, y: Any) -> int:
    return (x > y) - (x < y)


def compare(a: Note, b: Note, sort_method: SortMethod, ascending: bool) -> int:
    """Return -1, 0 or 1 as `a` sorts before, with, or after `b`."""
    if not isinstance(sort_method, SortMethod):
        raise InvalidSortKey(f"The sort method is not valid: {sort_method!r}")

    if a.pinned and not b.pinned:
        return -1
    if not a.pinned and b.pinned:
        return 1

    if sort_method == SortMethod.CREATED_DATE:
        result = _cmp(a.created_time, b.created_time)
    elif sort_method == SortMethod.EDITED_DATE:
        result = _cmp(a.edited_time, b.edited_time)
    else:
        result = _cmp(a.title, b.title)
    return result if ascending else -result


def comparator(sort_method: SortMethod, ascending: bool) -> Callable[[Note, Note], int]:
    if not isinstance(sort_method, SortMethod):
        raise InvalidSortKey(f"The sort method is not valid: {sort_method!r}")
    return functools.partial(compare, sort_method=sort_method, ascending=ascending)


def sort_notes(
    notes: Iterable[Note], sort_method: SortMethod, ascending: bool
) -> List[Note]:
    """Return a new, stably sorted list; ties keep their input order."""
    key = functools.cmp_to_key(comparator(sort_method, ascending))
    return sorted(notes, key=key)
