"""Pure conversions from raw transport payloads to domain entities.

All functions here are total: malformed or missing input maps to ``None``
(or ``False``), never to an exception.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .entities import Note, NoteId

ID_KEY = "_id"
TITLE_KEY = "title"
TIME_KEY = "createdTime"


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def note_from_payload(raw: Any) -> Optional[Note]:
    """Map one note object (``{"_id", "title", "createdTime"}``) to ``Note``."""
    if not isinstance(raw, Mapping):
        return None
    note_id = _optional_text(raw.get(ID_KEY))
    return Note(
        id=NoteId(note_id) if note_id is not None else None,
        title=_optional_text(raw.get(TITLE_KEY)),
        time=_optional_text(raw.get(TIME_KEY)),
    )


def notes_from_response(raw: Any) -> Optional[List[Note]]:
    """Map a list response (``{"size": n, "data": [...]}``) to notes.

    Returns ``None`` when the response or its ``data`` field is absent.
    Entries that are not objects are skipped.
    """
    if not isinstance(raw, Mapping):
        return None
    data = raw.get("data")
    if not isinstance(data, list):
        return None
    notes: List[Note] = []
    for entry in data:
        note = note_from_payload(entry)
        if note is not None:
            notes.append(note)
    return notes


def ignore_payload(raw: Any) -> None:
    """Transform for operations whose response body carries nothing useful."""
    return None


__all__ = [
    "ignore_payload",
    "note_from_payload",
    "notes_from_response",
]
