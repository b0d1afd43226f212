"""Domain entities shared across adapters, use cases and viewmodels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType, Optional

NoteId = NewType("NoteId", str)


@dataclass(frozen=True)
class Note:
    """One note as shown in the list.

    Every field is optional because the remote payload may omit any of them.
    Notes are never patched in place; each fetch replaces the whole list.

    Attributes:
        id: Server-side identifier used for deletion.
        title: Note text entered by the user.
        time: Creation timestamp exactly as reported by the server.
    """

    id: Optional[NoteId] = None
    title: Optional[str] = None
    time: Optional[str] = None


__all__ = ["Note", "NoteId"]
