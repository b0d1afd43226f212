from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from quicknotes.domain.entities import Note
from quicknotes.domain.mapping import ignore_payload, notes_from_response
from quicknotes.domain.ports import (
    DeleteNoteParams,
    InsertNoteParams,
    NotesPort,
    NotesRepository,
)
from quicknotes.domain.result import Result

from .boundary import perform_request


@dataclass
class NotesRepositoryImpl(NotesRepository):
    """Notes operations on top of a ``NotesPort``.

    Every method is exactly one remote attempt through ``perform_request``.
    """

    port: NotesPort

    async def get_notes(self) -> Result[Optional[List[Note]]]:
        return await perform_request(
            self.port.get_notes, notes_from_response, context="get_notes"
        )

    async def insert_note(self, params: InsertNoteParams) -> Result[None]:
        return await perform_request(
            lambda: self.port.insert_note(params.title),
            ignore_payload,
            context="insert_note",
        )

    async def delete_note(self, params: DeleteNoteParams) -> Result[None]:
        return await perform_request(
            lambda: self.port.delete_note(params.note_id),
            ignore_payload,
            context="delete_note",
        )

    async def clear_notes(self) -> Result[None]:
        return await perform_request(
            self.port.clear_notes, ignore_payload, context="clear_notes"
        )


__all__ = ["NotesRepositoryImpl"]
