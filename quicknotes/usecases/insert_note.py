from __future__ import annotations

from dataclasses import dataclass

from quicknotes.domain.ports import InsertNoteParams, NotesRepository
from quicknotes.domain.result import Result


@dataclass
class InsertNote:
    repository: NotesRepository

    async def __call__(self, params: InsertNoteParams) -> Result[None]:
        return await self.repository.insert_note(params)


__all__ = ["InsertNote"]
