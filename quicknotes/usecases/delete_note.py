from __future__ import annotations

from dataclasses import dataclass

from quicknotes.domain.ports import DeleteNoteParams, NotesRepository
from quicknotes.domain.result import Result


@dataclass
class DeleteNote:
    repository: NotesRepository

    async def __call__(self, params: DeleteNoteParams) -> Result[None]:
        return await self.repository.delete_note(params)


__all__ = ["DeleteNote"]
