"""Use case for removing every note on the server."""

from __future__ import annotations

from dataclasses import dataclass

from quicknotes.domain.ports import NotesRepository
from quicknotes.domain.result import Result


@dataclass
class ClearNotes:
    repository: NotesRepository

    async def __call__(self, params: None = None) -> Result[None]:
        return await self.repository.clear_notes()


__all__ = ["ClearNotes"]
