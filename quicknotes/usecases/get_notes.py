"""Use case for reading the full note list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from quicknotes.domain.entities import Note
from quicknotes.domain.ports import NotesRepository
from quicknotes.domain.result import Result


@dataclass
class GetNotes:
    """Fetch every note through ``NotesRepository``."""

    repository: NotesRepository

    async def __call__(self, params: None = None) -> Result[Optional[List[Note]]]:
        return await self.repository.get_notes()


__all__ = ["GetNotes"]
