from __future__ import annotations

import asyncio
from typing import Any, List, Tuple

from quicknotes.domain.entities import Note, NoteId
from quicknotes.domain.ports import DeleteNoteParams, InsertNoteParams
from quicknotes.domain.result import Failure, Success
from quicknotes.usecases import ClearNotes, DeleteNote, GetNotes, InsertNote


class _RepositoryStub:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: List[Tuple[str, Any]] = []

    async def get_notes(self):
        self.calls.append(("get_notes", None))
        return self.result

    async def insert_note(self, params: InsertNoteParams):
        self.calls.append(("insert_note", params))
        return self.result

    async def delete_note(self, params: DeleteNoteParams):
        self.calls.append(("delete_note", params))
        return self.result

    async def clear_notes(self):
        self.calls.append(("clear_notes", None))
        return self.result


def test_get_notes_returns_repository_result_unchanged() -> None:
    expected = Success([Note(id=NoteId("1"), title="A")])
    repository = _RepositoryStub(expected)

    result = asyncio.run(GetNotes(repository)(None))

    assert result is expected
    assert repository.calls == [("get_notes", None)]


def test_insert_note_forwards_params() -> None:
    repository = _RepositoryStub(Success(None))
    params = InsertNoteParams(title="Buy milk")

    asyncio.run(InsertNote(repository)(params))

    assert repository.calls == [("insert_note", params)]


def test_delete_note_propagates_failure_unchanged() -> None:
    expected = Failure(RuntimeError("boom"))
    repository = _RepositoryStub(expected)
    params = DeleteNoteParams(note_id=NoteId("7"))

    result = asyncio.run(DeleteNote(repository)(params))

    assert result is expected
    assert repository.calls == [("delete_note", params)]


def test_clear_notes_takes_no_params() -> None:
    repository = _RepositoryStub(Success(None))

    result = asyncio.run(ClearNotes(repository)())

    assert result == Success(None)
    assert repository.calls == [("clear_notes", None)]
