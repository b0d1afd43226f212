from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import List, Mapping, Optional

from quicknotes.domain.entities import Note
from quicknotes.domain.ports import DeleteNoteParams, InsertNoteParams, UseCase

from .notes_contract import (
    CLEAR_NOTES_VIEW_STATE,
    DELETE_NOTE_VIEW_STATE,
    INSERT_NOTE_VIEW_STATE,
    NOTES_UI_EVENTS,
    NOTES_VIEW_STATE,
    ClearNotes,
    DeleteNote,
    GetNotes,
    InsertNote,
    NotesUiEvent,
    NotesUiState,
    UpdateInputText,
)
from .stateful_vm import ErrorNotifier, EventHandler, StatefulViewModel


class NotesVM(StatefulViewModel[NotesUiState, NotesUiEvent]):
    """Notes screen state: list, insert, delete and clear operations.

    Insert, delete and clear refresh the list after a success by calling the
    fetch coroutine directly (one level, never through ``dispatch``).
    """

    def __init__(
        self,
        *,
        get_notes: UseCase[None, Optional[List[Note]]],
        insert_note: UseCase[InsertNoteParams, None],
        delete_note: UseCase[DeleteNoteParams, None],
        clear_notes: UseCase[None, None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
        on_error: Optional[ErrorNotifier] = None,
    ) -> None:
        self._get_notes = get_notes
        self._insert_note = insert_note
        self._delete_note = delete_note
        self._clear_notes = clear_notes
        super().__init__(
            NotesUiState(),
            event_types=NOTES_UI_EVENTS,
            loop=loop,
            on_error=on_error,
        )

    def event_handlers(self) -> Mapping[type, EventHandler]:
        return {
            GetNotes: self._on_get_notes,
            InsertNote: self._on_insert_note,
            DeleteNote: self._on_delete_note,
            ClearNotes: self._on_clear_notes,
            UpdateInputText: self._on_update_input_text,
        }

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    async def _on_get_notes(self, event: GetNotes) -> None:
        await self._fetch_notes()

    async def _on_update_input_text(self, event: UpdateInputText) -> None:
        self.update_state(lambda state: replace(state, input_text=event.text))

    async def _on_insert_note(self, event: InsertNote) -> None:
        title = self.state.input_text
        if not self.state.able_to_insert_note():
            self._log.debug("Insert skipped: empty input")
            return
        token = self.enter_loading(INSERT_NOTE_VIEW_STATE)
        result = await self._insert_note(InsertNoteParams(title=title))
        inserted = self.fold_result(
            INSERT_NOTE_VIEW_STATE,
            token,
            result,
            on_success=lambda state: replace(state, input_text=""),
        )
        if inserted:
            await self._fetch_notes()

    async def _on_delete_note(self, event: DeleteNote) -> None:
        token = self.enter_loading(DELETE_NOTE_VIEW_STATE)
        result = await self._delete_note(DeleteNoteParams(note_id=event.note_id))
        if self.fold_result(DELETE_NOTE_VIEW_STATE, token, result):
            await self._fetch_notes()

    async def _on_clear_notes(self, event: ClearNotes) -> None:
        token = self.enter_loading(CLEAR_NOTES_VIEW_STATE)
        result = await self._clear_notes(None)
        if self.fold_result(CLEAR_NOTES_VIEW_STATE, token, result):
            await self._fetch_notes()

    async def _fetch_notes(self) -> None:
        token = self.enter_loading(NOTES_VIEW_STATE)
        result = await self._get_notes(None)
        self.fold_result(NOTES_VIEW_STATE, token, result)


__all__ = ["NotesVM"]
