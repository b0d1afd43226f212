"""Events and UI state of the notes screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from quicknotes.domain.entities import Note, NoteId

from .view_state import IDLE, ViewState

NOTES_VIEW_STATE = "notes_view_state"
INSERT_NOTE_VIEW_STATE = "insert_note_view_state"
DELETE_NOTE_VIEW_STATE = "delete_note_view_state"
CLEAR_NOTES_VIEW_STATE = "clear_notes_view_state"


# ---- Events ----
@dataclass(frozen=True)
class GetNotes:
    pass


@dataclass(frozen=True)
class InsertNote:
    """Insert a note titled with the current input text."""


@dataclass(frozen=True)
class DeleteNote:
    note_id: Optional[NoteId]


@dataclass(frozen=True)
class ClearNotes:
    pass


@dataclass(frozen=True)
class UpdateInputText:
    text: str


NotesUiEvent = Union[GetNotes, InsertNote, DeleteNote, ClearNotes, UpdateInputText]
NOTES_UI_EVENTS = (GetNotes, InsertNote, DeleteNote, ClearNotes, UpdateInputText)


# ---- State ----
@dataclass(frozen=True)
class NotesUiState:
    """Snapshot rendered by the notes screen.

    ``error`` is the last failure of any operation; the per-operation fields
    keep their own ``Error`` for inline display.
    """

    error: Optional[BaseException] = None
    notes_view_state: ViewState[Optional[List[Note]]] = IDLE
    insert_note_view_state: ViewState[None] = IDLE
    delete_note_view_state: ViewState[None] = IDLE
    clear_notes_view_state: ViewState[None] = IDLE
    input_text: str = ""

    def able_to_insert_note(self) -> bool:
        return bool(self.input_text)


__all__ = [
    "CLEAR_NOTES_VIEW_STATE",
    "ClearNotes",
    "DELETE_NOTE_VIEW_STATE",
    "DeleteNote",
    "GetNotes",
    "INSERT_NOTE_VIEW_STATE",
    "InsertNote",
    "NOTES_UI_EVENTS",
    "NOTES_VIEW_STATE",
    "NotesUiEvent",
    "NotesUiState",
    "UpdateInputText",
]
