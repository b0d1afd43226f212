from __future__ import annotations

from typing import Any, Callable, List, Optional

from quicknotes.adapters.notes_repository import NotesRepositoryImpl
from quicknotes.domain.ports import NotesPort, UseCaseError
from quicknotes.usecases import ClearNotes, DeleteNote, GetNotes, InsertNote
from quicknotes.viewmodels.notes_contract import NotesUiState
from quicknotes.viewmodels.notes_vm import NotesVM


def make_notes_vm(
    port: NotesPort,
    *,
    on_error: Optional[Callable[[UseCaseError], None]] = None,
) -> NotesVM:
    repository = NotesRepositoryImpl(port)
    return NotesVM(
        get_notes=GetNotes(repository),
        insert_note=InsertNote(repository),
        delete_note=DeleteNote(repository),
        clear_notes=ClearNotes(repository),
        on_error=on_error,
    )


class StateRecorder:
    """Collects every snapshot emitted by a viewmodel."""

    def __init__(self) -> None:
        self.states: List[NotesUiState] = []

    def __call__(self, state: NotesUiState) -> None:
        self.states.append(state)

    def field_history(self, field: str) -> List[Any]:
        history: List[Any] = []
        for state in self.states:
            value = getattr(state, field)
            if not history or history[-1] != value:
                history.append(value)
        return history


__all__ = ["StateRecorder", "make_notes_vm"]
