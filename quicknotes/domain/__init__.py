"""Domain package exports for entities, results and ports."""

from .entities import Note, NoteId
from .mapping import note_from_payload, notes_from_response
from .ports import (
    DeleteNoteParams,
    InsertNoteParams,
    NotesPort,
    NotesRepository,
    TransportOutcome,
    UseCase,
    UseCaseError,
)
from .result import Failure, Result, Success

__all__ = [
    "DeleteNoteParams",
    "Failure",
    "InsertNoteParams",
    "Note",
    "NoteId",
    "NotesPort",
    "NotesRepository",
    "Result",
    "Success",
    "TransportOutcome",
    "UseCase",
    "UseCaseError",
    "note_from_payload",
    "notes_from_response",
]
