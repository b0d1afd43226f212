from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, TypeVar

from .entities import Note, NoteId
from .result import Result

P = TypeVar("P", contravariant=True)
T = TypeVar("T", covariant=True)


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Use case parameters ----
@dataclass(frozen=True)
class InsertNoteParams:
    title: Optional[str]


@dataclass(frozen=True)
class DeleteNoteParams:
    note_id: Optional[NoteId]


# ---- Ports (Hexagonal boundaries) ----
class TransportOutcome(Protocol):
    """What a remote call hands back before any classification."""

    @property
    def ok(self) -> bool: ...
    @property
    def status(self) -> int: ...
    @property
    def payload(self) -> Any: ...  # decoded body on success, else None
    @property
    def error_body(self) -> Any: ...  # decoded body on failure, else None


class NotesPort(Protocol):
    """Note endpoints of the remote API. Each call is one request, no retries."""

    async def get_notes(self) -> TransportOutcome: ...
    async def insert_note(self, title: Optional[str]) -> TransportOutcome: ...
    async def delete_note(self, note_id: Optional[NoteId]) -> TransportOutcome: ...
    async def clear_notes(self) -> TransportOutcome: ...
    def close(self) -> None: ...


class NotesRepository(Protocol):
    """Domain operations on notes, each returning a ``Result``."""

    async def get_notes(self) -> Result[Optional[List[Note]]]: ...
    async def insert_note(self, params: InsertNoteParams) -> Result[None]: ...
    async def delete_note(self, params: DeleteNoteParams) -> Result[None]: ...
    async def clear_notes(self) -> Result[None]: ...


class UseCase(Protocol[P, T]):
    """Single-operation callable: ``await use_case(params) -> Result``."""

    async def __call__(self, params: P) -> Result[T]: ...
