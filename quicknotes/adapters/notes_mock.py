from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from quicknotes.domain.entities import NoteId
from quicknotes.domain.ports import NotesPort

from .notes_rest import HttpOutcome


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass
class NotesMock(NotesPort):
    """Offline substitute for ``NotesRestAdapter`` with deterministic responses.

    Notes are kept in wire format so the real mapper runs on them. ``delay_s``
    simulates network latency at the same await point a real call suspends.
    """

    delay_s: float = 0.0
    clock: Callable[[], str] = _utc_now

    def __post_init__(self) -> None:
        self._notes: List[Dict[str, Any]] = []
        self._next_id = 1
        self._failures: Dict[str, List[Any]] = {}
        self.calls: List[str] = []
        self.closed = False

    # ---------- NotesPort ----------

    async def get_notes(self) -> HttpOutcome:
        failure = await self._call("get_notes")
        if failure is not None:
            return failure
        notes = [dict(note) for note in self._notes]
        return HttpOutcome(ok=True, status=200, payload={"size": len(notes), "data": notes})

    async def insert_note(self, title: Optional[str]) -> HttpOutcome:
        failure = await self._call("insert_note")
        if failure is not None:
            return failure
        note = {"_id": str(self._next_id), "title": title, "createdTime": self.clock()}
        self._next_id += 1
        self._notes.append(note)
        return HttpOutcome(ok=True, status=201, payload={"message": "Note created", "note": dict(note)})

    async def delete_note(self, note_id: Optional[NoteId]) -> HttpOutcome:
        failure = await self._call("delete_note")
        if failure is not None:
            return failure
        remaining = [note for note in self._notes if note.get("_id") != note_id]
        if len(remaining) == len(self._notes):
            return HttpOutcome(ok=False, status=404, error_body={"message": "Note not found"})
        self._notes = remaining
        return HttpOutcome(ok=True, status=200, payload="Note deleted")

    async def clear_notes(self) -> HttpOutcome:
        failure = await self._call("clear_notes")
        if failure is not None:
            return failure
        self._notes = []
        return HttpOutcome(ok=True, status=200, payload="Notes cleared")

    def close(self) -> None:
        self.closed = True

    # ---------- Test helpers ----------

    def seed(self, *titles: str) -> None:
        for title in titles:
            self._notes.append(
                {"_id": str(self._next_id), "title": title, "createdTime": self.clock()}
            )
            self._next_id += 1

    def fail_next(self, operation: str, *, status: int, body: Any = None) -> None:
        """Make the next ``operation`` call answer with a non-success status."""
        self._failures.setdefault(operation, []).append(
            HttpOutcome(ok=False, status=status, error_body=body)
        )

    def raise_next(self, operation: str, exc: Exception) -> None:
        """Make the next ``operation`` call raise ``exc``."""
        self._failures.setdefault(operation, []).append(exc)

    # ---------- Internals ----------

    async def _call(self, operation: str) -> Optional[HttpOutcome]:
        self.calls.append(operation)
        await asyncio.sleep(self.delay_s)
        queued = self._failures.get(operation)
        if not queued:
            return None
        failure = queued.pop(0)
        if isinstance(failure, Exception):
            raise failure
        return failure


__all__ = ["NotesMock"]
