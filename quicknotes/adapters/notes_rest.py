# quicknotes/adapters/notes_rest.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import requests

from quicknotes.domain.entities import NoteId
from quicknotes.domain.ports import NotesPort

from .api_errors import ApiError, parse_error_payload
from .http_client import ApiSession, HttpConfig


@dataclass(frozen=True)
class HttpOutcome:
    """Unclassified result of one HTTP exchange."""

    ok: bool
    status: int
    payload: Any = None
    error_body: Any = None


class NotesRestAdapter(NotesPort):
    """REST adapter for the ``/notes`` endpoints.

    ``requests`` is blocking, so each call runs in a worker thread via
    ``asyncio.to_thread``. Awaiting that is the only suspension point of a
    notes operation; cancelling the awaiting task abandons the response.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: float = 10,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("NotesRestAdapter requires a base URL")
        self.base_url = base_url.strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s)
        self.session = ApiSession(api_key, self.cfg)
        self._log = logging.getLogger(__name__)

    # ---------- NotesPort ----------

    async def get_notes(self) -> HttpOutcome:
        return await asyncio.to_thread(self._get_notes)

    async def insert_note(self, title: Optional[str]) -> HttpOutcome:
        return await asyncio.to_thread(self._insert_note, title)

    async def delete_note(self, note_id: Optional[NoteId]) -> HttpOutcome:
        return await asyncio.to_thread(self._delete_note, note_id)

    async def clear_notes(self) -> HttpOutcome:
        return await asyncio.to_thread(self._clear_notes)

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self.session.close()

    # ---------- Blocking calls ----------

    def _get_notes(self) -> HttpOutcome:
        url = self._make_url("/notes")
        return self._outcome(self.session.get(url), f"GET {url}", strict_json=True)

    def _insert_note(self, title: Optional[str]) -> HttpOutcome:
        url = self._make_url("/notes")
        resp = self.session.post(url, json_body={"title": title})
        return self._outcome(resp, f"POST {url}")

    def _delete_note(self, note_id: Optional[NoteId]) -> HttpOutcome:
        if note_id is None or not str(note_id).strip():
            raise ValueError("Note id is required for deletion.")
        url = self._make_url(f"/notes/{quote(str(note_id), safe='')}")
        return self._outcome(self.session.delete(url), f"DELETE {url}")

    def _clear_notes(self) -> HttpOutcome:
        url = self._make_url("/notes/clear")
        return self._outcome(self.session.post(url), f"POST {url}")

    # ---------- Helpers ----------

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _outcome(
        self, resp: requests.Response, ctx: str, *, strict_json: bool = False
    ) -> HttpOutcome:
        status = resp.status_code
        self._log.debug("%s -> HTTP %s", ctx, status)
        if 200 <= status < 300:
            return HttpOutcome(ok=True, status=status, payload=self._body(resp, ctx, strict_json))
        return HttpOutcome(ok=False, status=status, error_body=parse_error_payload(resp))

    @staticmethod
    def _body(resp: requests.Response, ctx: str, strict_json: bool) -> Any:
        text = getattr(resp, "text", "") or ""
        if not text.strip():
            return None
        try:
            return resp.json()
        except ValueError:
            # Delete and clear answer with plain text.
            if strict_json:
                raise ApiError(
                    f"Invalid JSON response: {text[:400]}",
                    status=resp.status_code,
                    context=ctx,
                )
            return text


__all__ = ["HttpOutcome", "NotesRestAdapter"]
