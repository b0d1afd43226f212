from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

import pytest
from requests import exceptions as req_exc

from quicknotes.adapters.api_errors import ApiError, ApiTimeoutError
from quicknotes.adapters.notes_rest import HttpOutcome, NotesRestAdapter


class _ResponseStub:
    def __init__(self, body: Any, status_code: int = 200) -> None:
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)
        self._body = body

    def json(self) -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body


class _SessionStub:
    def __init__(self, responses: Sequence[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def _next(self, method: str, url: str, **kwargs: Any) -> _ResponseStub:
        self.calls.append({"method": method, "url": url, **kwargs})
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url: str, **kwargs: Any) -> _ResponseStub:
        return self._next("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> _ResponseStub:
        return self._next("POST", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> _ResponseStub:
        return self._next("DELETE", url, **kwargs)

    def close(self) -> None:
        self.closed = True


def _adapter(responses: Sequence[Any], *, api_key: Optional[str] = None) -> tuple:
    adapter = NotesRestAdapter("http://notes.local/api/", api_key=api_key, request_timeout_s=3)
    stub = _SessionStub(responses)
    adapter.session.session = stub  # type: ignore[assignment]
    return adapter, stub


def test_get_notes_hits_notes_endpoint_and_decodes_json() -> None:
    payload = {"size": 1, "data": [{"_id": "1", "title": "A"}]}
    adapter, stub = _adapter([_ResponseStub(payload)], api_key="secret")

    outcome = asyncio.run(adapter.get_notes())

    assert outcome == HttpOutcome(ok=True, status=200, payload=payload)
    call = stub.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://notes.local/api/notes"
    assert call["headers"]["Accept"] == "application/json"
    assert call["headers"]["X-API-Key"] == "secret"
    assert call["timeout"] == 3


def test_insert_note_posts_title_as_json() -> None:
    adapter, stub = _adapter([_ResponseStub({"message": "ok", "note": {"_id": "9"}}, 201)])

    outcome = asyncio.run(adapter.insert_note("Buy milk"))

    assert outcome.ok and outcome.status == 201
    call = stub.calls[0]
    assert call["url"] == "http://notes.local/api/notes"
    assert json.loads(call["data"]) == {"title": "Buy milk"}
    assert call["headers"]["Content-Type"] == "application/json"


def test_delete_note_quotes_id_and_keeps_plain_text_body() -> None:
    adapter, stub = _adapter([_ResponseStub("Note deleted")])

    outcome = asyncio.run(adapter.delete_note("a/b"))

    assert stub.calls[0]["method"] == "DELETE"
    assert stub.calls[0]["url"] == "http://notes.local/api/notes/a%2Fb"
    assert outcome == HttpOutcome(ok=True, status=200, payload="Note deleted")


def test_delete_note_without_id_raises_before_any_request() -> None:
    adapter, stub = _adapter([])

    with pytest.raises(ValueError):
        asyncio.run(adapter.delete_note(None))
    assert stub.calls == []


def test_clear_notes_posts_clear_endpoint() -> None:
    adapter, stub = _adapter([_ResponseStub("")])

    outcome = asyncio.run(adapter.clear_notes())

    assert stub.calls[0]["method"] == "POST"
    assert stub.calls[0]["url"] == "http://notes.local/api/notes/clear"
    assert outcome == HttpOutcome(ok=True, status=200, payload=None)


def test_non_success_keeps_status_and_error_body() -> None:
    adapter, _ = _adapter([_ResponseStub({"message": "Note not found"}, 404)])

    outcome = asyncio.run(adapter.delete_note("missing"))

    assert outcome == HttpOutcome(
        ok=False, status=404, payload=None, error_body={"message": "Note not found"}
    )


def test_get_notes_with_malformed_json_raises_api_error() -> None:
    adapter, _ = _adapter([_ResponseStub("<html>oops</html>")])

    with pytest.raises(ApiError) as info:
        asyncio.run(adapter.get_notes())
    assert "Invalid JSON response" in str(info.value)


def test_timeout_is_translated_to_api_timeout_error() -> None:
    adapter, stub = _adapter([req_exc.Timeout("slow")])

    with pytest.raises(ApiTimeoutError):
        asyncio.run(adapter.get_notes())
    assert len(stub.calls) == 1


def test_adapter_requires_base_url() -> None:
    with pytest.raises(ValueError):
        NotesRestAdapter("  ")


def test_close_releases_the_requests_session() -> None:
    adapter, stub = _adapter([])

    adapter.close()

    assert stub.closed is True
