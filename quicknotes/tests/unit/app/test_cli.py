from __future__ import annotations

import asyncio
import io

import pytest
from requests import exceptions as req_exc

from quicknotes.adapters.notes_mock import NotesMock
from quicknotes.app import main as app_main
from quicknotes.app.config import AppConfig
from quicknotes.domain.entities import Note, NoteId
from quicknotes.viewmodels.notes_contract import NotesUiState
from quicknotes.viewmodels.view_state import LOADING, Error, Success


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ("QUICKNOTES_API_URL", "QUICKNOTES_API_KEY", "QUICKNOTES_TIMEOUT_S", "QUICKNOTES_MOCK"):
        monkeypatch.delenv(name, raising=False)


def test_console_renderer_prints_only_on_list_changes() -> None:
    out = io.StringIO()
    renderer = app_main.ConsoleRenderer(out)
    notes = [Note(NoteId("1"), "A", "t0")]

    renderer(NotesUiState())
    renderer(NotesUiState(notes_view_state=LOADING))
    renderer(NotesUiState(notes_view_state=LOADING, input_text="typing"))
    renderer(NotesUiState(notes_view_state=Success(notes)))
    renderer(NotesUiState(notes_view_state=Error(RuntimeError("x"))))

    lines = out.getvalue().splitlines()
    assert lines[0] == "Loading notes..."
    assert len(lines) == 2
    assert lines[1].split() == ["1", "t0", "A"]


def test_main_add_with_mock_prints_new_note(capsys) -> None:
    code = app_main.main(["--mock", "add", "Buy milk"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Buy milk" in captured.out
    assert captured.err == ""


def test_main_delete_missing_note_reports_error(capsys) -> None:
    code = app_main.main(["--mock", "delete", "42"])

    captured = capsys.readouterr()
    assert code == 1
    assert "error: Note not found." in captured.err


def test_main_rejects_bad_timeout(capsys) -> None:
    assert app_main.main(["--mock", "--timeout", "0", "list"]) == 2
    assert "request_timeout_s" in capsys.readouterr().err


def test_run_uses_given_port_through_build_notes_vm(monkeypatch) -> None:
    port = NotesMock(clock=lambda: "t0")
    port.seed("A")
    monkeypatch.setattr(app_main, "build_port", lambda config: port)
    out, err = io.StringIO(), io.StringIO()
    args = app_main._parse_args(["clear"])

    code = asyncio.run(app_main.run(args, AppConfig(), out=out, err=err))

    assert code == 0
    assert port.calls == ["clear_notes", "get_notes"]
    assert out.getvalue().splitlines()[-1] == "No notes."
    assert port.closed is True


def test_build_port_picks_rest_adapter_by_default() -> None:
    port = app_main.build_port(AppConfig(api_base_url="http://notes.local/api"))

    assert isinstance(port, app_main.NotesRestAdapter)
    assert port.base_url == "http://notes.local/api"


class _UnreachableSession:
    def __init__(self) -> None:
        self.closed = False

    def get(self, url, **kwargs):
        raise req_exc.ConnectionError("connection refused")

    def close(self) -> None:
        self.closed = True


def test_run_closes_http_session_after_failed_request(monkeypatch) -> None:
    session = _UnreachableSession()
    real_build_port = app_main.build_port

    def _build_port(config):
        port = real_build_port(config)
        port.session.session = session
        return port

    monkeypatch.setattr(app_main, "build_port", _build_port)
    err = io.StringIO()
    config = AppConfig(api_base_url="http://notes.local/api", request_timeout_s=0.2)

    code = asyncio.run(app_main.run(app_main._parse_args(["list"]), config, out=io.StringIO(), err=err))

    assert code == 1
    assert "error: Request timed out" in err.getvalue()
    assert session.closed is True
