# quicknotes/app/main.py
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Callable, List, Optional, Sequence, TextIO

# ---- UseCases & Adapter ----
from ..adapters.notes_mock import NotesMock
from ..adapters.notes_repository import NotesRepositoryImpl
from ..adapters.notes_rest import NotesRestAdapter
from ..domain.entities import Note, NoteId
from ..domain.ports import NotesPort, UseCaseError
from ..usecases.clear_notes import ClearNotes as ClearNotesUseCase
from ..usecases.delete_note import DeleteNote as DeleteNoteUseCase
from ..usecases.get_notes import GetNotes as GetNotesUseCase
from ..usecases.insert_note import InsertNote as InsertNoteUseCase

# ---- ViewModels ----
from ..viewmodels.notes_contract import (
    ClearNotes,
    DeleteNote,
    GetNotes,
    InsertNote,
    NotesUiEvent,
    NotesUiState,
    UpdateInputText,
)
from ..viewmodels.notes_vm import NotesVM
from ..viewmodels.view_state import ViewState, render_view_state
from ..utils import logging as logging_utils
from .config import AppConfig, load_config

_log = logging.getLogger(__name__)


def build_port(config: AppConfig) -> NotesPort:
    if config.use_mock:
        return NotesMock()
    return NotesRestAdapter(
        config.api_base_url,
        api_key=config.api_key,
        request_timeout_s=config.request_timeout_s,
    )


def build_notes_vm(
    config: AppConfig,
    *,
    port: Optional[NotesPort] = None,
    on_error: Optional[Callable[[UseCaseError], None]] = None,
) -> NotesVM:
    """Wire port -> repository -> use cases -> ``NotesVM``.

    Must be called from inside the event loop the viewmodel will run on. The
    caller owns ``port`` and closes it once the viewmodel is done.
    """
    repository = NotesRepositoryImpl(port if port is not None else build_port(config))
    return NotesVM(
        get_notes=GetNotesUseCase(repository),
        insert_note=InsertNoteUseCase(repository),
        delete_note=DeleteNoteUseCase(repository),
        clear_notes=ClearNotesUseCase(repository),
        loop=asyncio.get_running_loop(),
        on_error=on_error,
    )


class ConsoleRenderer:
    """Prints the note list whenever ``notes_view_state`` changes."""

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self._last: Optional[ViewState] = None

    def __call__(self, state: NotesUiState) -> None:
        view_state = state.notes_view_state
        if view_state == self._last:
            return
        self._last = view_state
        render_view_state(view_state, self._render_loading, self._render_notes)

    def _render_loading(self) -> None:
        print("Loading notes...", file=self.out)

    def _render_notes(self, notes: Optional[List[Note]]) -> None:
        if notes is None:
            return
        if not notes:
            print("No notes.", file=self.out)
            return
        for note in notes:
            print(f"{note.id or '-':>6}  {note.time or '':<25}  {note.title or ''}", file=self.out)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    """Parse CLI args for one notes command."""
    parser = argparse.ArgumentParser(prog="quicknotes", description="Manage notes on a notes API.")
    parser.add_argument("--api-url", default=None, help="Base URL of the notes API.")
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    parser.add_argument("--mock", action="store_true", default=None, help="Use the in-memory API.")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List all notes.")
    add = sub.add_parser("add", help="Add a note.")
    add.add_argument("title")
    delete = sub.add_parser("delete", help="Delete a note by id.")
    delete.add_argument("note_id")
    sub.add_parser("clear", help="Delete every note.")
    return parser.parse_args(argv)


def _events_for(args: argparse.Namespace) -> List[NotesUiEvent]:
    if args.command == "add":
        return [UpdateInputText(args.title), InsertNote()]
    if args.command == "delete":
        return [DeleteNote(NoteId(args.note_id))]
    if args.command == "clear":
        return [ClearNotes()]
    return [GetNotes()]


async def run(args: argparse.Namespace, config: AppConfig, *, out: TextIO = sys.stdout, err: TextIO = sys.stderr) -> int:
    """Run one command against a fresh ``NotesVM`` and return the exit code."""
    errors: List[UseCaseError] = []

    def _on_error(notice: UseCaseError) -> None:
        errors.append(notice)
        print(f"error: {notice.message}", file=err)

    port = build_port(config)
    try:
        async with build_notes_vm(config, port=port, on_error=_on_error) as vm:
            vm.subscribe(ConsoleRenderer(out))
            for event in _events_for(args):
                vm.dispatch(event)
            await vm.wait_idle()
    finally:
        port.close()
    return 1 if errors else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint."""
    logging_utils.configure_root(logging.WARNING)
    args = _parse_args(argv)
    try:
        config = load_config(
            api_base_url=args.api_url,
            api_key=args.api_key,
            request_timeout_s=args.timeout,
            use_mock=args.mock,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    _log.debug("Using %s", "in-memory notes" if config.use_mock else config.api_base_url)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
