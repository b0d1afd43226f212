"""Base viewmodel that owns one immutable UI state and runs event handlers.

Call context:
    Screen viewmodels (``NotesVM``) subclass ``StatefulViewModel`` and return
    their handler table from ``event_handlers``. Views call ``dispatch`` and
    read ``state`` or ``subscribe`` to the snapshot stream.

Responsibilities:
    - Atomic, synchronous state updates (``update_state``) under one lock.
    - Fire-and-forget dispatch of events to async handlers on one event loop.
    - Per-field operation tokens so a stale completion never overwrites the
      result of a newer operation on the same ``ViewState`` field.
    - One error observer that logs and reports each distinct error once.
    - Cancelling every in-flight handler when the viewmodel is closed.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import replace
from typing import (
    Any,
    Awaitable,
    Callable,
    Coroutine,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    TypeVar,
)

from quicknotes.domain.ports import UseCaseError
from quicknotes.domain.result import Result
from quicknotes.usecases.error_mapping import map_api_error

from .view_state import LOADING, Error, Success, ViewState, can_transition

S = TypeVar("S")
E = TypeVar("E")

EventHandler = Callable[[Any], Awaitable[None]]
StateListener = Callable[[Any], None]
ErrorNotifier = Callable[[UseCaseError], None]


class UnhandledEventError(TypeError):
    """An event type has no handler. Raised at construction or dispatch."""


class IllegalTransitionError(RuntimeError):
    """A ``ViewState`` field was moved outside its lifecycle."""


class StatefulViewModel(Generic[S, E]):
    """Owner of one state snapshot ``S`` driven by events ``E``.

    ``S`` must be a frozen dataclass with an ``error`` field used as the
    last-error slot. Field-level helpers (``enter_loading``, ``fold_result``)
    address ``ViewState`` fields of ``S`` by name.
    """

    def __init__(
        self,
        initial_state: S,
        *,
        event_types: Iterable[type],
        loop: Optional[asyncio.AbstractEventLoop] = None,
        on_error: Optional[ErrorNotifier] = None,
    ) -> None:
        self._log = logging.getLogger(f"{__name__}.{type(self).__name__}")
        self._state: S = initial_state
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._sequence: Dict[str, int] = {}
        self._loop = loop
        self._closed = False
        self._on_error = on_error
        self._last_seen_error: Optional[BaseException] = None

        self._handlers: Dict[type, EventHandler] = dict(self.event_handlers())
        missing = [t.__name__ for t in event_types if t not in self._handlers]
        if missing:
            raise UnhandledEventError(
                f"{type(self).__name__} has no handler for: {', '.join(missing)}"
            )
        self._unsubscribe_errors = self.subscribe(self._observe_error)

    # ------------------------------------------------------------------
    # Subclass contract
    # ------------------------------------------------------------------
    def event_handlers(self) -> Mapping[type, EventHandler]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> S:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener, *, emit_current: bool = True) -> Callable[[], None]:
        """Register ``listener`` for every new snapshot; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)
            if emit_current:
                self._notify(listener, self._state)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def update_state(self, update: Callable[[S], S]) -> S:
        """Atomically replace the snapshot with ``update(current)``.

        Listeners are notified under the lock so they observe snapshots in
        update order. Ignored once the viewmodel is closed.
        """
        with self._lock:
            if self._closed:
                return self._state
            new_state = update(self._state)
            if new_state is self._state:
                return new_state
            self._state = new_state
            for listener in list(self._listeners):
                self._notify(listener, new_state)
            return new_state

    def _notify(self, listener: StateListener, state: S) -> None:
        try:
            listener(state)
        except Exception:
            self._log.exception("State listener %r failed", listener)

    # ------------------------------------------------------------------
    # ViewState field helpers
    # ------------------------------------------------------------------
    def enter_loading(self, field: str) -> int:
        """Move ``field`` to ``Loading`` and return the token of this operation."""
        with self._lock:
            token = self._sequence.get(field, 0) + 1
            self._sequence[field] = token
            self.update_state(lambda state: self._with_view_state(state, field, LOADING))
            return token

    def fold_result(
        self,
        field: str,
        token: int,
        result: Result[Any],
        *,
        on_success: Optional[Callable[[S], S]] = None,
    ) -> bool:
        """Fold ``result`` into ``field`` and return whether it was a success.

        A failure also fills the ``error`` slot. The write is dropped when a
        newer operation on ``field`` started after ``token`` was issued.
        """

        def _apply(state: S) -> S:
            if self._sequence.get(field) != token:
                self._log.debug("Dropping stale %s result (token %s)", field, token)
                return state
            if result.is_success:
                new_state = self._with_view_state(state, field, Success(result.get_or_none()))
                return on_success(new_state) if on_success else new_state
            cause = result.exception_or_none()
            new_state = self._with_view_state(state, field, Error(cause))
            return replace(new_state, error=cause)

        self.update_state(_apply)
        return result.is_success

    @staticmethod
    def _with_view_state(state: S, field: str, value: ViewState[Any]) -> S:
        current = getattr(state, field)
        if not can_transition(current, value):
            raise IllegalTransitionError(
                f"{field}: {type(current).__name__} -> {type(value).__name__}"
            )
        return replace(state, **{field: value})

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, event: E) -> None:
        """Schedule the handler for ``event`` and return immediately.

        Raises:
            UnhandledEventError: ``event`` is not one of the declared event
                types. Every other failure is logged, never raised.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise UnhandledEventError(f"No handler for event {event!r}")
        if self._closed:
            self._log.debug("Ignoring %s after close", type(event).__name__)
            return
        self.safe_launch(handler(event), name=type(event).__name__)

    def safe_launch(self, coro: Coroutine[Any, Any, None], *, name: str = "task") -> None:
        """Run ``coro`` as a task owned by this viewmodel, logging any failure."""
        try:
            loop = self._resolve_loop()
        except RuntimeError:
            coro.close()
            self._log.error("No event loop available to run %s", name)
            return
        if self._in_loop_thread(loop):
            self._start_task(coro, name)
        else:
            loop.call_soon_threadsafe(self._start_task, coro, name)

    def _start_task(self, coro: Coroutine[Any, Any, None], name: str) -> None:
        if self._closed:
            coro.close()
            return
        task = asyncio.get_running_loop().create_task(self._guarded(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _guarded(self, coro: Coroutine[Any, Any, None], name: str) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            raise
        except Exception:
            self._log.exception("Unhandled error in %s handler", name)

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @staticmethod
    def _in_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
        try:
            return asyncio.get_running_loop() is loop
        except RuntimeError:
            return False

    # ------------------------------------------------------------------
    # Error observer
    # ------------------------------------------------------------------
    def _observe_error(self, state: S) -> None:
        error = getattr(state, "error", None)
        if error is None or error is self._last_seen_error:
            return
        self._last_seen_error = error
        notice = map_api_error(error)
        self._log.error("%s (%s): %s", type(error).__name__, notice.code, error)
        if self._on_error is not None:
            self._on_error(notice)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Cancel every in-flight handler and freeze the state."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            tasks = list(self._tasks)
            self._listeners.clear()
        loop = self._loop
        for task in tasks:
            if loop is None or self._in_loop_thread(loop):
                task.cancel()
            else:
                loop.call_soon_threadsafe(task.cancel)

    async def aclose(self) -> None:
        """Close and wait until every cancelled handler has unwound."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def wait_idle(self) -> None:
        """Wait until no handler is in flight."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> "StatefulViewModel[S, E]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = [
    "IllegalTransitionError",
    "StatefulViewModel",
    "UnhandledEventError",
]
