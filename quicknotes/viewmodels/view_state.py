"""Lifecycle of one async-driven UI value.

``Idle -> Loading -> Success | Error``; ``Success`` and ``Error`` only leave
through a fresh ``Loading``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")


class _ViewStateBase:
    def is_loading(self) -> bool:
        return isinstance(self, Loading)

    def is_successful(self) -> bool:
        return isinstance(self, Success)

    def is_error(self) -> bool:
        return isinstance(self, Error)

    def on_success(self, process: Callable[[Any], Any]) -> None:
        if isinstance(self, Success):
            process(self.data)

    def on_error(self, process: Callable[[Optional[BaseException]], Any]) -> None:
        if isinstance(self, Error):
            process(self.error)


@dataclass(frozen=True)
class Idle(_ViewStateBase):
    """No operation has run yet."""


@dataclass(frozen=True)
class Loading(_ViewStateBase):
    """An operation is in flight."""


@dataclass(frozen=True)
class Success(_ViewStateBase, Generic[T]):
    """Operation completed; ``data`` is ``None`` for operations without a result."""

    data: Optional[T] = None


@dataclass(frozen=True)
class Error(_ViewStateBase):
    """Operation failed with ``error``."""

    error: Optional[BaseException] = None


ViewState = Union[Idle, Loading, Success[T], Error]

IDLE = Idle()
LOADING = Loading()


def can_transition(current: "ViewState[Any]", new: "ViewState[Any]") -> bool:
    """Return whether ``current -> new`` is a legal lifecycle step."""
    if isinstance(new, Loading):
        # Loading over Loading is a re-trigger while in flight, not a step.
        return True
    if isinstance(new, (Success, Error)):
        return isinstance(current, Loading)
    return False


def render_view_state(
    view_state: "ViewState[T]",
    loading_view: Callable[[], R],
    content_view: Callable[[Optional[T]], R],
) -> R:
    """Pick the view for ``view_state``.

    Loading shows ``loading_view``; success shows its data; idle and error show
    empty content (errors are surfaced through the container's notification).
    """
    if isinstance(view_state, Loading):
        return loading_view()
    if isinstance(view_state, Success):
        return content_view(view_state.data)
    return content_view(None)


__all__ = [
    "Error",
    "IDLE",
    "Idle",
    "LOADING",
    "Loading",
    "Success",
    "ViewState",
    "can_transition",
    "render_view_state",
]
