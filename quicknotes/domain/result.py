"""Two-variant outcome type returned by repositories and use cases.

A ``Result`` is either ``Success(value)`` or ``Failure(cause)``. Only the
boundary adapter in ``quicknotes.adapters.boundary`` builds them; every layer
above passes them through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Completed call carrying the transformed payload (may be ``None``)."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def get_or_none(self) -> T:
        return self.value

    def exception_or_none(self) -> Optional[Exception]:
        return None

    def on_success(self, action: Callable[[T], Any]) -> "Success[T]":
        action(self.value)
        return self

    def on_failure(self, action: Callable[[Exception], Any]) -> "Success[T]":
        return self

    def fold(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Exception], R],
    ) -> R:
        return on_success(self.value)


@dataclass(frozen=True)
class Failure:
    """Failed call carrying the exception that caused it."""

    cause: Exception

    def __post_init__(self) -> None:
        if not isinstance(self.cause, Exception):
            raise TypeError("Failure cause must be an Exception instance.")

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def get_or_none(self) -> None:
        return None

    def exception_or_none(self) -> Exception:
        return self.cause

    def on_success(self, action: Callable[[Any], Any]) -> "Failure":
        return self

    def on_failure(self, action: Callable[[Exception], Any]) -> "Failure":
        action(self.cause)
        return self

    def fold(
        self,
        on_success: Callable[[Any], R],
        on_failure: Callable[[Exception], R],
    ) -> R:
        return on_failure(self.cause)


Result = Union[Success[T], Failure]


__all__ = ["Failure", "Result", "Success"]
