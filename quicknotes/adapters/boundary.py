"""Boundary adapter that turns one remote call into a ``Result``.

Repositories hand ``perform_request`` the call to make and the transform for
its payload. Whatever happens (success, non-2xx status, raised exception) the
caller gets a ``Success`` or ``Failure`` back; nothing a collaborator raises
escapes as an exception, except task cancellation.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from quicknotes.domain.ports import TransportOutcome
from quicknotes.domain.result import Failure, Result, Success

from .api_errors import error_from_status

K = TypeVar("K")

_log = logging.getLogger(__name__)


async def perform_request(
    process: Callable[[], Awaitable[TransportOutcome]],
    transform: Callable[[Optional[Any]], K],
    *,
    context: str = "request",
) -> Result[K]:
    """Run ``process`` once and classify its outcome.

    Args:
        process: Zero-argument coroutine factory performing the remote call.
        transform: Maps the raw payload (possibly ``None``) to a domain value.
        context: Label embedded in error messages, e.g. ``"get_notes"``.

    Returns:
        ``Success(transform(payload))`` for a successful outcome,
        ``Failure(ApiError)`` carrying the status code and error body for a
        non-success outcome, ``Failure(exc)`` if the call raised.
    """
    try:
        outcome = await process()
        if not outcome.ok:
            err = error_from_status(context, outcome.status, outcome.error_body)
            _log.debug("%s failed with HTTP %s", context, outcome.status)
            return Failure(err)
        return Success(transform(outcome.payload))
    except Exception as exc:
        _log.debug("%s raised %s", context, type(exc).__name__)
        return Failure(exc)


__all__ = ["perform_request"]
