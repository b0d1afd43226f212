"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from quicknotes.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    error_detail,
)
from quicknotes.domain.ports import UseCaseError


def map_api_error(
    exc: BaseException,
    *,
    default_code: str = "UNEXPECTED_ERROR",
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Failure cause taken from a ``Failure`` result or the error slot.
        default_code: Code used for exceptions outside the ``ApiError`` family.
        default_message: Message used for such exceptions when they carry none.

    Returns:
        UseCaseError: Code plus a message suitable for a toast/notification.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.detail or error_detail(exc.payload)
        if status == 404:
            return UseCaseError(
                "NOT_FOUND",
                _compose_error_message("Note not found", hint),
                meta={"status": status},
            )
        if status in (400, 422):
            return UseCaseError(
                "INVALID_PARAMS",
                _compose_error_message("Invalid parameters", hint),
                meta={"status": status},
            )
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.")
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Compose a user-facing error message with optional hint text."""
    hint_text = (hint or "").strip()
    if hint_text and hint_text.lower() != base.lower():
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
