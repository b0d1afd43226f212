"""Typed failures raised or returned by the notes adapters.

The notes API answers errors either with ``{"message": "..."}`` or with a
plain-text body. ``error_from_status`` turns such a body plus its status code
into the matching ``ApiError`` subclass; ``error_detail`` pulls the readable
part out of it for user-facing messages.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

_BODY_SNIPPET = 400


class ApiError(RuntimeError):
    """Base class for notes API failures.

    Attributes:
        status: HTTP status code, or ``None`` for transport failures.
        detail: Server-provided explanation taken from the error body.
        payload: Raw error body as received.
        context: Request label such as ``"DELETE /notes/7"`` or ``"get_notes"``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx: the request was rejected (unknown note, bad title, bad key)."""


class ApiServerError(ApiError):
    """HTTP 5xx from the notes API."""


class ApiTimeoutError(ApiError):
    """Timeout or connectivity failure before any status was received."""


def error_detail(payload: Any) -> Optional[str]:
    """Return the readable part of a notes error body, if any."""
    if isinstance(payload, Mapping):
        payload = payload.get("message") or payload.get("error")
    if isinstance(payload, str):
        return payload.strip()[:_BODY_SNIPPET] or None
    return None


def parse_error_payload(resp: Any) -> Any:
    """Read an error body as JSON, falling back to its text. Never raises."""
    try:
        return resp.json()
    except ValueError:
        text = getattr(resp, "text", "") or ""
        return text[:_BODY_SNIPPET] or None


def error_from_status(ctx: str, status: int, payload: Any) -> ApiError:
    """Build the typed error for a non-success HTTP status.

    The message reads ``"<ctx>: <detail> (HTTP <status>)"`` when the body
    carries a detail and ``"<ctx>: HTTP <status>"`` otherwise.
    """
    detail = error_detail(payload)
    message = f"{ctx}: {detail} (HTTP {status})" if detail else f"{ctx}: HTTP {status}"
    if 400 <= status < 500:
        error_type = ApiClientError
    elif 500 <= status < 600:
        error_type = ApiServerError
    else:
        error_type = ApiError
    return error_type(message, status=status, detail=detail, payload=payload, context=ctx)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_detail",
    "error_from_status",
    "parse_error_payload",
]
