from __future__ import annotations

import asyncio
from typing import Any, List

import pytest

from quicknotes.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from quicknotes.adapters.boundary import perform_request
from quicknotes.adapters.notes_rest import HttpOutcome
from quicknotes.domain.result import Failure, Success


class _Process:
    def __init__(self, outcome: Any = None, exc: BaseException | None = None) -> None:
        self.outcome = outcome
        self.exc = exc
        self.calls = 0

    async def __call__(self) -> HttpOutcome:
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.outcome


def test_success_applies_transform_to_payload() -> None:
    process = _Process(HttpOutcome(ok=True, status=200, payload={"n": 3}))

    result = asyncio.run(perform_request(process, lambda raw: raw["n"] * 2))

    assert result == Success(6)
    assert process.calls == 1


def test_success_passes_absent_payload_to_transform() -> None:
    seen: List[Any] = []

    def _transform(raw: Any) -> str:
        seen.append(raw)
        return "empty"

    result = asyncio.run(perform_request(_Process(HttpOutcome(ok=True, status=204)), _transform))

    assert result == Success("empty")
    assert seen == [None]


@pytest.mark.parametrize(
    "status, error_type",
    [(400, ApiClientError), (404, ApiClientError), (500, ApiServerError), (503, ApiServerError), (304, ApiError)],
)
def test_non_success_status_becomes_failure_with_status(status: int, error_type: type) -> None:
    body = {"message": "nope"}
    process = _Process(HttpOutcome(ok=False, status=status, error_body=body))

    result = asyncio.run(perform_request(process, lambda raw: raw, context="delete_note"))

    assert isinstance(result, Failure)
    assert type(result.cause) is error_type
    assert result.cause.status == status
    assert result.cause.payload == body
    assert f"HTTP {status}" in str(result.cause)
    assert "delete_note" in str(result.cause)


def test_transform_is_not_called_on_failure() -> None:
    def _transform(raw: Any) -> Any:
        raise AssertionError("transform must not run")

    result = asyncio.run(
        perform_request(_Process(HttpOutcome(ok=False, status=404)), _transform)
    )

    assert result.is_failure


def test_raised_exception_is_returned_as_failure() -> None:
    exc = ApiTimeoutError("Timeout contacting http://x", context="GET http://x")
    process = _Process(exc=exc)

    result = asyncio.run(perform_request(process, lambda raw: raw))

    assert result == Failure(exc)
    assert process.calls == 1


def test_transform_error_is_returned_as_failure() -> None:
    process = _Process(HttpOutcome(ok=True, status=200, payload=None))

    result = asyncio.run(perform_request(process, lambda raw: raw["missing"]))

    assert isinstance(result.exception_or_none(), TypeError)


def test_cancellation_is_not_swallowed() -> None:
    process = _Process(exc=asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(perform_request(process, lambda raw: raw))
