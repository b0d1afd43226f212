"""Shared HTTP transport utilities for the notes REST adapter.

This module provides a thin wrapper around ``requests.Session`` so the adapter
shares timeout policy and API-key header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``quicknotes.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``quicknotes/adapters/notes_rest.py``.
    - Used only inside adapter layer methods; use cases interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from quicknotes.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
    """
    request_timeout_s: float = 10


class ApiSession:
    """Shared requests wrapper with API-key headers and typed failures.

    This class is intentionally transport-only. Every method performs exactly
    one attempt; callers decide how to classify non-2xx responses.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        """Create a session.

        Args:
            api_key: API key value to place in ``X-API-Key`` headers, or ``None``.
            cfg: Shared timeout settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(
        self, accept: str = "application/json", json_body: bool = False
    ) -> Dict[str, str]:
        """Build request headers for adapter calls.

        Args:
            accept: ``Accept`` header value expected by the caller.
            json_body: Whether to add ``Content-Type: application/json``.

        Returns:
            Dictionary of request headers.
        """
        headers = {"Accept": accept}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(self, url: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Send a GET request.

        Args:
            url: Absolute endpoint URL.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` of the single attempt.

        Raises:
            ApiTimeoutError: On timeout or connectivity failure.
            ApiError: On any other ``requests`` failure.

        Call Chain:
            ``NotesRestAdapter`` -> ``ApiSession.get`` -> ``requests.Session.get``.
        """
        return self._send(
            "GET",
            url,
            headers=self._headers(),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a POST request with an optional JSON body.

        Raises:
            ApiTimeoutError: On timeout or connectivity failure.
            ApiError: On any other ``requests`` failure.

        Side Effects:
            Serializes ``json_body`` with ``json.dumps`` before sending.
        """
        data = None if json_body is None else json.dumps(json_body)
        return self._send(
            "POST",
            url,
            data=data,
            headers=self._headers(json_body=json_body is not None),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def delete(self, url: str, *, timeout: Optional[float] = None) -> requests.Response:
        """Send a DELETE request."""
        return self._send(
            "DELETE",
            url,
            headers=self._headers(),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def close(self) -> None:
        self.session.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        context = f"{method} {url}"
        send = getattr(self.session, method.lower())
        try:
            return send(url, **kwargs)
        except (req_exc.Timeout, req_exc.ConnectionError) as exc:
            raise ApiTimeoutError(f"Timeout contacting {url}", context=context) from exc
        except req_exc.RequestException as exc:
            raise ApiError(str(exc), context=context) from exc

__all__ = ["ApiSession", "HttpConfig"]
