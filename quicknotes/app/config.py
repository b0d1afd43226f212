"""Runtime configuration read from ``QUICKNOTES_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

ENV_PREFIX = "QUICKNOTES_"
DEFAULT_API_URL = "http://127.0.0.1:3000/api"


@dataclass(frozen=True)
class AppConfig:
    """Typed settings for the composition root.

    Attributes:
        api_base_url: Base URL the ``/notes`` endpoints hang off.
        api_key: Optional value for the ``X-API-Key`` header.
        request_timeout_s: Per-request timeout in seconds.
        use_mock: Use the in-memory ``NotesMock`` instead of HTTP.
    """

    api_base_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    request_timeout_s: float = 10.0
    use_mock: bool = False

    def __post_init__(self) -> None:
        if not self.use_mock and not self.api_base_url.strip():
            raise ValueError("api_base_url must not be empty.")
        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be positive.")


def _coerce_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_config(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> AppConfig:
    """Build ``AppConfig`` from ``env`` (default ``os.environ``) plus overrides.

    Recognized keys: ``QUICKNOTES_API_URL``, ``QUICKNOTES_API_KEY``,
    ``QUICKNOTES_TIMEOUT_S``, ``QUICKNOTES_MOCK``. Keyword overrides win and
    ``None`` overrides are ignored.

    Raises:
        ValueError: If a value cannot be coerced or fails validation.
    """
    source = os.environ if env is None else env
    values: dict = {}
    url = source.get(f"{ENV_PREFIX}API_URL")
    if url:
        values["api_base_url"] = url.strip()
    key = source.get(f"{ENV_PREFIX}API_KEY")
    if key:
        values["api_key"] = key.strip() or None
    timeout = source.get(f"{ENV_PREFIX}TIMEOUT_S")
    if timeout:
        values["request_timeout_s"] = _coerce_float("request_timeout_s", timeout)
    mock = source.get(f"{ENV_PREFIX}MOCK")
    if mock:
        values["use_mock"] = _coerce_bool(mock)

    for name, value in overrides.items():
        if value is None:
            continue
        if name not in AppConfig.__dataclass_fields__:
            raise ValueError(f"Unsupported config key: {name}")
        values[name] = value
    return AppConfig(**values)


__all__ = ["AppConfig", "DEFAULT_API_URL", "load_config"]
