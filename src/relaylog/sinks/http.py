"""
HTTP remote sink.

POSTs each batch as a JSON array to the receiving endpoint (see
``relaylog.server.create_router``) and reads back ``{"error": ...}``.
Connection errors, timeouts, error statuses and unreadable replies all count
as transport failures and raise ``TransportError``.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.errors import TransportError
from ..core.record import LogRecord
from ..core.serialization import serialize_batch

__all__ = ["HttpRemoteSink", "HttpRemoteSinkConfig"]


class HttpRemoteSinkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    endpoint: str
    headers: dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=5.0, gt=0.0)

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: Mapping[str, str] | None) -> dict[str, str]:
        if value is None:
            return {}
        return dict(value)

    @field_validator("endpoint")
    @classmethod
    def _ensure_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return value


class HttpRemoteSink:
    """Remote sink that ships batches over HTTP with ``httpx``."""

    name = "http"

    def __init__(
        self,
        config: HttpRemoteSinkConfig | dict | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        if isinstance(config, HttpRemoteSinkConfig):
            cfg = config
        else:
            cfg = HttpRemoteSinkConfig(**{**(config or {}), **kwargs})
        self._config = cfg
        self._client = client
        self._owns_client = client is None
        self._last_status: int | None = None

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout_seconds)
            self._owns_client = True

    async def stop(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def log_on_server(self, records: Sequence[LogRecord] | None) -> str | None:
        if self._client is None:
            await self.start()
        if self._client is None:
            raise TransportError(
                "HTTP client is not available", endpoint=self._config.endpoint
            )
        body = serialize_batch(records or ())
        headers = {"Content-Type": "application/json", **self._config.headers}
        try:
            resp = await self._client.post(
                self._config.endpoint,
                content=body.data,
                headers=headers,
                timeout=self._config.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            self._last_status = None
            raise TransportError(
                f"{type(exc).__name__}: {exc}", endpoint=self._config.endpoint
            ) from exc

        self._last_status = resp.status_code
        if resp.status_code >= 400:
            raise TransportError(
                f"remote logging endpoint answered {resp.status_code}",
                endpoint=self._config.endpoint,
                status_code=resp.status_code,
            )
        return self._parse_reply(resp)

    def _parse_reply(self, resp: httpx.Response) -> str | None:
        if not resp.content:
            return None
        try:
            data = orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise TransportError(
                "remote logging endpoint sent an unreadable reply",
                endpoint=self._config.endpoint,
                status_code=resp.status_code,
            ) from exc
        if isinstance(data, dict):
            error = data.get("error")
            return str(error) if error else None
        return None

    async def health_check(self) -> bool:
        return self._last_status is not None and self._last_status < 400


# Mark Pydantic validators as used for vulture
_VULTURE_USED: tuple[object, ...] = (
    HttpRemoteSinkConfig._coerce_headers,
    HttpRemoteSinkConfig._ensure_endpoint,
)
