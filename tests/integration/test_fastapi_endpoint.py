from __future__ import annotations

import logging

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from relaylog import build_facade
from relaylog.core.dispatcher import DispatcherState
from relaylog.core.settings import RemoteSettings, Settings
from relaylog.server import RemoteLoggingService, create_router
from relaylog.sinks.http import HttpRemoteSink, HttpRemoteSinkConfig

pytestmark = pytest.mark.integration

ENDPOINT = "http://testserver/remote-logging"


def _app(service: RemoteLoggingService | None = None) -> FastAPI:
    app = FastAPI()
    app.include_router(create_router(service))
    return app


def _sink(app: FastAPI, endpoint: str = ENDPOINT) -> HttpRemoteSink:
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
    return HttpRemoteSink(HttpRemoteSinkConfig(endpoint=endpoint), client=client)


@pytest.mark.asyncio
async def test_client_records_reach_server_loggers(
    caplog: pytest.LogCaptureFixture,
) -> None:
    service = RemoteLoggingService(logger_name_override="browser")
    sink = _sink(_app(service))
    settings = Settings(
        remote=RemoteSettings(preset="warn", coalescing_delay_seconds=0.01)
    )
    facade = build_facade(settings, sink=sink)
    assert facade.dispatcher is not None

    with caplog.at_level(logging.DEBUG, logger="browser"):
        facade.info("not shipped")
        facade.warn("slow render", category="ui")
        facade.error("request failed", category="net")
        assert await facade.dispatcher.drain(timeout=5.0)

    shipped = [
        (r.remote_category, r.levelname, r.getMessage())  # type: ignore[attr-defined]
        for r in caplog.records
        if r.name == "browser"
    ]
    assert shipped == [
        ("ui", "WARNING", "slow render"),
        ("net", "ERROR", "request failed"),
    ]
    assert facade.dispatcher.state is DispatcherState.IDLE
    await sink.stop()


@pytest.mark.asyncio
async def test_missing_route_poisons_dispatcher() -> None:
    sink = _sink(_app(), endpoint="http://testserver/elsewhere")
    facade = build_facade(
        Settings(remote=RemoteSettings(coalescing_delay_seconds=0.01)), sink=sink
    )
    assert facade.dispatcher is not None

    facade.error("lost")
    await facade.dispatcher.drain(timeout=5.0)

    assert facade.dispatcher.state is DispatcherState.POISONED
    facade.error("also lost")
    assert facade.dispatcher.pending_count == 0


def test_endpoint_tolerates_null_and_empty_bodies() -> None:
    client = TestClient(_app())

    assert client.post("/remote-logging", content=b"null").json() == {"error": None}
    assert client.post("/remote-logging", content=b"").json() == {"error": None}
    assert client.post("/remote-logging", content=b"[]").json() == {"error": None}


def test_endpoint_rejects_malformed_batches() -> None:
    client = TestClient(_app())

    resp = client.post("/remote-logging", content=b'[{"level": "INFO"}]')

    assert resp.status_code == 400


def test_endpoint_reports_first_logging_error() -> None:
    def factory(name: str) -> logging.Logger:
        raise RuntimeError(f"no logger for {name}")

    client = TestClient(_app(RemoteLoggingService(logger_factory=factory)))
    body = b'[{"level": "WARN", "category": "ui", "message": "x", "timestamp": 1.0}]'

    resp = client.post("/remote-logging", content=body)

    assert resp.status_code == 200
    assert resp.json()["error"].startswith("Remote logging failed")
