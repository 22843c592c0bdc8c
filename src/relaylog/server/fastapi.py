"""
FastAPI router exposing a ``RemoteLoggingService`` over HTTP.

The endpoint accepts the JSON array produced by ``HttpRemoteSink`` and replies
``{"error": <first error or null>}``. Undecodable bodies are rejected with 400
so the client treats them as a transport failure.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from ..core import diagnostics
from ..core.errors import PayloadError
from ..core.serialization import deserialize_batch
from .service import RemoteLoggingService

DEFAULT_PATH = "/remote-logging"


def create_router(
    service: RemoteLoggingService | None = None,
    *,
    path: str = DEFAULT_PATH,
) -> APIRouter:
    """Return a router with a single POST endpoint at ``path``."""
    svc = service or RemoteLoggingService()
    router = APIRouter(tags=["remote-logging"])

    @router.post(path)
    async def log_on_server(request: Request) -> dict[str, str | None]:
        body = await request.body()
        try:
            records = deserialize_batch(body) if body else None
        except PayloadError as exc:
            diagnostics.warn("remote-endpoint", "rejected batch", error=str(exc))
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"error": svc.log_on_server(records)}

    return router
