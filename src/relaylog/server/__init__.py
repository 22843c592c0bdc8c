from __future__ import annotations

from .service import FAILURE_MESSAGE, RemoteLoggingService

__all__ = ["FAILURE_MESSAGE", "RemoteLoggingService", "create_router"]


def __getattr__(name: str) -> object:
    # FastAPI is only needed when the router is actually used
    if name == "create_router":
        from .fastapi import create_router

        return create_router
    raise AttributeError(name)
