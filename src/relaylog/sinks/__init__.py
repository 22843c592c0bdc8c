from __future__ import annotations

from .base import RemoteSink
from .http import HttpRemoteSink, HttpRemoteSinkConfig
from .local import InProcessSink

__all__ = [
    "HttpRemoteSink",
    "HttpRemoteSinkConfig",
    "InProcessSink",
    "RemoteSink",
]
