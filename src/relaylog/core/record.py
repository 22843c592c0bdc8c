"""
Log record types shipped from the client to the receiving service.

A ``LogRecord`` is immutable once created. Causes are captured as
``ErrorInfo`` snapshots so a record can cross the wire without holding a live
exception or traceback.
"""

from __future__ import annotations

import time
import traceback
from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import PayloadError
from .levels import Level, parse_level


@dataclass(frozen=True)
class ErrorInfo:
    """Serializable description of an exception attached to a record."""

    type: str
    message: str
    stack: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        stack = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        return cls(type=type(exc).__name__, message=str(exc), stack=stack)

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "message": self.message, "stack": self.stack}


@dataclass(frozen=True)
class LogRecord:
    """One observed log event."""

    level: Level
    category: str
    message: str
    cause: ErrorInfo | None = None
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if not isinstance(self.level, Level):
            raise TypeError("level must be a Level")
        if not self.category:
            raise ValueError("Log record category cannot be empty")

    @classmethod
    def create(
        cls,
        level: Level | int | str,
        message: str,
        *,
        category: str,
        cause: BaseException | ErrorInfo | None = None,
        timestamp: float | None = None,
    ) -> "LogRecord":
        """Build a record, converting a live exception into ``ErrorInfo``."""
        info: ErrorInfo | None
        if isinstance(cause, BaseException):
            info = ErrorInfo.from_exception(cause)
        else:
            info = cause
        return cls(
            level=parse_level(level),
            category=category,
            message="" if message is None else str(message),
            cause=info,
            timestamp=time.time() if timestamp is None else timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to its wire mapping."""
        return {
            "level": self.level.name,
            "category": self.category,
            "message": self.message,
            "cause": self.cause.to_dict() if self.cause is not None else None,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogRecord":
        """Rebuild a record from its wire mapping.

        Raises:
            PayloadError: If required fields are missing or malformed.
        """
        try:
            raw_cause = data.get("cause")
            cause = None
            if raw_cause is not None:
                cause = ErrorInfo(
                    type=str(raw_cause["type"]),
                    message=str(raw_cause.get("message", "")),
                    stack=str(raw_cause.get("stack", "")),
                )
            return cls(
                level=parse_level(data["level"]),
                category=str(data["category"]),
                message=str(data.get("message", "")),
                cause=cause,
                timestamp=float(data["timestamp"]),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PayloadError(f"Invalid log record: {exc}") from exc
