"""
Exception hierarchy for relaylog.

Nothing here is raised out of ``publish()`` or the facade's logging calls;
these errors surface from sinks, settings validation and payload decoding.
"""

from __future__ import annotations


class RelaylogError(Exception):
    """Base class for all relaylog errors."""


class TransportError(RelaylogError):
    """The remote logging call could not complete.

    A dispatcher that observes this error stops delivering for good.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class ConfigurationError(RelaylogError):
    """Settings are inconsistent (for example remote logging without endpoint)."""


class PayloadError(RelaylogError):
    """A wire payload could not be decoded into log records."""
