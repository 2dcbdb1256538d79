"""Exception hierarchy for timeular-client.

Every failure leaving the request engine is a `RequestError` carrying the
endpoint that was being requested.
"""

from __future__ import annotations


class TimeularError(Exception):
    """Base exception for all timeular-client errors."""


class RequestError(TimeularError):
    """A request against the Timeular API failed."""

    def __init__(self, endpoint: str, message: str) -> None:
        self.endpoint = endpoint
        self.message = message
        super().__init__(f"Error on Timeular request '{endpoint}'. {message}")


class TransportError(RequestError):
    """No response was received (connection, DNS, TLS, protocol errors)."""


class StatusError(RequestError):
    """A response was received with a status code outside {200, 201}."""

    def __init__(self, endpoint: str, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(endpoint, f"{status_code} {reason}".strip() + ".")


class ResponseDecodeError(RequestError):
    """A successful response whose body is not JSON or not the expected shape."""
