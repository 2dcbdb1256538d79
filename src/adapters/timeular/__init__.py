"""Timeular API adapter (session + cached request engine)."""

from adapters.timeular.client import (
    ACCEPTED_STATUS_CODES,
    SIGN_IN_ENDPOINT,
    FailureHandler,
    TimeularClient,
    exit_on_failure,
    propagate,
)
from adapters.timeular.session import ApiSession

__all__ = [
    "ACCEPTED_STATUS_CODES",
    "SIGN_IN_ENDPOINT",
    "ApiSession",
    "FailureHandler",
    "TimeularClient",
    "exit_on_failure",
    "propagate",
]
