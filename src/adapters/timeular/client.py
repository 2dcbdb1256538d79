"""Cached request engine for the Timeular API.

- Issues HTTP calls through `httpx.AsyncClient`.
- Caches decoded GET responses by literal endpoint string.
- Classifies failures into `core.errors.RequestError` subclasses and routes
  each one through a configurable failure handler before raising it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, NoReturn

import httpx

from adapters.http_client import build_async_client
from adapters.memory_cache import MemoryCache
from adapters.timeular.session import ApiSession
from core.config import AppSettings
from core.errors import (
    RequestError,
    ResponseDecodeError,
    StatusError,
    TransportError,
)
from core.interfaces.cache import ResponseCache

log = logging.getLogger(__name__)

FailureHandler = Callable[[RequestError], None]

ACCEPTED_STATUS_CODES = frozenset({200, 201})
SIGN_IN_ENDPOINT = "developer/sign-in"


def propagate(error: RequestError) -> None:
    """Default handler: leave the error to the caller."""


def exit_on_failure(error: RequestError) -> NoReturn:
    """Terminal handler for composition roots: log and exit with status 1."""

    log.error("%s", error)
    sys.exit(1)


class TimeularClient:
    """One account, one token, one cache.

    Usage:

        async with TimeularClient(settings) as client:
            await client.connect(key, secret)
            data = await client.request("activities")
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        cache: ResponseCache | None = None,
        http_client: httpx.AsyncClient | None = None,
        on_failure: FailureHandler | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._cache: ResponseCache = cache if cache is not None else MemoryCache()
        self._session = ApiSession()
        self._debug_mode = self._settings.debug
        self._on_failure: FailureHandler = on_failure or propagate
        self._owns_http = http_client is None
        self._http = http_client or build_async_client(self._settings)

    async def __aenter__(self) -> "TimeularClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        # Externally supplied clients belong to the caller.
        if self._owns_http:
            await self._http.aclose()

    def debug(self, enabled: bool = False) -> None:
        """Toggle diagnostic logging (cache hits/stores, outgoing requests)."""

        self._debug_mode = bool(enabled)

    @property
    def debug_enabled(self) -> bool:
        return self._debug_mode

    @property
    def token(self) -> str:
        return self._session.token

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def handle_failure(self, error: RequestError) -> RequestError:
        """Run the failure handler and hand the error back for raising."""

        self._on_failure(error)
        return error

    def _trace(self, message: str, *args: object) -> None:
        if self._debug_mode:
            log.debug(message, *args)

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Request `endpoint` (relative to the API base URL) and return decoded JSON.

        GET responses are served from and stored into the cache; other methods
        never touch it. An empty response body decodes to `None`.

        Raises:
            TransportError: no response was received.
            StatusError: status code outside {200, 201}.
            ResponseDecodeError: the body is not JSON.
        """

        method = method.upper()
        is_get = method == "GET"

        if is_get and self._cache.has(endpoint):
            self._trace("%s retrieved from cache.", endpoint)
            return self._cache.get(endpoint)

        headers = {
            "User-Agent": self._settings.user_agent,
            "Content-Type": "application/json",
            **self._session.auth_headers(),
        }
        url = self._settings.api_url + endpoint

        self._trace("API Request: %s %s", method, endpoint)
        try:
            response = await self._http.request(method, url, headers=headers, json=payload)
        except httpx.RequestError as exc:
            reason = str(exc) or exc.__class__.__name__
            raise self.handle_failure(TransportError(endpoint, f"{reason}.")) from exc

        if response.status_code not in ACCEPTED_STATUS_CODES:
            raise self.handle_failure(
                StatusError(endpoint, response.status_code, response.reason_phrase)
            )

        try:
            value = response.json() if response.content else None
        except ValueError as exc:
            raise self.handle_failure(
                ResponseDecodeError(endpoint, f"Invalid JSON body: {exc}.")
            ) from exc

        if is_get:
            self._trace("%s saved to cache.", endpoint)
            self._cache.set(endpoint, value)

        return value

    async def connect(self, api_key: str, api_secret: str) -> str:
        """Sign in with developer credentials and keep the bearer token.

        Idempotent: once a token is held it is returned without a network call.
        Failures are re-raised unchanged and leave the token unset.
        """

        if self._session.is_authenticated:
            return self._session.token

        data = await self.request(
            SIGN_IN_ENDPOINT,
            "POST",
            {"apiKey": api_key, "apiSecret": api_secret},
        )
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise self.handle_failure(
                ResponseDecodeError(SIGN_IN_ENDPOINT, "Sign-in response has no token.")
            )

        self._session.store(token)
        return token
