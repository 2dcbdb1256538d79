"""Bearer-token holder for one Timeular account."""

from __future__ import annotations


class ApiSession:
    """Single mutable field: the bearer token (empty = unauthenticated).

    Set once by a successful sign-in and never cleared. Two concurrent
    first-time sign-ins may both store a token; the last one wins.
    """

    def __init__(self) -> None:
        self._token = ""

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return len(self._token) > 0

    def store(self, token: str) -> None:
        self._token = token

    def auth_headers(self) -> dict[str, str]:
        if not self.is_authenticated:
            return {}
        return {"Authorization": f"Bearer {self._token}"}
