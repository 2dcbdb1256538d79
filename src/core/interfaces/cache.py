"""Response cache contract.

The request engine only needs membership, lookup and store. Expiry and
eviction are a property of the implementation, not of the engine.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseCache(Protocol):
    """Endpoint-keyed store of decoded JSON values.

    `has` is separate from `get` because `None` is a valid cached value
    (an empty response body).
    """

    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...
