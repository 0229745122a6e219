from __future__ import annotations

import threading
import time
from typing import Protocol


def refresh_key(user_id: int | str) -> str:
    """Registry key holding the single valid refresh token of ``user_id``."""
    return f"refresh:{user_id}"


class SessionRegistry(Protocol):
    """
    Key/value store with per-key expiry.

    Implementations raise :class:`~storefront.services._shared.errors.UpstreamFailureError`
    when the backing store is unreachable.
    """

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""

    def get(self, key: str) -> str | None:
        """Return the live value for ``key`` or ``None`` (missing or expired)."""

    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""

    def ping(self) -> bool:
        """Return ``True`` when the store is reachable."""


class InMemorySessionRegistry(SessionRegistry):
    """
    Process-local registry for development and unit tests.

    .. note::
       Expiry uses wall-clock time so ``freezegun`` can move it.
    """

    def __init__(self) -> None:
        self._data: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._data[key] = (value, time.time() + int(ttl_seconds))

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= time.time():
                del self._data[key]
                return None
            return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def ping(self) -> bool:
        return True
