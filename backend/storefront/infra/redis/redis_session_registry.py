# storefront/infra/redis/redis_session_registry.py
from __future__ import annotations

from dataclasses import dataclass

import redis  # type: ignore[import-untyped]

from storefront.services._shared.errors import UpstreamFailureError
from storefront.services._shared.ports import SessionRegistry


@dataclass(slots=True)
class RedisSessionRegistry(SessionRegistry):
    """
    Redis-backed session registry.

    ``SET ... EX``, ``GET`` and ``DEL`` are atomic per key, so no extra
    locking is needed. Connection failures surface as
    :class:`UpstreamFailureError`.

    :param r: A Redis client (already connected).
    :param prefix: Optional namespace prepended to every key.
    """

    r: redis.Redis
    prefix: str = ""

    def _k(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self.r.set(self._k(key), value, ex=max(1, int(ttl_seconds)))
        except redis.RedisError as exc:
            raise UpstreamFailureError("Session registry unavailable") from exc

    def get(self, key: str) -> str | None:
        try:
            raw = self.r.get(self._k(key))
        except redis.RedisError as exc:
            raise UpstreamFailureError("Session registry unavailable") from exc
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def delete(self, key: str) -> None:
        try:
            self.r.delete(self._k(key))
        except redis.RedisError as exc:
            raise UpstreamFailureError("Session registry unavailable") from exc

    def ping(self) -> bool:
        try:
            return bool(self.r.ping())
        except redis.RedisError:
            return False
