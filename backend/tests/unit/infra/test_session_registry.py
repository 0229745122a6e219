"""
Unit tests for the session registry adapters.

The Redis adapter runs against ``fakeredis``; the in-memory double is moved
through time with ``freezegun``.
"""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
import redis
from freezegun import freeze_time

from storefront.infra.redis.redis_session_registry import RedisSessionRegistry
from storefront.services._shared.errors import UpstreamFailureError
from storefront.services._shared.ports import InMemorySessionRegistry
from storefront.services._shared.ports.session_registry import refresh_key


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture(params=["redis", "memory"])
def registry(request, fake_redis):
    if request.param == "redis":
        return RedisSessionRegistry(fake_redis)
    return InMemorySessionRegistry()


def test_refresh_key_format():
    assert refresh_key(42) == "refresh:42"


def test_set_get_roundtrip(registry):
    registry.set("refresh:1", "token-a", 60)
    assert registry.get("refresh:1") == "token-a"


def test_set_overwrites(registry):
    registry.set("refresh:1", "token-a", 60)
    registry.set("refresh:1", "token-b", 60)
    assert registry.get("refresh:1") == "token-b"


def test_delete_is_idempotent(registry):
    registry.set("refresh:1", "token-a", 60)
    registry.delete("refresh:1")
    registry.delete("refresh:1")
    assert registry.get("refresh:1") is None


def test_missing_key_returns_none(registry):
    assert registry.get("refresh:404") is None


def test_ping(registry):
    assert registry.ping() is True


def test_redis_sets_ttl(fake_redis):
    RedisSessionRegistry(fake_redis).set("refresh:7", "tok", 604800)
    assert 0 < fake_redis.ttl("refresh:7") <= 604800


def test_redis_prefix_namespaces_keys(fake_redis):
    RedisSessionRegistry(fake_redis, prefix="sf:").set("refresh:7", "tok", 60)
    assert fake_redis.get("sf:refresh:7") == b"tok"


def test_in_memory_entry_expires():
    registry = InMemorySessionRegistry()
    with freeze_time("2026-01-01 00:00:00") as frozen:
        registry.set("refresh:1", "tok", 10)
        frozen.tick(timedelta(seconds=9))
        assert registry.get("refresh:1") == "tok"
        frozen.tick(timedelta(seconds=1))
        assert registry.get("refresh:1") is None


class _BrokenRedis:
    """Redis stand-in whose every command fails like a dropped connection."""

    def _fail(self, *args, **kwargs):
        raise redis.ConnectionError("connection refused")

    set = get = delete = ping = _fail


@pytest.mark.parametrize("call", [
    lambda r: r.set("k", "v", 1),
    lambda r: r.get("k"),
    lambda r: r.delete("k"),
])
def test_redis_failures_become_upstream_errors(call):
    registry = RedisSessionRegistry(_BrokenRedis())
    with pytest.raises(UpstreamFailureError):
        call(registry)


def test_redis_ping_reports_failure():
    assert RedisSessionRegistry(_BrokenRedis()).ping() is False
