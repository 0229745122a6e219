from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from storefront.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from storefront.services._shared.errors import (
    InvalidOrExpiredTokenError,
    InvalidRefreshTokenError,
)
from storefront.services._shared.ports import InMemorySessionRegistry
from storefront.services.tokens.dto import TokenConfig
from storefront.services.tokens.service import TokenService

CONFIG = TokenConfig(
    access_secret="access-secret",
    refresh_secret="refresh-secret",
    reset_secret="reset-secret",
)


@pytest.fixture
def registry():
    return InMemorySessionRegistry()


@pytest.fixture
def svc(registry):
    return TokenService(token_provider=PyJWTTokenProvider(), registry=registry, config=CONFIG)


def test_issue_session_registers_refresh_token(svc, registry):
    pair = svc.issue_session(7)
    assert registry.get("refresh:7") == pair.refresh_token
    assert svc.verify_access_token(pair.access_token) == 7


def test_issue_token_pair_leaves_registry_alone(svc, registry):
    svc.issue_token_pair(7)
    assert registry.get("refresh:7") is None


def test_tokens_issued_in_same_second_differ(svc):
    with freeze_time("2026-03-01 12:00:00"):
        first = svc.issue_token_pair(1)
        second = svc.issue_token_pair(1)
    assert first.access_token != second.access_token
    assert first.refresh_token != second.refresh_token


def test_new_session_supersedes_previous_refresh_token(svc):
    old = svc.issue_session(3)
    new = svc.issue_session(3)

    with pytest.raises(InvalidRefreshTokenError):
        svc.rotate_access_token(old.refresh_token)
    assert svc.verify_access_token(svc.rotate_access_token(new.refresh_token)) == 3


def test_rotate_does_not_rotate_refresh_token(svc, registry):
    pair = svc.issue_session(3)
    svc.rotate_access_token(pair.refresh_token)
    svc.rotate_access_token(pair.refresh_token)
    assert registry.get("refresh:3") == pair.refresh_token


@pytest.mark.parametrize("presented", [None, "", "garbage"])
def test_rotate_rejects_missing_or_malformed(svc, presented):
    with pytest.raises(InvalidRefreshTokenError):
        svc.rotate_access_token(presented)


def test_rotate_rejects_access_token(svc):
    pair = svc.issue_session(3)
    with pytest.raises(InvalidRefreshTokenError):
        svc.rotate_access_token(pair.access_token)


def test_rotate_rejects_signed_but_unregistered_token(svc):
    pair = svc.issue_token_pair(3)
    with pytest.raises(InvalidRefreshTokenError):
        svc.rotate_access_token(pair.refresh_token)


def test_revoke_is_idempotent(svc, registry):
    pair = svc.issue_session(5)
    svc.revoke(5)
    svc.revoke(5)
    assert registry.get("refresh:5") is None
    with pytest.raises(InvalidRefreshTokenError):
        svc.rotate_access_token(pair.refresh_token)


def test_access_token_expiry_boundary(svc):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = svc.issue_token_pair(9).access_token
        frozen.tick(timedelta(seconds=CONFIG.access_ttl_seconds - 1))
        assert svc.verify_access_token(token) == 9
        frozen.tick(timedelta(seconds=2))
        with pytest.raises(InvalidOrExpiredTokenError):
            svc.verify_access_token(token)


def test_expired_refresh_token_cannot_rotate_but_identifies(svc):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        pair = svc.issue_session(9)
        frozen.tick(timedelta(seconds=CONFIG.refresh_ttl_seconds + 1))
        with pytest.raises(InvalidRefreshTokenError):
            svc.rotate_access_token(pair.refresh_token)
        assert svc.identify_refresh_token(pair.refresh_token) == 9


def test_identify_rejects_foreign_signature(svc):
    forged = TokenService(
        token_provider=PyJWTTokenProvider(),
        registry=InMemorySessionRegistry(),
        config=TokenConfig(access_secret="a", refresh_secret="other", reset_secret="r"),
    ).issue_token_pair(1)
    with pytest.raises(InvalidOrExpiredTokenError):
        svc.identify_refresh_token(forged.refresh_token)


def test_secrets_are_not_interchangeable(svc):
    pair = svc.issue_token_pair(4)
    reset = svc.issue_reset_token(4)
    with pytest.raises(InvalidOrExpiredTokenError):
        svc.verify_access_token(pair.refresh_token)
    with pytest.raises(InvalidOrExpiredTokenError):
        svc.verify_reset_token(pair.access_token)
    with pytest.raises(InvalidOrExpiredTokenError):
        svc.verify_access_token(reset)


def test_reset_token_roundtrip_and_expiry(svc):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = svc.issue_reset_token(12)
        assert svc.verify_reset_token(token) == 12
        frozen.tick(timedelta(seconds=CONFIG.reset_ttl_seconds + 1))
        with pytest.raises(InvalidOrExpiredTokenError):
            svc.verify_reset_token(token)


def test_non_numeric_subject_rejected(svc):
    token = PyJWTTokenProvider().encode(
        {"sub": "abc", "exp": 4102444800, "type": "access"}, key=CONFIG.access_secret
    )
    with pytest.raises(InvalidOrExpiredTokenError):
        svc.verify_access_token(token)


def test_config_from_mapping_defaults():
    cfg = TokenConfig.from_mapping(
        {"ACCESS_TOKEN_SECRET": "a", "REFRESH_TOKEN_SECRET": "b", "RESET_TOKEN_SECRET": "c"}
    )
    assert (cfg.access_ttl_seconds, cfg.refresh_ttl_seconds, cfg.reset_ttl_seconds) == (
        900,
        604800,
        900,
    )
