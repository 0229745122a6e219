# storefront/services/tokens/service.py
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from storefront.services._shared.errors import (
    InvalidOrExpiredTokenError,
    InvalidRefreshTokenError,
)
from storefront.services._shared.ports import SessionRegistry, TokenProvider
from storefront.services._shared.ports.session_registry import refresh_key
from storefront.services.tokens.dto import TokenConfig, TokenPair

ACCESS = "access"
REFRESH = "refresh"
RESET = "reset"


class TokenService:
    """
    Issues, verifies, rotates and revokes the three token kinds.

    Access and reset tokens are stateless. A refresh token is valid only
    while it is byte-equal to the registry value under ``refresh:{user_id}``,
    so at most one refresh token per user is live and every issuance
    supersedes the previous one.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        registry: SessionRegistry,
        config: TokenConfig,
    ) -> None:
        """
        :param token_provider: Adapter that signs and verifies JWTs.
        :param registry: Store holding the live refresh token per user.
        :param config: Secrets and lifetimes.
        """
        self.tokens = token_provider
        self.registry = registry
        self.cfg = config

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_token_pair(self, user_id: int) -> TokenPair:
        """Sign a new access/refresh pair for ``user_id``. Registry untouched."""
        access = self._sign(user_id, ACCESS, self.cfg.access_secret, self.cfg.access_ttl_seconds)
        refresh = self._sign(
            user_id, REFRESH, self.cfg.refresh_secret, self.cfg.refresh_ttl_seconds
        )
        return TokenPair(access_token=access, refresh_token=refresh)

    def persist_refresh_token(self, user_id: int, refresh_token: str) -> None:
        """Make ``refresh_token`` the only valid refresh token of ``user_id``."""
        self.registry.set(refresh_key(user_id), refresh_token, self.cfg.refresh_ttl_seconds)

    def issue_session(self, user_id: int) -> TokenPair:
        """Issue a pair and persist its refresh token, superseding any earlier session."""
        pair = self.issue_token_pair(user_id)
        self.persist_refresh_token(user_id, pair.refresh_token)
        return pair

    # ------------------------------------------------------------------ #
    # Refresh / revoke
    # ------------------------------------------------------------------ #

    def rotate_access_token(self, presented_refresh_token: str | None) -> str:
        """
        Mint a fresh access token from a live refresh token.

        The refresh token itself is not rotated.

        :raises InvalidRefreshTokenError: When the token is missing, badly
            signed, expired, of the wrong type, or no longer in the registry.
        """
        if not presented_refresh_token:
            raise InvalidRefreshTokenError("No refresh token provided")
        try:
            user_id = self._verify(presented_refresh_token, REFRESH, self.cfg.refresh_secret)
        except InvalidOrExpiredTokenError as exc:
            raise InvalidRefreshTokenError() from exc

        stored = self.registry.get(refresh_key(user_id))
        if stored is None or stored != presented_refresh_token:
            raise InvalidRefreshTokenError()

        return self._sign(user_id, ACCESS, self.cfg.access_secret, self.cfg.access_ttl_seconds)

    def revoke(self, user_id: int) -> None:
        """Drop the registry entry of ``user_id``. Idempotent."""
        self.registry.delete(refresh_key(user_id))

    def identify_refresh_token(self, refresh_token: str) -> int:
        """
        Return the user id of a correctly signed refresh token, even if expired.

        :raises InvalidOrExpiredTokenError: On a bad signature or wrong type.
        """
        return self._verify(refresh_token, REFRESH, self.cfg.refresh_secret, verify_exp=False)

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify_access_token(self, token: str) -> int:
        """
        Verify signature, expiry and type of an access token. No registry lookup.

        :raises InvalidOrExpiredTokenError: On any failure.
        """
        return self._verify(token, ACCESS, self.cfg.access_secret)

    # ------------------------------------------------------------------ #
    # Password reset side channel
    # ------------------------------------------------------------------ #

    # TODO: track consumed reset tokens in the session registry so a reset
    # link cannot be replayed within its lifetime.
    def issue_reset_token(self, user_id: int) -> str:
        return self._sign(user_id, RESET, self.cfg.reset_secret, self.cfg.reset_ttl_seconds)

    def verify_reset_token(self, token: str) -> int:
        """:raises InvalidOrExpiredTokenError: On any failure."""
        return self._verify(token, RESET, self.cfg.reset_secret)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    def _sign(self, user_id: int, token_type: str, key: str, ttl_seconds: int) -> str:
        now = int(self.now_utc().timestamp())
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + int(ttl_seconds),
            "type": token_type,
            "jti": uuid4().hex,
        }
        return self.tokens.encode(claims, key=key)

    def _verify(self, token: str, token_type: str, key: str, *, verify_exp: bool = True) -> int:
        claims = self.tokens.decode(token, key=key, verify_exp=verify_exp)
        if claims.get("type") != token_type:
            raise InvalidOrExpiredTokenError()
        return self._coerce_user_id(claims.get("sub"))

    @staticmethod
    def _coerce_user_id(subject: Any) -> int:
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidOrExpiredTokenError() from exc
