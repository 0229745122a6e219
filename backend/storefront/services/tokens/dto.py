"""DTOs for :class:`~storefront.services.tokens.service.TokenService`."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh token pair handed to the client as cookies.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Signing secrets and lifetimes, one set per token kind.

    :param access_secret: Key for access tokens.
    :param refresh_secret: Key for refresh tokens.
    :param reset_secret: Key for password-reset tokens.
    :param access_ttl_seconds: Access token lifetime (15 min default).
    :param refresh_ttl_seconds: Refresh token lifetime and registry TTL (7 days default).
    :param reset_ttl_seconds: Password-reset token lifetime (15 min default).
    """

    access_secret: str
    refresh_secret: str
    reset_secret: str
    access_ttl_seconds: int = 15 * 60
    refresh_ttl_seconds: int = 7 * 24 * 60 * 60
    reset_ttl_seconds: int = 15 * 60

    @classmethod
    def from_mapping(cls, config) -> TokenConfig:
        """Build from a Flask-style config mapping."""
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            reset_secret=config["RESET_TOKEN_SECRET"],
            access_ttl_seconds=int(config.get("ACCESS_TOKEN_TTL_SECONDS", 15 * 60)),
            refresh_ttl_seconds=int(config.get("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60)),
            reset_ttl_seconds=int(config.get("RESET_TOKEN_TTL_SECONDS", 15 * 60)),
        )
