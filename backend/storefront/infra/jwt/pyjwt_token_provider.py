# storefront/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jwt

from storefront.services._shared.errors import InvalidOrExpiredTokenError
from storefront.services._shared.ports import TokenProvider


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HMAC JWT adapter built on PyJWT.

    The signing key is passed per call so access, refresh and reset tokens can
    each use their own secret.

    :param algorithm: JWS algorithm, ``HS256`` by default.
    """

    algorithm: str = "HS256"

    def encode(self, claims: dict[str, Any], *, key: str) -> str:
        return jwt.encode(claims, key, algorithm=self.algorithm)

    def decode(self, token: str, *, key: str, verify_exp: bool = True) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                key,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": verify_exp,
                    "require": ["sub", "exp", "type"],
                },
                leeway=0,
            )
        except jwt.PyJWTError as exc:
            raise InvalidOrExpiredTokenError() from exc
