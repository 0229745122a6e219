from __future__ import annotations

from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for signing and verifying compact JWTs with a caller-chosen key."""

    def encode(self, claims: dict[str, Any], *, key: str) -> str:
        """Sign ``claims`` with ``key`` and return the compact serialization."""
        ...

    def decode(self, token: str, *, key: str, verify_exp: bool = True) -> dict[str, Any]:
        """
        Verify ``token`` against ``key`` and return its claims.

        :param verify_exp: When ``False`` an expired but correctly signed token
            still decodes.
        :raises InvalidOrExpiredTokenError: On any signature, format or expiry
            failure.
        """
        ...
