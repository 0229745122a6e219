"""Shared API helpers: authorization gates, session cookies and response utilities."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from storefront.core.providers import get_gate
from storefront.models.user import Role
from storefront.repositories.base import Pagination
from storefront.schemas.common import PaginationQuerySchema
from storefront.services.tokens.dto import TokenPair
from storefront.services.users.dto import UserOut

F = TypeVar("F", bound=Callable[..., Any])


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=data["sort"])


# ---------------------------------------------------------------------------
# Session cookies
# ---------------------------------------------------------------------------


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("COOKIE_SECURE", True)),
        "samesite": current_app.config.get("COOKIE_SAMESITE", "Strict"),
        "path": "/",
    }


def access_cookie_name() -> str:
    return str(current_app.config.get("ACCESS_COOKIE_NAME", "accessToken"))


def refresh_cookie_name() -> str:
    return str(current_app.config.get("REFRESH_COOKIE_NAME", "refreshToken"))


def set_access_cookie(response: Response, access_token: str) -> Response:
    """Attach the access token cookie (max-age = access token lifetime)."""

    response.set_cookie(
        access_cookie_name(),
        access_token,
        max_age=int(current_app.config.get("ACCESS_TOKEN_TTL_SECONDS", 900)),
        **_cookie_options(),
    )
    return response


def set_session_cookies(response: Response, tokens: TokenPair) -> Response:
    """Attach both session cookies."""

    set_access_cookie(response, tokens.access_token)
    response.set_cookie(
        refresh_cookie_name(),
        tokens.refresh_token,
        max_age=int(current_app.config.get("REFRESH_TOKEN_TTL_SECONDS", 604800)),
        **_cookie_options(),
    )
    return response


def clear_session_cookies(response: Response) -> Response:
    """Expire both session cookies on the client."""

    options = _cookie_options()
    for name in (access_cookie_name(), refresh_cookie_name()):
        response.delete_cookie(
            name,
            path=options["path"],
            secure=options["secure"],
            httponly=True,
            samesite=options["samesite"],
        )
    return response


# ---------------------------------------------------------------------------
# Authorization gates
# ---------------------------------------------------------------------------


def current_user() -> UserOut:
    """Return the user resolved by :func:`require_auth` for this request."""

    return g.current_user


def _authenticate() -> UserOut:
    user = get_gate().authenticate(request.cookies.get(access_cookie_name()))
    g.current_user = user
    return user


def require_auth(func: F) -> F:
    """Resolve the ``accessToken`` cookie to a user before the handler runs.

    Raises ``UnauthenticatedError`` (401) when the cookie is missing, invalid,
    expired, or names no existing user.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        _authenticate()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(required: Role | str) -> Callable[[F], F]:
    """Authenticate, then reject with ``ForbiddenError`` (403) unless the role grants ``required``."""

    required_role = Role.parse(required)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            user = _authenticate()
            get_gate().authorize(user, required_role)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


admin_required = require_role(Role.ADMIN)
seller_required = require_role(Role.SELLER)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
