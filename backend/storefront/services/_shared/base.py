"""Base class shared by the application services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.core import errors as api_errors
from storefront.repositories.base import Pagination
from storefront.services._shared.errors import (
    AlreadyExistsError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidRefreshTokenError,
    NotFoundError,
    ServiceError,
    UnauthenticatedError,
    UpstreamFailureError,
)
from storefront.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Offer shared validation helpers (pagination/sorting).

    Notes
    -----
    Services never touch the global session directly; they go through a
    Unit of Work.
    """

    MAX_PAGE_SIZE = 100

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size, clamped to ``MAX_PAGE_SIZE``.
        :param sort: Sort tokens like ``["-created_at", "name"]``.
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), self.MAX_PAGE_SIZE)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, AlreadyExistsError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, InvalidCredentialsError):
            return api_errors.Unauthorized(str(exc), code="invalid_credentials")

        if isinstance(exc, InvalidRefreshTokenError):
            return api_errors.Unauthorized(str(exc), code="invalid_refresh_token")

        if isinstance(exc, UnauthenticatedError):
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, ForbiddenError):
            return api_errors.Forbidden(str(exc))

        if isinstance(exc, InvalidOrExpiredTokenError):
            return api_errors.BadRequest(str(exc), code="invalid_token")

        if isinstance(exc, UpstreamFailureError):
            return api_errors.ServiceUnavailable()

        # Any other ServiceError subclass → 400
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        return exc
