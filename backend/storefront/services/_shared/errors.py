"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
types. The translation to HTTP responses (RFC 7807) happens in
:meth:`storefront.services._shared.base.BaseService.translate_exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the driver message names the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    These are *not* HTTP errors; ``BaseService.translate_exceptions`` maps
    them to :class:`storefront.core.errors.APIError` subclasses.
    """


# --------------------------------------------------------------------------- #
# Account & session errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class AlreadyExistsError(ServiceError):
    """
    Raised when creating or renaming an entity would collide with another.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class InvalidCredentialsError(ServiceError):
    """Email/password pair rejected. The message never says which half failed."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class UnauthenticatedError(ServiceError):
    """No usable access token was presented, or it names no existing user."""

    def __init__(self, message: str = "Unauthorized - no valid access token") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """The authenticated user's role does not grant the required role."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class InvalidRefreshTokenError(ServiceError):
    """Refresh token missing, badly signed, expired, or superseded in the registry."""

    def __init__(self, message: str = "Invalid refresh token") -> None:
        super().__init__(message)


class InvalidOrExpiredTokenError(ServiceError):
    """A signed token failed signature, expiry or type verification."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class UpstreamFailureError(ServiceError):
    """A collaborator (session registry, database, mail transport) failed."""

    def __init__(self, message: str = "Upstream service unavailable") -> None:
        super().__init__(message)
