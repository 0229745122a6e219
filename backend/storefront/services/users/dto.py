"""
DTOs for account and user-administration services.

They keep ORM instances out of the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.models.user import Role, User

# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public-safe user representation.

    :param id: User primary key.
    :param name: Display name.
    :param email: Login email.
    :param role: Authorization role.
    :param created_at: Creation timestamp.
    """

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=Role.parse(user.role),
            created_at=user.created_at,
        )


@dataclass(frozen=True, slots=True)
class UserListOut:
    """
    Page of users for the admin listing.

    :param items: Users on this page.
    :param total: Total rows matching the filters.
    :param page: Current page (1-based).
    :param limit: Page size.
    """

    items: list[UserOut]
    total: int
    page: int
    limit: int


# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserListIn:
    """
    Listing query for administrators.

    :param page: 1-based page number.
    :param limit: Page size.
    :param sort: Sort tokens like ``["-created_at"]``.
    :param role: Optional role filter.
    """

    page: int = 1
    limit: int = 20
    sort: tuple[str, ...] = ()
    role: Role | None = None


@dataclass(frozen=True, slots=True)
class UserAdminUpdateIn:
    """Fields an administrator may change; ``None`` leaves a field untouched."""

    name: str | None = None
    email: str | None = None
    role: Role | None = None


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """Fields a user may change on their own account."""

    name: str | None = None
    password: str | None = None
