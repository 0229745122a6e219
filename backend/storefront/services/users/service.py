"""
UserAdminService
================

User administration: the admin listing, admin edits of name/email/role and
self-service profile edits. Hard deletion is not offered.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import AlreadyExistsError, NotFoundError, violates
from storefront.services.users.dto import (
    ProfileUpdateIn,
    UserAdminUpdateIn,
    UserListIn,
    UserListOut,
    UserOut,
)

log = logging.getLogger(__name__)


class UserAdminService(BaseService):
    """Application service for managing existing users."""

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def list_users(self, dto: UserListIn) -> UserListOut:
        """
        Page through users, optionally filtered by role.

        :param dto: Listing query.
        :type dto: UserListIn
        :returns: One page of users and the total count.
        :rtype: UserListOut
        """
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit, sort=dto.sort)
        filters = {"role": dto.role} if dto.role is not None else None

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            page = repo.paginate(pagination, filters=filters)
            return UserListOut(
                items=[UserOut.from_model(u) for u in page.items],
                total=page.total,
                page=page.page,
                limit=page.limit,
            )

    def get_user(self, user_id: int) -> UserOut:
        """:raises NotFoundError: If the user does not exist."""
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserOut.from_model(user)

    # --------------------------------------------------------------------- #
    # Updates
    # --------------------------------------------------------------------- #

    def update_user(self, user_id: int, dto: UserAdminUpdateIn) -> UserOut:
        """
        Apply an administrator's edit to ``user_id``.

        :raises NotFoundError: When the user does not exist.
        :raises AlreadyExistsError: When the new email belongs to another user.
        """
        updates: dict[str, Any] = {
            k: v
            for k, v in {"name": dto.name, "email": dto.email, "role": dto.role}.items()
            if v is not None
        }

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            if dto.email is not None and repo.exists_by_email(dto.email, exclude_id=user_id):
                raise AlreadyExistsError("User", "Email already in use")

            try:
                repo.assign_updates(user, updates)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                    raise AlreadyExistsError("User", "Email already in use") from exc
                raise
            out = UserOut.from_model(user)

        log.info(
            "users.updated",
            extra={"event": "users.updated", "user_id": user_id, "actor_id": self.ctx.actor_id},
        )
        return out

    def update_profile(self, user_id: int, dto: ProfileUpdateIn) -> UserOut:
        """
        Apply a self-service edit (name and/or password).

        :raises NotFoundError: When the user vanished since authentication.
        """
        updates: dict[str, Any] = {}
        if dto.name is not None:
            updates["name"] = dto.name
        if dto.password is not None:
            updates["password"] = dto.password

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.assign_updates(user, updates)
            out = UserOut.from_model(user)

        log.info(
            "users.profile_updated",
            extra={"event": "users.profile_updated", "user_id": user_id},
        )
        return out
