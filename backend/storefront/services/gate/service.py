# storefront/services/gate/service.py
from __future__ import annotations

import logging

from storefront.models.user import Role
from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import (
    ForbiddenError,
    InvalidOrExpiredTokenError,
    UnauthenticatedError,
)
from storefront.services._shared.policies.roles import grants
from storefront.services.tokens.service import TokenService
from storefront.services.users.dto import UserOut

log = logging.getLogger(__name__)


class AuthorizationGate(BaseService):
    """
    Resolves the caller from an access token and checks role grants.

    ``authenticate`` must succeed before ``authorize`` is consulted.
    """

    def __init__(self, *, token_service: TokenService) -> None:
        super().__init__()
        self.token_service = token_service

    def authenticate(self, access_token: str | None) -> UserOut:
        """
        Resolve the user behind ``access_token``.

        :raises UnauthenticatedError: When the token is missing, invalid,
            expired, or names a user that no longer exists.
        """
        if not access_token:
            raise UnauthenticatedError("Unauthorized - no access token provided")
        try:
            user_id = self.token_service.verify_access_token(access_token)
        except InvalidOrExpiredTokenError as exc:
            raise UnauthenticatedError("Unauthorized - invalid or expired access token") from exc

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise UnauthenticatedError("User not found")
            return UserOut.from_model(user)

    def authorize(self, user: UserOut, required: Role | str) -> None:
        """
        :raises ForbiddenError: Unless ``user.role`` grants ``required``.
        """
        required_role = Role.parse(required)
        if not grants(user.role, required_role):
            log.info(
                "auth.forbidden",
                extra={"event": "auth.forbidden", "user_id": user.id},
            )
            raise ForbiddenError(f"Access denied - {required_role.value} only")
