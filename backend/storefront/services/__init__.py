"""Service layer public API.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`
- :class:`TokenService` with :class:`TokenPair` / :class:`TokenConfig`
- :class:`AuthorizationGate`
- :class:`AccountService` with its DTOs
- :class:`UserAdminService` with its DTOs
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .accounts.dto import LoginIn, PasswordResetIn, SessionOut, SignupIn
from .accounts.service import AccountService
from .gate.service import AuthorizationGate
from .tokens.dto import TokenConfig, TokenPair
from .tokens.service import TokenService
from .users.dto import ProfileUpdateIn, UserAdminUpdateIn, UserListIn, UserListOut, UserOut
from .users.service import UserAdminService

__all__ = [
    "BaseService",
    "ServiceContext",
    "TokenService",
    "TokenPair",
    "TokenConfig",
    "AuthorizationGate",
    "AccountService",
    "SignupIn",
    "LoginIn",
    "PasswordResetIn",
    "SessionOut",
    "UserAdminService",
    "UserOut",
    "UserListIn",
    "UserListOut",
    "UserAdminUpdateIn",
    "ProfileUpdateIn",
]
