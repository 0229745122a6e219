"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    ForgotPasswordSchema,
    LoginSchema,
    ResetPasswordSchema,
    SignupSchema,
    VerifyResetTokenSchema,
)
from .common import PaginationQuerySchema, build_meta
from .user import ProfileUpdateSchema, UserAdminUpdateSchema, UserFilterSchema, UserSchema

__all__ = [
    "SignupSchema",
    "LoginSchema",
    "ForgotPasswordSchema",
    "ResetPasswordSchema",
    "VerifyResetTokenSchema",
    "PaginationQuerySchema",
    "build_meta",
    "UserSchema",
    "UserFilterSchema",
    "UserAdminUpdateSchema",
    "ProfileUpdateSchema",
]
