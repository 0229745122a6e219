"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from storefront.schemas.common import EMAIL_VALIDATORS, NAME_VALIDATORS


class SignupSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=EMAIL_VALIDATORS)
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    name = fields.String(load_default=None, validate=NAME_VALIDATORS)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=EMAIL_VALIDATORS)
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class ForgotPasswordSchema(Schema):
    """Input payload requesting a reset link."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=EMAIL_VALIDATORS)


class ResetPasswordSchema(Schema):
    """Input payload consuming a reset token (``newPassword`` on the wire)."""

    class Meta:
        unknown = EXCLUDE

    token = fields.String(required=True, validate=validate.Length(min=1))
    new_password = fields.String(
        required=True, data_key="newPassword", validate=validate.Length(min=1, max=128)
    )


class VerifyResetTokenSchema(Schema):
    """Input payload for checking a reset token without consuming it."""

    class Meta:
        unknown = EXCLUDE

    token = fields.String(required=True)
