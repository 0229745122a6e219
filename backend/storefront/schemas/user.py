"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from storefront.models.user import Role
from storefront.schemas.common import EMAIL_VALIDATORS, NAME_VALIDATORS


class UserSchema(Schema):
    """Public representation of a user (never includes the password hash)."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.Enum(Role, by_value=True, required=True)
    created_at = fields.DateTime(allow_none=True)


class UserFilterSchema(Schema):
    """Supported query filters for listing users."""

    class Meta:
        unknown = EXCLUDE

    role = fields.Enum(Role, by_value=True, load_default=None)


class UserAdminUpdateSchema(Schema):
    """Fields an administrator may change."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=NAME_VALIDATORS)
    email = fields.Email(validate=EMAIL_VALIDATORS)
    role = fields.Enum(Role, by_value=True)


class ProfileUpdateSchema(Schema):
    """Fields a user may change on their own account."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=NAME_VALIDATORS)
    password = fields.String(validate=validate.Length(min=1, max=128))
