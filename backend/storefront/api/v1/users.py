"""User administration and self-service profile endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from storefront.api.deps import (
    admin_required,
    current_user,
    json_response,
    parse_pagination,
    require_auth,
    timing,
)
from storefront.core.providers import get_user_admin_service
from storefront.schemas import (
    ProfileUpdateSchema,
    UserAdminUpdateSchema,
    UserFilterSchema,
    UserSchema,
    build_meta,
)
from storefront.services.users.dto import ProfileUpdateIn, UserAdminUpdateIn, UserListIn

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_filter_schema = UserFilterSchema()
admin_update_schema = UserAdminUpdateSchema()
profile_update_schema = ProfileUpdateSchema()


@bp.get("")
@admin_required
@timing
def list_users():
    """Return paginated users (admin only)."""

    filters = user_filter_schema.load(request.args)
    pagination = parse_pagination()
    service = get_user_admin_service(actor_id=current_user().id)
    page = service.list_users(
        UserListIn(
            page=pagination.page,
            limit=pagination.limit,
            sort=tuple(pagination.sort),
            role=filters.get("role"),
        )
    )
    data = user_list_schema.dump(page.items)
    meta = build_meta(total=page.total, page=page.page, limit=page.limit)
    return json_response({"data": data, "meta": meta})


@bp.put("/<int:user_id>")
@admin_required
@timing
def update_user(user_id: int):
    """Update another user's name, email or role (admin only)."""

    payload = admin_update_schema.load(request.get_json(silent=True) or {})
    service = get_user_admin_service(actor_id=current_user().id)
    user = service.update_user(user_id, UserAdminUpdateIn(**payload))
    return json_response({"message": "User updated successfully", "data": user_schema.dump(user)})


@bp.put("/profile")
@require_auth
@timing
def update_profile():
    """Update the caller's own name and/or password."""

    payload = profile_update_schema.load(request.get_json(silent=True) or {})
    me = current_user()
    service = get_user_admin_service(actor_id=me.id)
    user = service.update_profile(me.id, ProfileUpdateIn(**payload))
    return json_response(
        {"message": "Profile updated successfully", "data": user_schema.dump(user)}
    )
