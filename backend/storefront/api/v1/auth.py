"""Account flow endpoints: signup, login, logout, refresh, profile and password reset."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from storefront.api.deps import (
    access_cookie_name,
    clear_session_cookies,
    current_user,
    json_response,
    refresh_cookie_name,
    require_auth,
    set_access_cookie,
    set_session_cookies,
    timing,
)
from storefront.core.extensions import limiter
from storefront.core.providers import get_account_service
from storefront.schemas import (
    ForgotPasswordSchema,
    LoginSchema,
    ResetPasswordSchema,
    SignupSchema,
    UserSchema,
    VerifyResetTokenSchema,
)
from storefront.services.accounts.dto import LoginIn, PasswordResetIn, SignupIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_schema = SignupSchema()
login_schema = LoginSchema()
forgot_password_schema = ForgotPasswordSchema()
reset_password_schema = ResetPasswordSchema()
verify_reset_token_schema = VerifyResetTokenSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/signup")
@timing
def signup():
    """Register a new user and open their session."""

    payload = signup_schema.load(request.get_json(silent=True) or {})
    session = get_account_service().signup(SignupIn(**payload))
    response = json_response({"data": user_schema.dump(session.user)}, status=201)
    return set_session_cookies(response, session.tokens)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and open a new session."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    session = get_account_service().login(LoginIn(**payload))
    response = json_response({"data": user_schema.dump(session.user)})
    return set_session_cookies(response, session.tokens)


@bp.post("/logout")
@timing
def logout():
    """Close the current session. Always succeeds and always clears cookies."""

    get_account_service().logout(request.cookies.get(refresh_cookie_name()))
    response = json_response({"message": "Logged out successfully"})
    return clear_session_cookies(response)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Mint a new access token from the refresh cookie."""

    access_token = get_account_service().refresh(request.cookies.get(refresh_cookie_name()))
    response = json_response({"message": "Token refreshed successfully"})
    return set_access_cookie(response, access_token)


@bp.get("/profile")
@require_auth
@timing
def profile():
    """Return the authenticated user."""

    return json_response({"data": user_schema.dump(current_user())})


@bp.get("/verify-token")
@timing
def verify_token():
    """Report whether the access cookie still names a valid user."""

    user = get_account_service().verify_session(request.cookies.get(access_cookie_name()))
    return json_response({"message": "Token is valid", "data": user_schema.dump(user)})


@bp.post("/forgot-password")
@timing
def forgot_password():
    """Email a password-reset link."""

    payload = forgot_password_schema.load(request.get_json(silent=True) or {})
    get_account_service().request_password_reset(payload["email"])
    return json_response({"message": "A password reset link has been sent to your email"})


@bp.post("/reset-password")
@timing
def reset_password():
    """Consume a reset token and set a new password."""

    payload = reset_password_schema.load(request.get_json(silent=True) or {})
    get_account_service().reset_password(
        PasswordResetIn(token=payload["token"], new_password=payload["new_password"])
    )
    return json_response({"message": "Password has been reset successfully"})


@bp.post("/verify-reset-token")
@timing
def verify_reset_token():
    """Check a reset token without consuming it."""

    payload = verify_reset_token_schema.load(request.get_json(silent=True) or {})
    if get_account_service().check_reset_token(payload["token"]):
        return json_response({"valid": True, "message": "Token is valid"})
    return json_response({"valid": False, "message": "Invalid or expired token"}, status=400)
