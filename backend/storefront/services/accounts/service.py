"""
AccountService
==============

Account flows that move a client between the Anonymous and Authenticated
states: signup, login, refresh, logout, plus the password-reset side channel.

Each operation maps to one route of the ``/api/auth`` blueprint. Token
issuance and registry writes are delegated to
:class:`~storefront.services.tokens.service.TokenService`.
"""

from __future__ import annotations

import logging
from html import escape

from sqlalchemy.exc import IntegrityError

from storefront.repositories.user import UserRepository
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    NotFoundError,
    violates,
)
from storefront.services._shared.ports import Mailer
from storefront.services.accounts.dto import LoginIn, PasswordResetIn, SessionOut, SignupIn
from storefront.services.gate.service import AuthorizationGate
from storefront.services.tokens.service import TokenService
from storefront.services.users.dto import UserOut

log = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Reset your password"


class AccountService(BaseService):
    """
    Application service for the account state machine.

    Responsibilities
    ----------------
    - Create identities and open their first session.
    - Verify credentials and open a session, superseding any earlier one.
    - Mint access tokens from the live refresh token.
    - Close sessions.
    - Issue, check and consume password-reset tokens.
    """

    def __init__(
        self,
        *,
        token_service: TokenService,
        gate: AuthorizationGate,
        mailer: Mailer,
        frontend_url: str,
    ) -> None:
        """
        :param token_service: Token issuance and registry access.
        :param gate: Resolves users from access tokens.
        :param mailer: Outbound email for reset links.
        :param frontend_url: Base URL the reset link points at.
        """
        super().__init__()
        self.token_service = token_service
        self.gate = gate
        self.mailer = mailer
        self.frontend_url = frontend_url.rstrip("/")

    # --------------------------------------------------------------------- #
    # Anonymous -> Authenticated
    # --------------------------------------------------------------------- #

    def signup(self, dto: SignupIn) -> SessionOut:
        """
        Register a new identity and open its session.

        :raises AlreadyExistsError: When the email is taken. No token is
            issued and the registry is not touched.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_email(dto.email):
                raise AlreadyExistsError("User", "User already exists")

            try:
                user = repo.add(
                    repo.model(
                        email=dto.email,
                        name=dto.name or dto.email.split("@", 1)[0],
                        password=dto.password,  # model hashes via setter
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                    raise AlreadyExistsError("User", "User already exists") from exc
                raise
            user_out = UserOut.from_model(user)

        tokens = self.token_service.issue_session(user_out.id)
        log.info("auth.signup", extra={"event": "auth.signup", "user_id": user_out.id})
        return SessionOut(user=user_out, tokens=tokens)

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Verify credentials and open a new session.

        A successful login overwrites the registry entry, so the refresh
        token of any earlier session for the same user stops working.

        :raises InvalidCredentialsError: For an unknown email or a wrong
            password alike.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                log.info("auth.login.failed", extra={"event": "auth.login.failed"})
                raise InvalidCredentialsError()
            user_out = UserOut.from_model(user)

        tokens = self.token_service.issue_session(user_out.id)
        log.info("auth.login", extra={"event": "auth.login", "user_id": user_out.id})
        return SessionOut(user=user_out, tokens=tokens)

    # --------------------------------------------------------------------- #
    # Authenticated -> Authenticated / Anonymous
    # --------------------------------------------------------------------- #

    def refresh(self, refresh_token: str | None) -> str:
        """
        Return a new access token for the holder of the live refresh token.

        :raises InvalidRefreshTokenError: See :meth:`TokenService.rotate_access_token`.
        """
        access = self.token_service.rotate_access_token(refresh_token)
        log.info("auth.refresh", extra={"event": "auth.refresh"})
        return access

    def logout(self, refresh_token: str | None) -> None:
        """
        Close the session behind ``refresh_token``, if any.

        Never raises for a missing, malformed or expired token. A correctly
        signed token (even expired) revokes its user's registry entry.
        """
        if not refresh_token:
            return
        try:
            user_id = self.token_service.identify_refresh_token(refresh_token)
        except InvalidOrExpiredTokenError:
            log.info("auth.logout.unrecognized_token", extra={"event": "auth.logout"})
            return
        self.token_service.revoke(user_id)
        log.info("auth.logout", extra={"event": "auth.logout", "user_id": user_id})

    def verify_session(self, access_token: str | None) -> UserOut:
        """
        Return the user behind ``access_token``.

        :raises UnauthenticatedError: When the token or its user is invalid.
        """
        return self.gate.authenticate(access_token)

    # --------------------------------------------------------------------- #
    # Password reset
    # --------------------------------------------------------------------- #

    def request_password_reset(self, email: str) -> None:
        """
        Email a reset link to ``email``.

        Delivery is fire-and-forget: a transport failure is logged and the
        request still succeeds.

        :raises NotFoundError: When no user has that email.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_email(email)
            if user is None:
                raise NotFoundError("User", email)
            user_id, to_address = user.id, user.email

        token = self.token_service.issue_reset_token(user_id)
        link = f"{self.frontend_url}/reset-password/{token}"
        log.info(
            "auth.password_reset.requested",
            extra={"event": "auth.password_reset.requested", "user_id": user_id},
        )

        try:
            self.mailer.send(to_address, RESET_EMAIL_SUBJECT, self._reset_body(link))
        except Exception:
            log.exception(
                "auth.password_reset.mail_failed",
                extra={"event": "auth.password_reset.mail_failed", "user_id": user_id},
            )

    def check_reset_token(self, token: str) -> bool:
        """Return ``True`` when ``token`` is a live, correctly signed reset token."""
        try:
            self.token_service.verify_reset_token(token)
        except InvalidOrExpiredTokenError:
            return False
        return True

    def reset_password(self, dto: PasswordResetIn) -> None:
        """
        Replace the password of the user named by a reset token.

        :raises InvalidOrExpiredTokenError: When the token fails verification.
        :raises NotFoundError: When the user no longer exists.
        """
        user_id = self.token_service.verify_reset_token(dto.token)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.update_password(user, dto.new_password)

        log.info(
            "auth.password_reset.completed",
            extra={"event": "auth.password_reset.completed", "user_id": user_id},
        )

    @staticmethod
    def _reset_body(link: str) -> str:
        safe = escape(link, quote=True)
        return (
            "<p>You requested a password reset. Follow the link below to choose a new "
            "password:</p>"
            f'<p><a href="{safe}">{safe}</a></p>'
            "<p>The link expires in 15 minutes. If you did not ask for this, ignore "
            "this email.</p>"
        )
