"""Build request-scoped services from app config and extensions.

Adapters with process-wide state (the in-memory session registry and the
mailer) are cached in ``app.extensions`` so every request sees the same one.
"""

from __future__ import annotations

from flask import Flask, current_app

from storefront.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from storefront.infra.mail.smtp_mailer import ConsoleMailer, SMTPMailer
from storefront.infra.redis.redis_session_registry import RedisSessionRegistry
from storefront.services._shared.base import ServiceContext
from storefront.services._shared.ports import (
    InMemorySessionRegistry,
    Mailer,
    OutboxMailer,
    SessionRegistry,
)
from storefront.services.accounts.service import AccountService
from storefront.services.gate.service import AuthorizationGate
from storefront.services.tokens.dto import TokenConfig
from storefront.services.tokens.service import TokenService
from storefront.services.users.service import UserAdminService

REGISTRY_EXTENSION = "session_registry"
MAILER_EXTENSION = "mailer"


def _app(app: Flask | None) -> Flask:
    return app if app is not None else current_app._get_current_object()  # type: ignore[attr-defined]


def get_session_registry(app: Flask | None = None) -> SessionRegistry:
    """Redis-backed registry when a client is configured, else a process-local one."""
    app = _app(app)
    client = app.extensions.get("redis_client")
    if client is not None:
        return RedisSessionRegistry(client)
    return app.extensions.setdefault(REGISTRY_EXTENSION, InMemorySessionRegistry())


def get_mailer(app: Flask | None = None) -> Mailer:
    """Return the mailer selected by ``MAIL_BACKEND`` (``smtp``, ``console`` or ``memory``)."""
    app = _app(app)
    mailer = app.extensions.get(MAILER_EXTENSION)
    if mailer is not None:
        return mailer

    backend = str(app.config.get("MAIL_BACKEND", "console")).lower()
    if backend == "smtp":
        mailer = SMTPMailer(
            host=app.config["MAIL_SERVER"],
            port=int(app.config["MAIL_PORT"]),
            sender=app.config["MAIL_DEFAULT_SENDER"],
            username=app.config.get("MAIL_USERNAME"),
            password=app.config.get("MAIL_PASSWORD"),
            use_tls=bool(app.config.get("MAIL_USE_TLS", True)),
            timeout=float(app.config.get("MAIL_TIMEOUT_SECONDS", 10)),
        )
    elif backend == "memory":
        mailer = OutboxMailer()
    elif backend == "console":
        mailer = ConsoleMailer()
    else:
        raise RuntimeError(f"Unknown MAIL_BACKEND {backend!r}")

    app.extensions[MAILER_EXTENSION] = mailer
    return mailer


def get_token_service(app: Flask | None = None) -> TokenService:
    app = _app(app)
    return TokenService(
        token_provider=PyJWTTokenProvider(algorithm=app.config.get("JWT_ALGORITHM", "HS256")),
        registry=get_session_registry(app),
        config=TokenConfig.from_mapping(app.config),
    )


def get_gate(app: Flask | None = None) -> AuthorizationGate:
    return AuthorizationGate(token_service=get_token_service(app))


def get_account_service(app: Flask | None = None) -> AccountService:
    app = _app(app)
    token_service = get_token_service(app)
    return AccountService(
        token_service=token_service,
        gate=AuthorizationGate(token_service=token_service),
        mailer=get_mailer(app),
        frontend_url=app.config.get("FRONTEND_URL", "http://localhost:3000"),
    )


def get_user_admin_service(actor_id: int | None = None) -> UserAdminService:
    return UserAdminService(ctx=ServiceContext(actor_id=actor_id))
