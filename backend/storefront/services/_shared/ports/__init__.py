"""
storefront.services._shared.ports
=================================

Ports (hexagonal interfaces) that keep the service layer independent from
token encoding, session storage and mail transport.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, signing and verifying compact JWTs.
- :mod:`session_registry`:
    :class:`~.SessionRegistry`, the key/value store with TTL that holds the
    single valid refresh token per user, plus an in-memory double.
- :mod:`mailer`:
    :class:`~.Mailer`, outbound email, plus an in-memory outbox double.

Concrete adapters live under ``storefront.infra``.
"""

from __future__ import annotations

from .mailer import Mailer, OutboundEmail, OutboxMailer
from .session_registry import InMemorySessionRegistry, SessionRegistry
from .token_provider import TokenProvider

__all__ = [
    "TokenProvider",
    "SessionRegistry",
    "InMemorySessionRegistry",
    "Mailer",
    "OutboundEmail",
    "OutboxMailer",
]
