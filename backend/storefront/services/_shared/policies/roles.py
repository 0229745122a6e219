"""Role grant table used by the authorization gate."""

from __future__ import annotations

from collections.abc import Mapping

from storefront.models.user import Role

# Which required roles each actual role satisfies. ``seller`` and ``user`` are
# incomparable: neither grants the other.
ROLE_GRANTS: Mapping[Role, frozenset[Role]] = {
    Role.ADMIN: frozenset({Role.ADMIN, Role.SELLER, Role.USER}),
    Role.SELLER: frozenset({Role.SELLER}),
    Role.USER: frozenset({Role.USER}),
}


def grants(actual: Role | str, required: Role | str) -> bool:
    """Return ``True`` when a user holding ``actual`` may act as ``required``."""
    return Role.parse(required) in ROLE_GRANTS.get(Role.parse(actual), frozenset())
