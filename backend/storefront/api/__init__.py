"""HTTP API: mounts the v1 blueprints under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join_prefix(base: str, relative: str) -> str:
    parts = [p for p in (base.strip("/"), relative.strip("/")) if p]
    return "/" + "/".join(parts)


def mount_blueprints(
    app: Flask, *, base_prefix: str, entries: Iterable[tuple[Blueprint, str]]
) -> None:
    """Register each ``(blueprint, relative_prefix)`` pair below ``base_prefix``.

    :param app: Application receiving the blueprints.
    :param base_prefix: Common root, e.g. ``"/api"``.
    :param entries: Pairs whose relative prefix may be empty to mount at the root.
    """
    for bp, relative in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, relative))


def init_app(app: Flask) -> None:
    """Mount ``/api/health``, ``/api/auth/*`` and ``/api/users/*``."""
    from storefront.api.v1 import REGISTRY

    mount_blueprints(app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=REGISTRY)


__all__ = ["init_app", "mount_blueprints"]
