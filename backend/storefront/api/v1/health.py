"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.api.deps import json_response, timing
from storefront.core.extensions import db
from storefront.core.providers import get_session_registry

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and session registry health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    registry_status = "ok" if get_session_registry().ping() else "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    overall = "ok" if db_status == registry_status == "ok" else "degraded"
    payload = {
        "status": overall,
        "db": db_status,
        "registry": registry_status,
        "version": version,
    }
    return json_response(payload, status=200 if overall == "ok" else 503)
