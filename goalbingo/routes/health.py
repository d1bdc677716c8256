"""Health check routes."""

from __future__ import annotations

import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from goalbingo.db import get_session
from goalbingo.utils.responses import fail, ok

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Report liveness and whether the record store answers."""

    try:
        get_session().execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check: database unavailable: %s", exc)
        return fail("store_failure", "Database unavailable", 503, details={"database": "down"})

    return ok({"status": "ok", "database": "up"})
