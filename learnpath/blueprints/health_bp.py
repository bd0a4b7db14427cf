"""
Health check blueprint.

Endpoints:
    GET /api/v1/health        database check, 503 when it fails
    GET /api/v1/health/ready  simple 200 for load balancers
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from learnpath.models import db

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api/v1/health")

_STARTED = time.monotonic()


@health_bp.route("", methods=["GET"])
def health():
    """Liveness with database status."""
    try:
        db.session.execute(db.text("SELECT 1"))
        database = "connected"
    except Exception as exc:
        db.session.rollback()
        logger.error("Health check: database failed: %s", exc)
        database = "disconnected"

    healthy = database == "connected"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED, 1),
        "database": database,
    }
    return jsonify(body), 200 if healthy else 503


@health_bp.route("/ready", methods=["GET"])
def ready():
    """Simple readiness probe: always 200 if app is running."""
    return jsonify({"status": "ok"}), 200
