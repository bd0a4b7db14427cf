"""
Progress Blueprint

    POST /api/v1/progress/log-time   → add study minutes to a module
    GET  /api/v1/progress/summary    → active roadmap progress summary
"""

from flask import Blueprint, g

from learnpath.middleware.auth import require_auth
from learnpath.schemas import LogTimeSchema
from learnpath.services import progress_service
from learnpath.utils.helpers import ok, validate_body

progress_bp = Blueprint("progress", __name__, url_prefix="/api/v1/progress")


@progress_bp.route("/log-time", methods=["POST"])
@require_auth
def log_time():
    body = validate_body(LogTimeSchema)
    progress = progress_service.log_time(g.current_user, body.module_id, body.minutes, body.notes)
    return ok(progress.to_dict())


@progress_bp.route("/summary", methods=["GET"])
@require_auth
def summary():
    return ok(progress_service.progress_summary(g.current_user.id))
