"""
Feedback Blueprint

    POST /api/v1/feedback  → submit (status starts as pending)
    GET  /api/v1/feedback  → own submissions, newest first
"""

from flask import Blueprint, g

from learnpath.blueprints import paginate_query
from learnpath.middleware.auth import require_auth
from learnpath.schemas import FeedbackSchema
from learnpath.services import feedback_service
from learnpath.utils.helpers import ok, validate_body

feedback_bp = Blueprint("feedback", __name__, url_prefix="/api/v1/feedback")


@feedback_bp.route("", methods=["POST"])
@require_auth
def submit():
    body = validate_body(FeedbackSchema)
    feedback = feedback_service.submit_feedback(g.current_user.id, body)
    return ok(feedback.to_dict(), 201)


@feedback_bp.route("", methods=["GET"])
@require_auth
def list_feedback():
    items, total = paginate_query(feedback_service.feedback_query(g.current_user.id))
    return ok([f.to_dict() for f in items], total=total)
