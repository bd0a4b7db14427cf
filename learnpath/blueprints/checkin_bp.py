"""
Weekly Check-in Blueprint (Pro)

    POST   /api/v1/checkins          → this week's check-in (409 if one exists)
    GET    /api/v1/checkins          → history, newest first (limit/offset)
    GET    /api/v1/checkins/summary  → averages and streak
    DELETE /api/v1/checkins/<id>     → soft delete
"""

from flask import Blueprint, g

from learnpath.blueprints import paginate_query
from learnpath.middleware.auth import require_auth, require_pro
from learnpath.schemas import WeeklyCheckinSchema
from learnpath.services import checkin_service
from learnpath.utils.helpers import ok, validate_body

checkin_bp = Blueprint("checkins", __name__, url_prefix="/api/v1/checkins")


@checkin_bp.route("", methods=["POST"])
@require_auth
@require_pro
def create_checkin():
    body = validate_body(WeeklyCheckinSchema)
    checkin = checkin_service.create_checkin(g.current_user.id, body)
    return ok(checkin.to_dict(), 201)


@checkin_bp.route("", methods=["GET"])
@require_auth
@require_pro
def list_checkins():
    items, total = paginate_query(checkin_service.checkins_query(g.current_user.id))
    return ok([c.to_dict() for c in items], total=total)


@checkin_bp.route("/summary", methods=["GET"])
@require_auth
@require_pro
def summary():
    return ok(checkin_service.checkin_summary(g.current_user.id))


@checkin_bp.route("/<int:checkin_id>", methods=["DELETE"])
@require_auth
@require_pro
def delete_checkin(checkin_id):
    checkin_service.delete_checkin(g.current_user.id, checkin_id)
    return "", 204
