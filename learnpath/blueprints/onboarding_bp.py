"""
Onboarding Wizard Blueprint

  GET   /                → current state (created on first read)
  PATCH /step/<n>        → save answers for step n (1-4)
  POST  /goto/<n>        → jump back to a step for editing
  POST  /skip            → generic path, no answers needed
  POST  /restart         → back to step 1, answers kept
  POST  /complete        → finish and generate the roadmap
"""

from flask import Blueprint, g, request

from learnpath.core.exceptions import BadRequestError
from learnpath.middleware.auth import require_auth
from learnpath.services import onboarding_service as svc
from learnpath.utils.helpers import ok

onboarding_bp = Blueprint("onboarding", __name__, url_prefix="/api/v1/onboarding")


@onboarding_bp.route("", methods=["GET"])
@require_auth
def get_state():
    state = svc.get_or_create_state(g.current_user.id)
    return ok(state.to_dict())


@onboarding_bp.route("/step/<int:step>", methods=["PATCH"])
@require_auth
def save_step(step):
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")
    state = svc.save_step(g.current_user.id, step, payload)
    return ok(state.to_dict())


@onboarding_bp.route("/goto/<int:step>", methods=["POST"])
@require_auth
def goto_step(step):
    state = svc.goto_step(g.current_user.id, step)
    return ok(state.to_dict())


@onboarding_bp.route("/skip", methods=["POST"])
@require_auth
def skip():
    state = svc.skip(g.current_user.id)
    return ok(state.to_dict())


@onboarding_bp.route("/restart", methods=["POST"])
@require_auth
def restart():
    state = svc.restart(g.current_user.id)
    return ok(state.to_dict())


@onboarding_bp.route("/complete", methods=["POST"])
@require_auth
def complete():
    """Finish onboarding; the response carries the generated roadmap id."""
    state, generation = svc.complete(g.current_user.id)
    data = state.to_dict()
    data["roadmap_id"] = generation["roadmap_id"]
    return ok(data)
