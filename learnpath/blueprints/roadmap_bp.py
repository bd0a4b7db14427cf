"""
Roadmap Blueprint

Analysis:
    GET    /api/v1/roadmap/gap-analysis?target_role=
    GET    /api/v1/roadmap/sequence-skills?skill_ids=1,2,3

Roadmap lifecycle:
    POST   /api/v1/roadmap/generate
    GET    /api/v1/roadmap
    GET    /api/v1/roadmap/<id>
    POST   /api/v1/roadmap/<id>/recalculate-time
    PATCH  /api/v1/roadmap/<id>/modules/<module_id>/skip
    DELETE /api/v1/roadmap/<id>

Module progress:
    PATCH  /api/v1/roadmap/<id>/modules/<module_id>/progress
"""

from flask import Blueprint, g, request

from learnpath.core.exceptions import BadRequestError
from learnpath.middleware.auth import require_auth
from learnpath.models.skill import Skill, SkillDependency
from learnpath.schemas import GenerateRoadmapSchema, ModuleSkipSchema, UpdateProgressSchema
from learnpath.services import progress_service, roadmap_service
from learnpath.services.gap_analysis import analyze_gap
from learnpath.services.roadmap_retrieval import get_roadmap
from learnpath.services.sequencing import sequence_skills
from learnpath.utils.helpers import ok, parse_int_list, validate_body

roadmap_bp = Blueprint("roadmap", __name__, url_prefix="/api/v1/roadmap")


# ═════════════════════════════════════════════════════════════════════════════
# ANALYSIS
# ═════════════════════════════════════════════════════════════════════════════


@roadmap_bp.route("/gap-analysis", methods=["GET"])
@require_auth
def gap_analysis():
    target_role = (request.args.get("target_role") or "").strip()
    if not target_role:
        raise BadRequestError("target_role query parameter is required")
    result = analyze_gap(g.current_user.id, target_role)
    return ok(result.to_dict())


@roadmap_bp.route("/sequence-skills", methods=["GET"])
@require_auth
def sequence():
    """Sequence the given skills, or every non-optional skill when none are named."""
    skill_ids = parse_int_list(request.args.get("skill_ids"), "skill_ids")
    if skill_ids:
        skills = Skill.query.filter(Skill.id.in_(skill_ids)).order_by(Skill.id).all()
    else:
        skills = Skill.query.filter_by(is_optional=False).order_by(Skill.id).all()

    ids = [s.id for s in skills]
    dependencies = []
    if ids:
        dependencies = SkillDependency.query.filter(
            SkillDependency.skill_id.in_(ids),
            SkillDependency.depends_on_id.in_(ids),
        ).all()
    return ok(sequence_skills(skills, dependencies).to_dict())


# ═════════════════════════════════════════════════════════════════════════════
# ROADMAP LIFECYCLE
# ═════════════════════════════════════════════════════════════════════════════


@roadmap_bp.route("/generate", methods=["POST"])
@require_auth
def generate():
    """201 when a roadmap was created, 200 when the active one already existed."""
    body = validate_body(GenerateRoadmapSchema)
    result = roadmap_service.generate_roadmap(
        g.current_user.id, title=body.title, description=body.description,
    )
    return ok(result, 201 if result["created"] else 200)


@roadmap_bp.route("", methods=["GET"])
@require_auth
def get_active():
    return ok(get_roadmap(g.current_user.id))


@roadmap_bp.route("/<int:roadmap_id>", methods=["GET"])
@require_auth
def get_one(roadmap_id):
    return ok(get_roadmap(g.current_user.id, roadmap_id))


@roadmap_bp.route("/<int:roadmap_id>/recalculate-time", methods=["POST"])
@require_auth
def recalculate_time(roadmap_id):
    roadmap = roadmap_service.get_owned_roadmap(g.current_user.id, roadmap_id)
    total = roadmap_service.recalculate_roadmap_time(roadmap)
    return ok({"roadmap_id": roadmap.id, "total_estimated_hours": total})


@roadmap_bp.route("/<int:roadmap_id>/modules/<int:module_id>/skip", methods=["PATCH"])
@require_auth
def skip_module(roadmap_id, module_id):
    body = validate_body(ModuleSkipSchema)
    roadmap = roadmap_service.get_owned_roadmap(g.current_user.id, roadmap_id)
    return ok(roadmap_service.update_module_skip_status(roadmap, module_id, body.is_skipped))


@roadmap_bp.route("/<int:roadmap_id>", methods=["DELETE"])
@require_auth
def delete(roadmap_id):
    roadmap = roadmap_service.get_owned_roadmap(g.current_user.id, roadmap_id)
    roadmap_service.delete_roadmap(roadmap)
    return "", 204


# ═════════════════════════════════════════════════════════════════════════════
# MODULE PROGRESS
# ═════════════════════════════════════════════════════════════════════════════


@roadmap_bp.route("/<int:roadmap_id>/modules/<int:module_id>/progress", methods=["PATCH"])
@require_auth
def update_progress(roadmap_id, module_id):
    body = validate_body(UpdateProgressSchema)
    result = progress_service.update_module_progress(g.current_user, roadmap_id, module_id, body)
    return ok(result)
