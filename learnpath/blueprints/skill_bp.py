"""
Skill Catalogue Blueprint

    GET /api/v1/skills?phase=   → catalogue in sequence order
    GET /api/v1/skills/<slug>   → skill with resources and prerequisite edges
"""

from flask import Blueprint, request

from learnpath.services import skill_service
from learnpath.utils.helpers import ok

skill_bp = Blueprint("skills", __name__, url_prefix="/api/v1/skills")


@skill_bp.route("", methods=["GET"])
def list_skills():
    skills = skill_service.list_skills(request.args.get("phase"))
    return ok([s.to_dict() for s in skills])


@skill_bp.route("/<slug>", methods=["GET"])
def get_skill(slug):
    return ok(skill_service.skill_detail(skill_service.get_skill_by_slug(slug)))
