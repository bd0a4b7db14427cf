"""
Roadmap retrieval: the full roadmap view for the dashboard.

Modules are grouped into phases (PHASE_ORDER, unknown phases last), each
module carries its skill, the skill's resources (best quality first) and
the caller's progress row.
"""

import logging

from learnpath.core.constants import phase_index
from learnpath.core.exceptions import NotFoundError
from learnpath.services.roadmap_service import (
    get_active_roadmap,
    get_owned_roadmap,
    projected_completion,
    remaining_hours,
    weekly_hours_for,
)
from learnpath.services.time_calculation import round_half_up

logger = logging.getLogger(__name__)


class RoadmapNotFound(NotFoundError):
    """No active roadmap; clients send the learner back to onboarding."""

    redirect_to = "/onboarding"


def _module_view(module, user_id):
    progress = module.progress_for(user_id)
    data = module.to_dict()
    data["skill"] = module.skill.to_dict(include_resources=True)
    data["progress"] = progress.to_dict() if progress else None
    return data


def _status(view):
    return view["progress"]["status"] if view["progress"] else "not_started"


def build_progress(views, roadmap, remaining):
    total = len(views)
    completed = sum(1 for v in views if _status(v) == "completed")
    in_progress = sum(1 for v in views if _status(v) == "in_progress")
    skipped = sum(
        1 for v in views
        if _status(v) == "skipped" or (v["is_skipped"] and _status(v) not in ("completed", "in_progress"))
    )
    return {
        "total_modules": total,
        "completed_modules": completed,
        "in_progress_modules": in_progress,
        "skipped_modules": skipped,
        "not_started_modules": total - completed - in_progress - skipped,
        "completion_percentage": round_half_up(completed / total * 100) if total else 0,
        "total_hours": roadmap.total_estimated_hours,
        "completed_hours": roadmap.completed_hours,
        "remaining_hours": remaining,
    }


def build_phases(views):
    buckets = {}
    for view in views:
        buckets.setdefault(view["phase"], []).append(view)

    phases = []
    for phase in sorted(buckets, key=phase_index):
        modules = buckets[phase]
        done = [m for m in modules if _status(m) == "completed"]
        phases.append({
            "phase": phase,
            "modules": modules,
            "total_hours": sum(m["skill"]["estimated_hours"] for m in modules),
            "completed_hours": sum(m["skill"]["estimated_hours"] for m in done),
            "completed_modules": len(done),
            "total_modules": len(modules),
        })
    return phases


def get_roadmap(user_id, roadmap_id=None):
    """The caller's active roadmap, or roadmap ``roadmap_id`` when given."""
    if roadmap_id is None:
        roadmap = get_active_roadmap(user_id)
        if roadmap is None:
            raise RoadmapNotFound(
                "No active roadmap found. Please complete onboarding to generate a roadmap."
            )
    else:
        roadmap = get_owned_roadmap(user_id, roadmap_id)

    views = [_module_view(m, user_id) for m in roadmap.modules]
    phases = build_phases(views)
    progress = build_progress(views, roadmap, remaining_hours(roadmap, user_id))
    weekly_hours = weekly_hours_for(user_id)

    logger.info(
        "Roadmap retrieved: %d modules in %d phases", len(views), len(phases),
        extra={"user_id": user_id, "roadmap_id": roadmap.id},
    )

    data = roadmap.to_dict()
    data["phases"] = phases
    data["progress"] = progress
    data["timeline"] = {
        "total_hours": progress["total_hours"],
        "completed_hours": progress["completed_hours"],
        "remaining_hours": progress["remaining_hours"],
        "projected_completion": projected_completion(
            progress["remaining_hours"], weekly_hours
        ).isoformat(),
        "weekly_hours": weekly_hours,
    }
    return data
