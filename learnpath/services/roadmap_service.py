"""
Roadmap generation and maintenance.

generate_roadmap: gap analysis → sequencing → Roadmap + RoadmapModules →
total hours from the time-calculation formula. At most one active roadmap
per user; calling it again returns the existing one.
"""

import logging
import math
import time
from datetime import date, timedelta

from flask import current_app

from learnpath.core.exceptions import BadRequestError, NotFoundError
from learnpath.models import db
from learnpath.models.onboarding import OnboardingState
from learnpath.models.roadmap import Roadmap, RoadmapModule
from learnpath.models.skill import SkillDependency
from learnpath.services.gap_analysis import analyze_gap
from learnpath.services.sequencing import sequence_skills
from learnpath.services.time_calculation import calculate_roadmap_time

logger = logging.getLogger(__name__)

SLOW_GENERATION_MS = 3000


# ═══════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════

def projected_completion(hours, weekly_hours, today=None):
    """today + ceil(hours / weekly_hours) weeks."""
    if not weekly_hours or weekly_hours <= 0:
        weekly_hours = current_app.config["DEFAULT_WEEKLY_HOURS"]
    today = today or date.today()
    weeks = math.ceil(max(hours, 0) / weekly_hours)
    return today + timedelta(weeks=weeks)


def roadmap_title(source_role, target_role):
    if source_role:
        return f"From {source_role} to {target_role}"
    return f"Path to {target_role}"


def roadmap_description(target_role, hours):
    return (
        f"Personalized learning path to become a {target_role}. "
        f"Estimated {hours} hours of focused learning."
    )


def weekly_hours_for(user_id):
    state = OnboardingState.query.filter_by(user_id=user_id).first()
    if state and state.weekly_hours:
        return state.weekly_hours
    return current_app.config["DEFAULT_WEEKLY_HOURS"]


def get_active_roadmap(user_id):
    return (
        Roadmap.query_active()
        .filter_by(user_id=user_id, is_active=True)
        .order_by(Roadmap.created_at.desc())
        .first()
    )


def get_owned_roadmap(user_id, roadmap_id):
    """Roadmap ``roadmap_id`` if it belongs to ``user_id`` and is not deleted."""
    roadmap = db.session.get(Roadmap, roadmap_id)
    if roadmap is None or roadmap.user_id != user_id or roadmap.is_deleted:
        raise NotFoundError("Roadmap not found")
    return roadmap


def get_roadmap_module(roadmap, module_id):
    for module in roadmap.modules:
        if module.id == module_id:
            return module
    raise NotFoundError("Module not found")


def _summary(roadmap, weekly_hours, created):
    phases = {m.phase for m in roadmap.modules}
    return {
        "roadmap_id": roadmap.id,
        "total_hours": roadmap.total_estimated_hours,
        "projected_completion": projected_completion(
            roadmap.total_estimated_hours, weekly_hours
        ).isoformat(),
        "module_count": len(roadmap.modules),
        "phase_count": len(phases),
        "created": created,
    }


# ═══════════════════════════════════════════════════════════════
# Time
# ═══════════════════════════════════════════════════════════════

_DONE_STATUSES = ("completed", "skipped")


def _status_for(module, user_id):
    progress = module.progress_for(user_id)
    return progress.status if progress else "not_started"


def calculate_hours(modules):
    """Rounded hours for ``modules`` with the configured practice and buffer ratios."""
    result = calculate_roadmap_time(
        modules,
        practice_ratio=current_app.config["ROADMAP_PRACTICE_RATIO"],
        buffer_ratio=current_app.config["ROADMAP_BUFFER_RATIO"],
    )
    return result.rounded_total_hours


def recalculate_roadmap_time(roadmap, commit=True):
    """Recompute and store ``total_estimated_hours``. Returns the rounded hours."""
    roadmap.total_estimated_hours = calculate_hours(roadmap.modules)
    if commit:
        db.session.commit()

    logger.info(
        "Roadmap time recalculated: %dh",
        roadmap.total_estimated_hours,
        extra={"roadmap_id": roadmap.id, "user_id": roadmap.user_id},
    )
    return roadmap.total_estimated_hours


def recompute_completed_hours(roadmap, user_id=None):
    """Hours of completed, non-skipped modules, in the same units as the total."""
    user_id = roadmap.user_id if user_id is None else user_id
    roadmap.completed_hours = calculate_hours([
        m for m in roadmap.modules
        if not m.is_skipped and _status_for(m, user_id) == "completed"
    ])
    return roadmap.completed_hours


def remaining_hours(roadmap, user_id):
    """Hours still ahead: modules neither skipped nor finished."""
    return calculate_hours([
        m for m in roadmap.modules
        if not m.is_skipped and _status_for(m, user_id) not in _DONE_STATUSES
    ])


def unlock_next_module(roadmap, module):
    """Unlock the module after ``module``. Returns the ids that were unlocked."""
    for candidate in roadmap.modules:
        if candidate.sequence_order > module.sequence_order:
            if candidate.is_locked:
                candidate.is_locked = False
                return [candidate.id]
            return []
    return []


def update_module_skip_status(roadmap, module_id, is_skipped):
    """Toggle a module's skip flag and recalculate the roadmap hours.

    Skipping moves the learner past the module, so the next one unlocks.
    """
    module = get_roadmap_module(roadmap, module_id)
    unlocked = []
    if is_skipped and not module.is_skipped:
        unlocked = unlock_next_module(roadmap, module)
    module.is_skipped = is_skipped
    total = recalculate_roadmap_time(roadmap, commit=False)
    recompute_completed_hours(roadmap)
    db.session.commit()

    logger.info(
        "Module %s", "skipped" if is_skipped else "unskipped",
        extra={"roadmap_id": roadmap.id, "module_id": module.id},
    )
    return {
        "module": module.to_dict(),
        "total_estimated_hours": total,
        "unlocked_modules": unlocked,
    }



# ═══════════════════════════════════════════════════════════════
# Generation
# ═══════════════════════════════════════════════════════════════

def generate_roadmap(user_id, title=None, description=None):
    """Create the user's roadmap from onboarding answers (idempotent).

    Returns ``{roadmap_id, total_hours, projected_completion, module_count,
    phase_count, created}``.
    """
    started = time.perf_counter()

    existing = get_active_roadmap(user_id)
    if existing is not None:
        logger.info("Roadmap already exists, returning existing",
                    extra={"user_id": user_id, "roadmap_id": existing.id})
        return _summary(existing, weekly_hours_for(user_id), created=False)

    state = OnboardingState.query.filter_by(user_id=user_id).first()
    if state is None or not state.is_complete:
        raise BadRequestError("Onboarding must be completed before generating roadmap")

    config = current_app.config
    if state.is_skipped:
        target_role = config["DEFAULT_TARGET_ROLE"]
        source_role = None
        weekly_hours = state.weekly_hours or config["DEFAULT_WEEKLY_HOURS"]
        existing_skills = []
    else:
        if not state.target_role or not state.weekly_hours:
            raise BadRequestError("Target role and weekly hours are required for roadmap generation")
        target_role = state.target_role
        source_role = state.current_role
        weekly_hours = state.weekly_hours
        existing_skills = None

    # 1. Gap analysis
    gap = analyze_gap(user_id, target_role, existing_skills=existing_skills)
    if not gap.ordered_skills:
        logger.warning("No missing skills found; creating an empty roadmap",
                       extra={"user_id": user_id})

    # 2. Sequencing over edges inside the gap
    skill_ids = [s.id for s in gap.ordered_skills]
    dependencies = []
    if skill_ids:
        dependencies = SkillDependency.query.filter(
            SkillDependency.skill_id.in_(skill_ids),
            SkillDependency.depends_on_id.in_(skill_ids),
        ).all()
    sequencing = sequence_skills(gap.ordered_skills, dependencies)
    if sequencing.has_circular_dependency:
        logger.warning("Circular dependency during sequencing, proceeding: %s",
                       " -> ".join(sequencing.circular_dependency_path),
                       extra={"user_id": user_id})

    # 3. Roadmap and modules
    roadmap = Roadmap(
        user_id=user_id,
        title=title or roadmap_title(source_role, target_role),
        description=description,
        source_role=source_role or "beginner",
        target_role=target_role,
        total_estimated_hours=0,
        completed_hours=0,
        is_active=True,
    )
    db.session.add(roadmap)
    for position, item in enumerate(sequencing.sequenced_skills, start=1):
        roadmap.modules.append(RoadmapModule(
            skill=item.skill,
            skill_id=item.id,
            phase=item.phase,
            sequence_order=position,
            is_locked=position > 1,
            is_skipped=False,
        ))
    db.session.flush()

    # 4. Hours
    total = recalculate_roadmap_time(roadmap, commit=False)
    if not description:
        roadmap.description = roadmap_description(target_role, total)
    db.session.commit()

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Roadmap generated: %d modules, %dh",
        len(roadmap.modules), total,
        extra={"user_id": user_id, "roadmap_id": roadmap.id,
               "duration_ms": round(duration_ms, 1)},
    )
    if duration_ms > SLOW_GENERATION_MS:
        logger.warning("Roadmap generation exceeded %dms (%.0fms)", SLOW_GENERATION_MS, duration_ms)

    return _summary(roadmap, weekly_hours, created=True)


# ═══════════════════════════════════════════════════════════════
# Deletion
# ═══════════════════════════════════════════════════════════════

def delete_roadmap(roadmap):
    """Soft delete: the roadmap stops being active and drops out of queries."""
    roadmap.is_active = False
    roadmap.soft_delete()
    db.session.commit()
    logger.info("Roadmap deleted", extra={"roadmap_id": roadmap.id, "user_id": roadmap.user_id})
