"""
Progress tracking on roadmap modules.

Status stamps:
    started_at: first move into in_progress or completed
    completed_at: set on completed, cleared when leaving completed

Completing or skipping a module unlocks the next module in sequence.
Roadmap ``completed_hours`` uses the same time formula as the roadmap total.
A locked module accepts nothing but a skip.
"""

import logging
from datetime import datetime, timezone

from learnpath.core.exceptions import ConflictError, NotFoundError
from learnpath.middleware.auth import check_phase_access
from learnpath.models import db
from learnpath.models.roadmap import Progress, Roadmap, RoadmapModule
from learnpath.services.roadmap_service import (
    get_active_roadmap,
    get_owned_roadmap,
    get_roadmap_module,
    recompute_completed_hours,
    unlock_next_module,
)
from learnpath.services.time_calculation import round_half_up

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = ("in_progress", "completed")
_DONE_STATUSES = ("completed", "skipped")


def _get_or_create_progress(user_id, module):
    progress = module.progress_for(user_id)
    if progress is None:
        progress = Progress(
            user_id=user_id,
            roadmap_module_id=module.id,
            status="not_started",
            time_spent_minutes=0,
        )
        module.progress_entries.append(progress)
    return progress


def _apply_status(progress, status, now):
    if status in _ACTIVE_STATUSES and progress.started_at is None:
        progress.started_at = now
    if status == "completed":
        if progress.status != "completed" or progress.completed_at is None:
            progress.completed_at = now
    else:
        progress.completed_at = None
    progress.status = status


def update_module_progress(user, roadmap_id, module_id, changes):
    """Apply ``changes`` (UpdateProgressSchema) to the caller's progress on a module.

    Returns ``{"progress": ..., "unlocked_modules": [...]}``.
    """
    roadmap = get_owned_roadmap(user.id, roadmap_id)
    module = get_roadmap_module(roadmap, module_id)
    check_phase_access(user, module.phase)

    if module.is_locked and changes.status != "skipped":
        raise ConflictError("Module is locked")

    now = datetime.now(timezone.utc)
    progress = _get_or_create_progress(user.id, module)
    previous = progress.status
    unlocked = []

    if changes.status is not None:
        _apply_status(progress, changes.status, now)
        if changes.status in _DONE_STATUSES and previous not in _DONE_STATUSES:
            unlocked = unlock_next_module(roadmap, module)
    if changes.time_spent_minutes is not None:
        progress.time_spent_minutes = changes.time_spent_minutes
    if changes.notes is not None:
        progress.notes = changes.notes

    recompute_completed_hours(roadmap, user.id)
    db.session.commit()

    logger.info(
        "Module progress %s -> %s", previous, progress.status,
        extra={"user_id": user.id, "roadmap_id": roadmap.id, "module_id": module.id},
    )
    return {"progress": progress.to_dict(), "unlocked_modules": unlocked}


def log_time(user, module_id, minutes, notes=None):
    """Add study minutes to a module of the caller's active roadmap."""
    module = (
        RoadmapModule.query.join(Roadmap)
        .filter(
            RoadmapModule.id == module_id,
            Roadmap.user_id == user.id,
            Roadmap.is_active.is_(True),
            Roadmap.deleted_at.is_(None),
        )
        .first()
    )
    if module is None:
        raise NotFoundError("Module not found")
    check_phase_access(user, module.phase)
    if module.is_locked:
        raise ConflictError("Module is locked")

    progress = _get_or_create_progress(user.id, module)
    progress.time_spent_minutes = (progress.time_spent_minutes or 0) + minutes
    if progress.status == "not_started":
        _apply_status(progress, "in_progress", datetime.now(timezone.utc))
    if notes:
        progress.notes = notes
    db.session.commit()

    logger.info("Logged %d minutes", minutes, extra={"user_id": user.id, "module_id": module.id})
    return progress


def progress_summary(user_id):
    roadmap = get_active_roadmap(user_id)
    if roadmap is None:
        raise NotFoundError("No active roadmap found")

    statuses = []
    for module in roadmap.modules:
        progress = module.progress_for(user_id)
        statuses.append((module, progress.status if progress else "not_started"))

    total = len(statuses)
    completed = sum(1 for _, s in statuses if s == "completed")
    current_phase = None
    for module, status in statuses:
        if status not in _DONE_STATUSES and not module.is_skipped:
            current_phase = module.phase
            break
    else:
        if statuses:
            current_phase = statuses[-1][0].phase

    return {
        "roadmap_id": roadmap.id,
        "total_modules": total,
        "completed_modules": completed,
        "in_progress_modules": sum(1 for _, s in statuses if s == "in_progress"),
        "total_hours": roadmap.total_estimated_hours,
        "completed_hours": roadmap.completed_hours,
        "current_phase": current_phase,
        "percent_complete": round_half_up(completed / total * 100) if total else 0,
    }
