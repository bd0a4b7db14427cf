"""
Onboarding wizard service.

Steps:
    1. current_role
    2. target_role
    3. weekly_hours (1-40)
    4. existing_skills (skill slugs)

Saving step n moves ``current_step`` forward to n + 1 (capped at the last
step) and never backwards; ``goto_step`` is the only way back.
"""

import logging
from datetime import datetime, timezone

from learnpath.core.constants import ONBOARDING_TOTAL_STEPS
from learnpath.core.exceptions import BadRequestError
from learnpath.models import db
from learnpath.models.onboarding import OnboardingState
from learnpath.models.skill import Skill
from learnpath.schemas import ONBOARDING_STEP_SCHEMAS
from learnpath.services.gap_analysis import analyze_gap
from learnpath.services.roadmap_service import delete_roadmap, generate_roadmap, get_active_roadmap

logger = logging.getLogger(__name__)


def _check_step(step):
    if step not in ONBOARDING_STEP_SCHEMAS:
        raise BadRequestError("Invalid step number")


def get_state(user_id):
    return OnboardingState.query.filter_by(user_id=user_id).first()


def get_or_create_state(user_id):
    state = get_state(user_id)
    if state is None:
        state = OnboardingState(user_id=user_id, current_step=1, existing_skills=[])
        db.session.add(state)
        db.session.commit()
        logger.info("Created onboarding state", extra={"user_id": user_id})
    return state


def save_step(user_id, step, payload):
    """Validate ``payload`` for ``step`` and store it. Returns the state."""
    _check_step(step)
    schema, attr = ONBOARDING_STEP_SCHEMAS[step]
    data = schema.model_validate(payload)
    value = getattr(data, attr)

    if attr == "existing_skills":
        value = list(dict.fromkeys(value))
        known = {s.slug for s in Skill.query.filter(Skill.slug.in_(value)).all()} if value else set()
        unknown = [slug for slug in value if slug not in known]
        if unknown:
            raise BadRequestError(f"Unknown skills: {', '.join(unknown)}")

    state = get_or_create_state(user_id)
    setattr(state, attr, value)
    state.current_step = max(state.current_step, min(step + 1, ONBOARDING_TOTAL_STEPS))
    db.session.commit()

    logger.info("Saved onboarding step %d", step, extra={"user_id": user_id})
    return state


def goto_step(user_id, step):
    _check_step(step)
    state = get_or_create_state(user_id)
    state.current_step = step
    db.session.commit()
    return state


def skip(user_id):
    """Mark onboarding done via the generic path."""
    state = get_or_create_state(user_id)
    state.is_skipped = True
    state.is_complete = True
    state.completed_at = datetime.now(timezone.utc)
    db.session.commit()

    logger.info("User skipped onboarding", extra={"user_id": user_id})
    return state


def restart(user_id):
    """Back to step 1 with answers kept for editing."""
    state = get_or_create_state(user_id)
    state.current_step = 1
    state.is_complete = False
    state.is_skipped = False
    state.completed_at = None
    db.session.commit()

    logger.info("User restarted onboarding", extra={"user_id": user_id})
    return state


def _answers_changed(roadmap, state):
    """True when ``roadmap`` no longer matches the wizard answers."""
    if roadmap.target_role != state.target_role or roadmap.source_role != state.current_role:
        return True
    needed = {skill.id for skill in analyze_gap(state.user_id, state.target_role).ordered_skills}
    return needed != {module.skill_id for module in roadmap.modules}


def complete(user_id):
    """Finish the wizard and generate the roadmap. Returns (state, generation summary).

    An active roadmap built from different answers is replaced; completing
    again with the same answers returns it unchanged.
    """
    state = get_state(user_id)
    if state is None:
        raise BadRequestError("Onboarding not started")
    if not state.current_role or not state.target_role or not state.weekly_hours:
        raise BadRequestError("Please complete all onboarding steps before finishing")

    state.is_complete = True
    state.is_skipped = False
    state.completed_at = datetime.now(timezone.utc)
    db.session.commit()

    logger.info(
        "User completed onboarding: %s -> %s (%dh/week)",
        state.current_role, state.target_role, state.weekly_hours,
        extra={"user_id": user_id},
    )

    active = get_active_roadmap(user_id)
    if active is not None and _answers_changed(active, state):
        logger.info("Onboarding answers changed, replacing roadmap",
                    extra={"user_id": user_id, "roadmap_id": active.id})
        delete_roadmap(active)
    return state, generate_roadmap(user_id)
