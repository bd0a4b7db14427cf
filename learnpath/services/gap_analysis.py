"""
Gap analysis: which skills a learner still needs for a target role.

Required skills are every non-optional skill in the catalogue, in catalogue
order; a role-to-skill mapping table does not exist yet, so ``target_role``
is only carried through to logs.

A required skill counts as satisfied when the learner has it, or has any
skill that (transitively) depends on it: knowing C where A → B → C implies
A and B.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field

from learnpath.models.onboarding import OnboardingState
from learnpath.models.skill import Skill, SkillDependency

logger = logging.getLogger(__name__)

SLOW_ANALYSIS_MS = 500


@dataclass
class GapAnalysisResult:
    missing_skills: list = field(default_factory=list)
    ordered_skills: list = field(default_factory=list)
    total_hours: float = 0

    def to_dict(self):
        return {
            "missing_skills": [s.to_dict() for s in self.missing_skills],
            "ordered_skills": [s.to_dict() for s in self.ordered_skills],
            "total_hours": self.total_hours,
        }


def build_prerequisite_map(dependencies):
    """Map skill id → set of direct prerequisite ids (whole catalogue)."""
    prereqs = {}
    for dep in dependencies:
        prereqs.setdefault(dep.skill_id, set()).add(dep.depends_on_id)
    return prereqs


def get_all_prerequisites(skill_id, prereq_map):
    """Every skill that must be learned before ``skill_id`` (DFS)."""
    found = set()
    stack = list(prereq_map.get(skill_id, ()))
    while stack:
        current = stack.pop()
        if current in found or current == skill_id:
            continue
        found.add(current)
        stack.extend(prereq_map.get(current, ()))
    return found


def is_skill_satisfied(skill_id, user_skill_ids, prereq_map):
    if skill_id in user_skill_ids:
        return True
    return any(
        skill_id in get_all_prerequisites(owned, prereq_map) for owned in user_skill_ids
    )


def topological_sort(skills, prereq_map):
    """Kahn's algorithm over ``skills``; prerequisites outside the list are ignored.

    On a cycle the unsorted skills are appended in input order.
    """
    by_id = {skill.id: skill for skill in skills}
    in_degree = {
        skill.id: sum(1 for p in prereq_map.get(skill.id, ()) if p in by_id) for skill in skills
    }
    queue = deque(skill.id for skill in skills if in_degree[skill.id] == 0)

    result = []
    while queue:
        skill_id = queue.popleft()
        result.append(by_id[skill_id])
        for other in skills:
            if skill_id in prereq_map.get(other.id, ()):
                in_degree[other.id] -= 1
                if in_degree[other.id] == 0:
                    queue.append(other.id)

    if len(result) != len(skills):
        logger.warning(
            "Topological sort incomplete (%d of %d): possible cycle in dependency graph",
            len(result), len(skills),
        )
        placed = {skill.id for skill in result}
        result.extend(skill for skill in skills if skill.id not in placed)
    return result


def find_missing_skills(required_skills, user_skill_ids, dependencies):
    """Pure core of the analysis; returns a GapAnalysisResult."""
    prereq_map = build_prerequisite_map(dependencies)
    missing = [
        skill for skill in required_skills
        if not is_skill_satisfied(skill.id, user_skill_ids, prereq_map)
    ]
    ordered = topological_sort(missing, prereq_map)
    return GapAnalysisResult(
        missing_skills=missing,
        ordered_skills=ordered,
        total_hours=sum(skill.estimated_hours for skill in ordered),
    )


def get_required_skills_for_role(target_role):
    skills = (
        Skill.query.filter_by(is_optional=False)
        .order_by(Skill.sequence_order, Skill.id)
        .all()
    )
    logger.debug("Loaded %d required skills for role %r", len(skills), target_role)
    return skills


def analyze_gap(user_id, target_role, existing_skills=None):
    """Gap analysis for ``user_id``.

    ``existing_skills`` (slugs) overrides the onboarding answers; the
    skipped-onboarding path passes an empty list.
    """
    started = time.perf_counter()

    required = get_required_skills_for_role(target_role)
    if not required:
        logger.warning("No required skills found for target role %r", target_role)
        return GapAnalysisResult()

    if existing_skills is None:
        state = OnboardingState.query.filter_by(user_id=user_id).first()
        existing_skills = list(state.existing_skills or []) if state else []

    user_skill_ids = set()
    if existing_skills:
        user_skill_ids = {
            skill.id for skill in Skill.query.filter(Skill.slug.in_(existing_skills)).all()
        }

    result = find_missing_skills(required, user_skill_ids, SkillDependency.query.all())

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Gap analysis completed: %d missing skills, %.1fh",
        len(result.missing_skills), result.total_hours,
        extra={"user_id": user_id, "skill_count": len(result.missing_skills),
               "duration_ms": round(duration_ms, 1)},
    )
    if duration_ms > SLOW_ANALYSIS_MS:
        logger.warning("Gap analysis exceeded %dms (%.0fms)", SLOW_ANALYSIS_MS, duration_ms)

    return result
