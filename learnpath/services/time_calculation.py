"""
Time calculation for roadmaps.

    resource time = sum(resource.duration_minutes) / 60, when positive,
                    else skill.estimated_hours
    practice time = resource time * practice ratio        (default 0.5)
    module time   = resource time + practice time
    buffer        = sum(non-skipped module time) * buffer ratio (default 0.1)
    total         = module total + buffer, rounded half-up to the hour
"""

import logging
import math
from dataclasses import asdict, dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_PRACTICE_RATIO = 0.5
DEFAULT_BUFFER_RATIO = 0.1


@dataclass
class ModuleTime:
    module_id: int | None
    skill_id: int
    resource_time_hours: float
    practice_time_hours: float
    module_time_hours: float
    is_skipped: bool


@dataclass
class TimeCalculationResult:
    total_resource_time_hours: float = 0
    total_practice_time_hours: float = 0
    total_module_time_hours: float = 0
    buffer_hours: float = 0
    total_estimated_hours: float = 0
    rounded_total_hours: int = 0
    module_breakdown: list = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


def round_half_up(value):
    return int(math.floor(value + 0.5))


def calculate_resource_time(skill, resources=None):
    """Hours of material for ``skill``; curated estimate when durations are unknown."""
    if resources:
        total_minutes = sum(r.duration_minutes or 0 for r in resources)
        if total_minutes > 0:
            return total_minutes / 60
    return skill.estimated_hours or 0


def calculate_module_time(skill, resources=None, practice_ratio=DEFAULT_PRACTICE_RATIO):
    resource_hours = calculate_resource_time(skill, resources)
    practice_hours = resource_hours * practice_ratio
    return {
        "resource_time_hours": resource_hours,
        "practice_time_hours": practice_hours,
        "total_time_hours": resource_hours + practice_hours,
    }


def calculate_roadmap_time(modules, practice_ratio=DEFAULT_PRACTICE_RATIO,
                           buffer_ratio=DEFAULT_BUFFER_RATIO):
    """Total learning time for ``modules`` (RoadmapModule-like objects).

    Each module needs ``skill``, ``skill_id`` and ``is_skipped``; ``id`` is
    optional. Skipped modules appear in the breakdown but not in the totals.
    """
    result = TimeCalculationResult()

    for module in modules:
        skill = module.skill
        resources = getattr(skill, "resources", None)
        times = calculate_module_time(skill, resources, practice_ratio)

        result.module_breakdown.append(ModuleTime(
            module_id=getattr(module, "id", None),
            skill_id=module.skill_id,
            resource_time_hours=times["resource_time_hours"],
            practice_time_hours=times["practice_time_hours"],
            module_time_hours=times["total_time_hours"],
            is_skipped=bool(module.is_skipped),
        ))

        if not module.is_skipped:
            result.total_resource_time_hours += times["resource_time_hours"]
            result.total_practice_time_hours += times["practice_time_hours"]
            result.total_module_time_hours += times["total_time_hours"]

    result.buffer_hours = result.total_module_time_hours * buffer_ratio
    result.total_estimated_hours = result.total_module_time_hours + result.buffer_hours
    result.rounded_total_hours = round_half_up(result.total_estimated_hours)

    logger.debug(
        "Roadmap time: %d modules (%d skipped) → %dh",
        len(result.module_breakdown),
        sum(1 for m in result.module_breakdown if m.is_skipped),
        result.rounded_total_hours,
    )
    return result
