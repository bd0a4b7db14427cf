"""
Skill sequencing: orders skills so prerequisites come first.

Skills are any objects exposing ``id``, ``name``, ``phase``,
``estimated_hours``, ``is_optional`` and ``sequence_order`` (Skill model
instances in production, plain objects in unit tests). Dependencies expose
``skill_id`` and ``depends_on_id``.

Pipeline:
    build_dependency_graph → detect_circular_dependency
        → topological_sort_with_priority → group_into_phases
"""

import heapq
import logging
import time
from dataclasses import dataclass, field

from learnpath.core.constants import PHASE_ORDER, phase_index

logger = logging.getLogger(__name__)


@dataclass
class SequencedSkill:
    """A skill with the position assigned by sequencing."""

    skill: object
    sequence_order: int

    @property
    def id(self):
        return self.skill.id

    @property
    def name(self):
        return self.skill.name

    @property
    def phase(self):
        return self.skill.phase

    @property
    def estimated_hours(self):
        return self.skill.estimated_hours

    def to_dict(self):
        return {
            "id": self.skill.id,
            "name": self.skill.name,
            "slug": getattr(self.skill, "slug", None),
            "phase": self.skill.phase,
            "estimated_hours": self.skill.estimated_hours,
            "is_optional": self.skill.is_optional,
            "sequence_order": self.sequence_order,
        }


@dataclass
class PhaseGroup:
    phase: str
    skills: list = field(default_factory=list)
    total_hours: float = 0
    sequence_start: int = 1

    def to_dict(self):
        return {
            "phase": self.phase,
            "skills": [s.to_dict() for s in self.skills],
            "total_hours": self.total_hours,
            "sequence_start": self.sequence_start,
        }


@dataclass
class SequencingResult:
    sequenced_skills: list = field(default_factory=list)
    phase_groups: list = field(default_factory=list)
    has_circular_dependency: bool = False
    circular_dependency_path: list | None = None

    def to_dict(self):
        return {
            "sequenced_skills": [s.to_dict() for s in self.sequenced_skills],
            "phase_groups": [g.to_dict() for g in self.phase_groups],
            "has_circular_dependency": self.has_circular_dependency,
            "circular_dependency_path": self.circular_dependency_path,
        }


# ═══════════════════════════════════════════════════════════════
# Graph helpers
# ═══════════════════════════════════════════════════════════════

def build_dependency_graph(skills, dependencies):
    """Map skill id → set of prerequisite ids, for skills in ``skills`` only."""
    graph = {skill.id: set() for skill in skills}
    for dep in dependencies:
        if dep.skill_id in graph:
            graph[dep.skill_id].add(dep.depends_on_id)
    return graph


def detect_circular_dependency(graph):
    """Return a cycle as ``[a, ..., a]`` (skill ids), or None for a DAG."""
    visited = set()
    on_stack = set()
    path = []

    def dfs(node):
        if node in on_stack:
            start = path.index(node)
            return path[start:] + [node]
        if node in visited:
            return None

        visited.add(node)
        on_stack.add(node)
        path.append(node)
        for prereq in sorted(graph.get(node, ())):
            cycle = dfs(prereq)
            if cycle:
                return cycle
        on_stack.discard(node)
        path.pop()
        return None

    for node in graph:
        if node not in visited:
            cycle = dfs(node)
            if cycle:
                return cycle
    return None


def calculate_priority_score(skill):
    """Higher scores are scheduled first among skills that are ready."""
    score = 1000 - (skill.sequence_order or 0)
    if skill.is_optional:
        score -= 100
    score += (len(PHASE_ORDER) - phase_index(skill.phase)) * 10
    return score


def topological_sort_with_priority(skills, graph):
    """Kahn's algorithm; ties between ready skills go to the highest priority.

    Skills caught in a cycle never become ready and are left out.
    """
    by_id = {skill.id: skill for skill in skills}
    in_degree = {
        skill.id: sum(1 for p in graph.get(skill.id, ()) if p in by_id) for skill in skills
    }

    ready = []
    counter = 0
    for skill in skills:
        if in_degree[skill.id] == 0:
            heapq.heappush(ready, (-calculate_priority_score(skill), counter, skill.id))
            counter += 1

    result = []
    while ready:
        _, _, skill_id = heapq.heappop(ready)
        result.append(SequencedSkill(skill=by_id[skill_id], sequence_order=len(result) + 1))

        for other_id, prereqs in graph.items():
            if skill_id in prereqs and other_id in by_id:
                in_degree[other_id] -= 1
                if in_degree[other_id] == 0:
                    other = by_id[other_id]
                    heapq.heappush(ready, (-calculate_priority_score(other), counter, other_id))
                    counter += 1

    if len(result) != len(skills):
        logger.warning(
            "Topological sort incomplete (%d of %d): possible cycle in dependency graph",
            len(result), len(skills),
        )
    return result


def group_into_phases(sequenced):
    """Bucket sequenced skills by phase, in PHASE_ORDER, skipping empty phases."""
    buckets = {}
    for item in sequenced:
        buckets.setdefault(item.phase, []).append(item)

    groups = []
    sequence_start = 1
    for phase in PHASE_ORDER:
        members = sorted(buckets.get(phase, []), key=lambda s: s.sequence_order)
        if not members:
            continue
        groups.append(PhaseGroup(
            phase=phase,
            skills=members,
            total_hours=sum(s.estimated_hours for s in members),
            sequence_start=sequence_start,
        ))
        sequence_start += len(members)
    return groups


def _log_phase_violations(groups, graph, sequenced):
    by_id = {s.id: s for s in sequenced}
    for group in groups:
        current = phase_index(group.phase)
        for item in group.skills:
            for prereq_id in graph.get(item.id, ()):
                prereq = by_id.get(prereq_id)
                if prereq is not None and phase_index(prereq.phase) > current:
                    logger.warning(
                        "Phase boundary violation: %s (%s) requires %s (%s)",
                        item.name, item.phase, prereq.name, prereq.phase,
                    )


# ═══════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════

def sequence_skills(skills, dependencies):
    """Order ``skills`` by prerequisites and group them into phases.

    A cycle does not abort sequencing: edges between the cycle's members
    are dropped and the rest is sorted normally. The cycle is reported by
    skill name in ``circular_dependency_path``.
    """
    started = time.perf_counter()
    skills = list(skills)
    dependencies = list(dependencies)
    if not skills:
        return SequencingResult()

    graph = build_dependency_graph(skills, dependencies)
    names = {skill.id: skill.name for skill in skills}

    cycle = detect_circular_dependency(graph)
    if cycle:
        cycle_names = [names.get(node, str(node)) for node in cycle]
        logger.error("Circular dependency detected in skill prerequisites: %s",
                     " -> ".join(cycle_names))
        members = set(cycle)
        kept = [
            dep for dep in dependencies
            if not (dep.skill_id in members and dep.depends_on_id in members)
        ]
        graph = build_dependency_graph(skills, kept)
        sequenced = topological_sort_with_priority(skills, graph)
        return SequencingResult(
            sequenced_skills=sequenced,
            phase_groups=group_into_phases(sequenced),
            has_circular_dependency=True,
            circular_dependency_path=cycle_names,
        )

    sequenced = topological_sort_with_priority(skills, graph)
    groups = group_into_phases(sequenced)
    _log_phase_violations(groups, graph, sequenced)

    logger.info(
        "Skill sequencing completed: %d skills in %d phases (%.0fms)",
        len(skills), len(groups), (time.perf_counter() - started) * 1000,
        extra={"skill_count": len(skills)},
    )
    return SequencingResult(sequenced_skills=sequenced, phase_groups=groups)
