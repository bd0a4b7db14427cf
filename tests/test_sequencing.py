"""
Unit tests for learnpath.services.sequencing.

Pure functions over plain objects; no database.
"""

from types import SimpleNamespace

from learnpath.services.sequencing import (
    build_dependency_graph,
    calculate_priority_score,
    detect_circular_dependency,
    group_into_phases,
    sequence_skills,
    topological_sort_with_priority,
)


def _skill(id, name, phase="foundation", hours=5, order=0, optional=False):
    return SimpleNamespace(id=id, name=name, slug=name.lower(), phase=phase,
                           estimated_hours=hours, sequence_order=order, is_optional=optional)


def _dep(skill_id, depends_on_id):
    return SimpleNamespace(skill_id=skill_id, depends_on_id=depends_on_id)


def _names(sequenced):
    return [s.name for s in sequenced]


class TestGraph:
    def test_edges_outside_the_set_are_dropped(self):
        skills = [_skill(1, "A"), _skill(2, "B")]
        graph = build_dependency_graph(skills, [_dep(2, 1), _dep(3, 1)])
        assert graph == {1: set(), 2: {1}}

    def test_dag_has_no_cycle(self):
        assert detect_circular_dependency({1: set(), 2: {1}, 3: {1, 2}}) is None

    def test_cycle_path_starts_and_ends_on_same_node(self):
        cycle = detect_circular_dependency({1: {3}, 2: {1}, 3: {2}})
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {1, 2, 3}

    def test_self_loop(self):
        assert detect_circular_dependency({1: {1}}) == [1, 1]


class TestPriority:
    def test_earlier_catalogue_order_scores_higher(self):
        assert calculate_priority_score(_skill(1, "A", order=1)) > \
            calculate_priority_score(_skill(2, "B", order=2))

    def test_optional_penalty(self):
        base = calculate_priority_score(_skill(1, "A", order=1))
        assert calculate_priority_score(_skill(1, "A", order=1, optional=True)) == base - 100

    def test_earlier_phase_scores_higher(self):
        foundation = calculate_priority_score(_skill(1, "A", phase="foundation", order=5))
        advanced = calculate_priority_score(_skill(2, "B", phase="advanced", order=5))
        assert foundation - advanced == 20


class TestTopologicalSort:
    def test_prerequisites_first(self):
        skills = [_skill(1, "Deploy", order=1), _skill(2, "Basics", order=2)]
        result = topological_sort_with_priority(skills, {1: {2}, 2: set()})
        assert _names(result) == ["Basics", "Deploy"]
        assert [s.sequence_order for s in result] == [1, 2]

    def test_ready_ties_break_on_priority(self):
        skills = [_skill(1, "Late", order=9), _skill(2, "Early", order=1)]
        result = topological_sort_with_priority(skills, {1: set(), 2: set()})
        assert _names(result) == ["Early", "Late"]

    def test_cycle_members_are_left_out(self):
        skills = [_skill(1, "A"), _skill(2, "B"), _skill(3, "C")]
        result = topological_sort_with_priority(skills, {1: {2}, 2: {1}, 3: set()})
        assert _names(result) == ["C"]


class TestGrouping:
    def test_groups_follow_phase_order_and_skip_empty(self):
        sequenced = topological_sort_with_priority(
            [_skill(1, "Adv", phase="advanced", hours=3),
             _skill(2, "Found", phase="foundation", hours=4),
             _skill(3, "Found2", phase="foundation", hours=1)],
            {1: set(), 2: set(), 3: set()},
        )
        groups = group_into_phases(sequenced)
        assert [g.phase for g in groups] == ["foundation", "advanced"]
        assert groups[0].total_hours == 5
        assert groups[0].sequence_start == 1
        assert groups[1].sequence_start == 3


class TestSequenceSkills:
    def test_empty_input(self):
        result = sequence_skills([], [])
        assert result.sequenced_skills == []
        assert result.has_circular_dependency is False

    def test_full_pipeline(self):
        skills = [
            _skill(1, "Python", order=1),
            _skill(2, "Math", order=2),
            _skill(3, "Algorithms", phase="intermediate", order=3),
        ]
        result = sequence_skills(skills, [_dep(3, 1), _dep(3, 2)])
        assert _names(result.sequenced_skills) == ["Python", "Math", "Algorithms"]
        assert [g.phase for g in result.phase_groups] == ["foundation", "intermediate"]
        assert result.circular_dependency_path is None

    def test_cycle_is_reported_and_broken(self):
        skills = [_skill(1, "A", order=1), _skill(2, "B", order=2), _skill(3, "C", order=3)]
        result = sequence_skills(skills, [_dep(1, 2), _dep(2, 1), _dep(3, 1)])
        assert result.has_circular_dependency is True
        assert result.circular_dependency_path == ["A", "B", "A"]
        assert _names(result.sequenced_skills) == ["A", "B", "C"]

    def test_to_dict_shape(self):
        data = sequence_skills([_skill(1, "A")], []).to_dict()
        assert data["sequenced_skills"][0]["slug"] == "a"
        assert data["phase_groups"][0]["phase"] == "foundation"
        assert data["has_circular_dependency"] is False
