"""
Tests for learnpath.services.gap_analysis.

The pure helpers run on plain objects; analyze_gap runs against the
seeded catalogue.
"""

from types import SimpleNamespace

from learnpath.services.gap_analysis import (
    analyze_gap,
    build_prerequisite_map,
    find_missing_skills,
    get_all_prerequisites,
    is_skill_satisfied,
    topological_sort,
)


def _skill(id, name, hours=1):
    return SimpleNamespace(id=id, name=name, estimated_hours=hours)


def _dep(skill_id, depends_on_id):
    return SimpleNamespace(skill_id=skill_id, depends_on_id=depends_on_id)


# A(1) → B(2) → C(3): C requires B requires A
CHAIN = [_dep(2, 1), _dep(3, 2)]


class TestPrerequisites:
    def test_transitive_prerequisites(self):
        prereq_map = build_prerequisite_map(CHAIN)
        assert get_all_prerequisites(3, prereq_map) == {1, 2}
        assert get_all_prerequisites(1, prereq_map) == set()

    def test_cycle_terminates(self):
        prereq_map = build_prerequisite_map([_dep(1, 2), _dep(2, 1)])
        assert get_all_prerequisites(1, prereq_map) == {2}

    def test_owning_a_later_skill_satisfies_earlier_ones(self):
        prereq_map = build_prerequisite_map(CHAIN)
        assert is_skill_satisfied(1, {3}, prereq_map)
        assert is_skill_satisfied(2, {3}, prereq_map)
        assert not is_skill_satisfied(3, {2}, prereq_map)


class TestTopologicalSort:
    def test_orders_by_prerequisite(self):
        skills = [_skill(3, "C"), _skill(1, "A"), _skill(2, "B")]
        ordered = topological_sort(skills, build_prerequisite_map(CHAIN))
        assert [s.name for s in ordered] == ["A", "B", "C"]

    def test_cycle_members_appended_in_input_order(self):
        skills = [_skill(1, "X"), _skill(2, "Y"), _skill(3, "Z")]
        prereq_map = build_prerequisite_map([_dep(1, 2), _dep(2, 1)])
        ordered = topological_sort(skills, prereq_map)
        assert [s.name for s in ordered] == ["Z", "X", "Y"]


class TestFindMissingSkills:
    def test_nothing_owned(self):
        skills = [_skill(1, "A", 2), _skill(2, "B", 3), _skill(3, "C", 4)]
        result = find_missing_skills(skills, set(), CHAIN)
        assert [s.name for s in result.ordered_skills] == ["A", "B", "C"]
        assert result.total_hours == 9

    def test_owned_top_skill_covers_chain(self):
        skills = [_skill(1, "A"), _skill(2, "B"), _skill(3, "C")]
        result = find_missing_skills(skills, {3}, CHAIN)
        assert result.missing_skills == []
        assert result.total_hours == 0


class TestAnalyzeGap:
    def test_empty_catalogue(self, trial_user):
        result = analyze_gap(trial_user.id, "ML Engineer")
        assert result.missing_skills == []

    def test_no_existing_skills(self, trial_user, skills):
        result = analyze_gap(trial_user.id, "ML Engineer", existing_skills=[])
        assert [s.slug for s in result.ordered_skills] == [
            "python-ml",
            "math-foundations",
            "data-preprocessing",
            "ml-algorithms",
            "deep-learning-fundamentals",
            "model-deployment",
        ]
        assert result.total_hours == 71

    def test_existing_skill_implies_prerequisites(self, trial_user, skills):
        result = analyze_gap(trial_user.id, "ML Engineer", existing_skills=["ml-algorithms"])
        assert [s.slug for s in result.ordered_skills] == [
            "deep-learning-fundamentals",
            "model-deployment",
        ]

    def test_reads_onboarding_answers(self, client, trial_user, auth_headers, skills):
        headers = auth_headers(trial_user)
        client.patch("/api/v1/onboarding/step/4",
                     json={"existing_skills": ["deep-learning-fundamentals"]}, headers=headers)
        result = analyze_gap(trial_user.id, "ML Engineer")
        assert [s.slug for s in result.ordered_skills] == ["model-deployment"]

    def test_endpoint(self, client, trial_user, auth_headers, skills):
        res = client.get("/api/v1/roadmap/gap-analysis?target_role=ML%20Engineer",
                         headers=auth_headers(trial_user))
        assert res.status_code == 200
        data = res.get_json()["data"]
        assert len(data["ordered_skills"]) == 6
        assert data["total_hours"] == 71

    def test_endpoint_requires_target_role(self, client, trial_user, auth_headers):
        res = client.get("/api/v1/roadmap/gap-analysis", headers=auth_headers(trial_user))
        assert res.status_code == 400
