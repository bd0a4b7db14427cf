"""Unit tests for learnpath.services.time_calculation."""

from types import SimpleNamespace

import pytest

from learnpath.services.time_calculation import (
    calculate_module_time,
    calculate_resource_time,
    calculate_roadmap_time,
    round_half_up,
)


def _skill(hours, durations=()):
    resources = [SimpleNamespace(duration_minutes=d) for d in durations]
    return SimpleNamespace(estimated_hours=hours, resources=resources)


def _module(id, skill, skipped=False):
    return SimpleNamespace(id=id, skill=skill, skill_id=id * 10, is_skipped=skipped)


@pytest.mark.parametrize("value, expected", [(2.5, 3), (2.49, 2), (0.5, 1), (18.975, 19), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


class TestResourceTime:
    def test_durations_win_over_estimate(self):
        skill = _skill(10, [60, 30])
        assert calculate_resource_time(skill, skill.resources) == 1.5

    def test_unknown_durations_fall_back(self):
        skill = _skill(10, [None, 0])
        assert calculate_resource_time(skill, skill.resources) == 10

    def test_no_resources(self):
        assert calculate_resource_time(_skill(4)) == 4

    def test_module_time_adds_practice(self):
        times = calculate_module_time(_skill(4), practice_ratio=0.5)
        assert times == {
            "resource_time_hours": 4,
            "practice_time_hours": 2,
            "total_time_hours": 6,
        }


class TestRoadmapTime:
    def test_skipped_modules_excluded_from_totals(self):
        modules = [
            _module(1, _skill(10, [90])),
            _module(2, _skill(10)),
            _module(3, _skill(50), skipped=True),
        ]
        result = calculate_roadmap_time(modules)
        assert result.total_module_time_hours == pytest.approx(17.25)
        assert result.buffer_hours == pytest.approx(1.725)
        assert result.rounded_total_hours == 19
        assert len(result.module_breakdown) == 3
        assert result.module_breakdown[2].is_skipped is True

    def test_custom_ratios(self):
        result = calculate_roadmap_time([_module(1, _skill(10))], practice_ratio=1.0, buffer_ratio=0)
        assert result.rounded_total_hours == 20

    def test_empty(self):
        result = calculate_roadmap_time([])
        assert result.rounded_total_hours == 0
        assert result.to_dict()["module_breakdown"] == []
