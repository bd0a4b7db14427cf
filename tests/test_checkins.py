"""
Tests for weekly check-ins (Pro feature).

Scenarios:
  - one check-in per week, second one conflicts
  - deleting frees the week again
  - history and summary (averages, streak)
  - free tier is refused
"""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from learnpath.core.exceptions import ConflictError
from learnpath.services.checkin_service import (
    checkin_summary,
    create_checkin,
    current_streak,
    week_start,
)

URL = "/api/v1/checkins"


def _answers(hours=5, motivation=7):
    return SimpleNamespace(hours_spent=hours, challenges_faced=None, wins_achieved="shipped",
                           focus_next_week=None, motivation_level=motivation)


@pytest.fixture()
def headers(pro_user, auth_headers):
    return auth_headers(pro_user)


class TestWeekMath:
    def test_week_start_is_monday(self):
        assert week_start(date(2024, 5, 16)) == date(2024, 5, 13)
        assert week_start(date(2024, 5, 13)) == date(2024, 5, 13)
        assert week_start(date(2024, 5, 19)) == date(2024, 5, 13)

    def test_streak_counts_back_from_this_week(self):
        today = date(2024, 5, 16)
        weeks = [date(2024, 5, 13), date(2024, 5, 6), date(2024, 4, 29), date(2024, 4, 15)]
        assert current_streak(weeks, today) == 3

    def test_streak_tolerates_missing_current_week(self):
        today = date(2024, 5, 16)
        assert current_streak([date(2024, 5, 6), date(2024, 4, 29)], today) == 2

    def test_streak_broken(self):
        assert current_streak([date(2024, 4, 15)], date(2024, 5, 16)) == 0


class TestService:
    def test_summary_over_weeks(self, pro_user):
        today = date.today()
        create_checkin(pro_user.id, _answers(4, 6), today=today)
        create_checkin(pro_user.id, _answers(8, 9), today=today - timedelta(weeks=1))
        summary = checkin_summary(pro_user.id)
        assert summary["total_checkins"] == 2
        assert summary["average_hours_per_week"] == 6.0
        assert summary["average_motivation"] == 7.5
        assert summary["streak_weeks"] == 2
        assert summary["last_checkin_date"] == week_start(today).isoformat()

    def test_duplicate_week(self, pro_user):
        create_checkin(pro_user.id, _answers())
        with pytest.raises(ConflictError):
            create_checkin(pro_user.id, _answers())

    def test_empty_summary(self, pro_user):
        assert checkin_summary(pro_user.id)["total_checkins"] == 0


class TestCheckinApi:
    def test_create(self, client, headers):
        res = client.post(URL, json={"hours_spent": 6.5, "motivation_level": 8,
                                     "wins_achieved": "Finished NumPy"}, headers=headers)
        assert res.status_code == 201
        data = res.get_json()["data"]
        assert data["week_start_date"] == week_start().isoformat()
        assert data["hours_spent"] == 6.5

    def test_second_checkin_same_week_conflicts(self, client, headers):
        body = {"hours_spent": 3, "motivation_level": 5}
        client.post(URL, json=body, headers=headers)
        res = client.post(URL, json=body, headers=headers)
        assert res.status_code == 409
        assert res.get_json()["error"]["message"] == "A check-in already exists for this week"

    @pytest.mark.parametrize("body", [
        {"hours_spent": -1, "motivation_level": 5},
        {"hours_spent": 3, "motivation_level": 11},
        {"hours_spent": 3},
    ])
    def test_validation(self, client, headers, body):
        assert client.post(URL, json=body, headers=headers).status_code == 422

    def test_delete_frees_the_week(self, client, headers):
        created = client.post(URL, json={"hours_spent": 3, "motivation_level": 5},
                              headers=headers).get_json()["data"]
        res = client.delete(f"{URL}/{created['id']}", headers=headers)
        assert res.status_code == 204

        listing = client.get(URL, headers=headers).get_json()
        assert listing["data"] == []
        assert listing["total"] == 0

        res = client.post(URL, json={"hours_spent": 9, "motivation_level": 9}, headers=headers)
        assert res.status_code == 201
        assert res.get_json()["data"]["hours_spent"] == 9

    def test_delete_someone_elses(self, client, headers, trial_user, auth_headers):
        created = client.post(URL, json={"hours_spent": 3, "motivation_level": 5},
                              headers=headers).get_json()["data"]
        res = client.delete(f"{URL}/{created['id']}", headers=auth_headers(trial_user))
        assert res.status_code == 404

    def test_summary_endpoint(self, client, headers):
        client.post(URL, json={"hours_spent": 4, "motivation_level": 6}, headers=headers)
        data = client.get(f"{URL}/summary", headers=headers).get_json()["data"]
        assert data["total_checkins"] == 1
        assert data["streak_weeks"] == 1

    def test_free_tier_refused(self, client, free_user, auth_headers):
        res = client.post(URL, json={"hours_spent": 3, "motivation_level": 5},
                          headers=auth_headers(free_user))
        assert res.status_code == 403
