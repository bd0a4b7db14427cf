"""
Tests for the public skill catalogue and its seed.
"""

from learnpath.models.skill import Resource, Skill, SkillDependency
from learnpath.services.skill_service import SEED_DEPENDENCIES, SEED_SKILLS, seed_skills

URL = "/api/v1/skills"


class TestSeed:
    def test_seed_creates_catalogue(self):
        created = seed_skills()
        assert created["skills"] == len(SEED_SKILLS)
        assert created["dependencies"] == len(SEED_DEPENDENCIES)
        assert Resource.query.count() == created["resources"] == 6

    def test_seed_is_idempotent(self):
        seed_skills()
        assert seed_skills() == {"skills": 0, "dependencies": 0, "resources": 0}
        assert Skill.query.count() == 6
        assert SkillDependency.query.count() == 5

    def test_cli_command(self, app):
        result = app.test_cli_runner().invoke(args=["seed-skills"])
        assert result.exit_code == 0
        assert "Seeded 6 skills, 5 dependencies, 6 resources." in result.output


class TestCatalogueApi:
    def test_list_is_public(self, client, skills):
        res = client.get(URL)
        assert res.status_code == 200
        slugs = [s["slug"] for s in res.get_json()["data"]]
        assert slugs[0] == "python-ml"
        assert len(slugs) == 6

    def test_filter_by_phase(self, client, skills):
        res = client.get(f"{URL}?phase=intermediate")
        slugs = [s["slug"] for s in res.get_json()["data"]]
        assert slugs == ["ml-algorithms", "deep-learning-fundamentals"]

    def test_bad_phase(self, client):
        assert client.get(f"{URL}?phase=expert").status_code == 400

    def test_detail(self, client, skills):
        res = client.get(f"{URL}/ml-algorithms")
        assert res.status_code == 200
        data = res.get_json()["data"]
        assert {p["slug"] for p in data["prerequisites"]} == {"math-foundations", "data-preprocessing"}
        assert [d["slug"] for d in data["dependents"]] == ["deep-learning-fundamentals"]
        assert len(data["resources"]) == 1

    def test_soft_edge_flag(self, client, skills):
        data = client.get(f"{URL}/model-deployment").get_json()["data"]
        assert data["prerequisites"][0]["is_hard"] is False

    def test_unknown_slug(self, client):
        res = client.get(f"{URL}/cobol")
        assert res.status_code == 404
        assert res.get_json()["error"]["message"] == "Skill not found"
