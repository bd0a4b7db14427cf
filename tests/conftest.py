"""
Shared pytest fixtures for the LearnPath API test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - free_user / trial_user / pro_user: users in each subscription tier
    - auth_headers: user -> Bearer header
    - skills: the default skill catalogue, seeded
    - onboard: walks the wizard for a user and completes it
"""

import pytest

from learnpath import create_app
from learnpath.models import db as _db
from learnpath.services.jwt_service import generate_access_token
from learnpath.services.skill_service import seed_skills
from learnpath.services.user_service import create_user


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Users ────────────────────────────────────────────────────────────────


def _bearer(user):
    return {"Authorization": f"Bearer {generate_access_token(user.id, user.email)}"}


@pytest.fixture()
def auth_headers():
    """Callable: user -> Bearer header."""
    return _bearer


@pytest.fixture()
def free_user():
    """Trial already lapsed, no paid subscription."""
    return create_user("free@example.com", name="Free User", trial_days=0)


@pytest.fixture()
def trial_user():
    return create_user("trial@example.com", name="Trial User")


@pytest.fixture()
def pro_user():
    return create_user("pro@example.com", name="Pro User", pro=True)


# ── Catalogue ────────────────────────────────────────────────────────────


@pytest.fixture()
def skills():
    """Seed the default catalogue; returns slug -> Skill."""
    from learnpath.models.skill import Skill
    seed_skills()
    return {s.slug: s for s in Skill.query.all()}


@pytest.fixture()
def onboard(client):
    """Callable that walks the onboarding wizard for a user and completes it."""
    return lambda user, **answers: _onboard(client, _bearer(user), **answers)


def _onboard(client, headers, current_role="Backend Developer", target_role="ML Engineer",
            weekly_hours=10, existing_skills=None):
    """Walk the onboarding wizard and complete it. Returns the response JSON."""
    steps = [
        (1, {"current_role": current_role}),
        (2, {"target_role": target_role}),
        (3, {"weekly_hours": weekly_hours}),
        (4, {"existing_skills": existing_skills or []}),
    ]
    for step, body in steps:
        res = client.patch(f"/api/v1/onboarding/step/{step}", json=body, headers=headers)
        assert res.status_code == 200, res.get_json()
    res = client.post("/api/v1/onboarding/complete", headers=headers)
    assert res.status_code == 200, res.get_json()
    return res.get_json()
