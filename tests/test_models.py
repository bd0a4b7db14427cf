"""
Table-level constraints on enumerated and ranged columns.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from learnpath.models import db
from learnpath.models.engagement import Feedback
from learnpath.models.roadmap import Roadmap, RoadmapModule
from learnpath.models.skill import Resource


def _resource(skill, **overrides):
    fields = {"title": "Intro", "url": "https://example.com", "type": "article", "quality": 3}
    fields.update(overrides)
    return Resource(skill_id=skill.id, **fields)


class TestResourceConstraints:
    def test_valid_resource(self, skills):
        db.session.add(_resource(skills["python-ml"], type="project", quality=1))
        db.session.commit()

    def test_unknown_type(self, skills):
        db.session.add(_resource(skills["python-ml"], type="podcast"))
        with pytest.raises(IntegrityError):
            db.session.commit()

    @pytest.mark.parametrize("quality", [0, 6, 42])
    def test_quality_out_of_range(self, skills, quality):
        db.session.add(_resource(skills["python-ml"], quality=quality))
        with pytest.raises(IntegrityError):
            db.session.commit()


class TestSubscriptionConstraints:
    def test_unknown_status(self, pro_user):
        pro_user.subscription.status = "bogus"
        with pytest.raises(IntegrityError):
            db.session.commit()

    def test_unknown_plan(self, pro_user):
        pro_user.subscription.plan = "enterprise"
        with pytest.raises(IntegrityError):
            db.session.commit()


class TestFeedbackConstraints:
    @pytest.mark.parametrize("field,value", [
        ("type", "praise"),
        ("category", "billing"),
        ("status", "archived"),
    ])
    def test_unknown_value(self, pro_user, field, value):
        fields = {"type": "bug", "category": "other", "status": "pending"}
        fields[field] = value
        db.session.add(Feedback(user_id=pro_user.id, content="text", **fields))
        with pytest.raises(IntegrityError):
            db.session.commit()


def test_roadmap_module_phase(pro_user, skills):
    roadmap = Roadmap(user_id=pro_user.id, title="Plan", target_role="ML Engineer")
    roadmap.modules.append(RoadmapModule(
        skill_id=skills["python-ml"].id, phase="expert", sequence_order=1,
    ))
    db.session.add(roadmap)
    with pytest.raises(IntegrityError):
        db.session.commit()
