"""
LearnPath API
Skill catalogue models.

Models:
    - Skill: a learnable unit placed in a phase
    - SkillDependency: prerequisite edge (skill depends on depends_on)
    - Resource: curated learning material for a skill
"""

from datetime import datetime, timezone

from learnpath.core.constants import PHASE_ORDER, RESOURCE_TYPES
from learnpath.models import db, in_check


def _utcnow():
    return datetime.now(timezone.utc)


class Skill(db.Model):
    """A skill in the catalogue. ``phase`` is foundation | intermediate | advanced."""

    __tablename__ = "skills"
    __table_args__ = (
        in_check("phase", PHASE_ORDER, "ck_skills_phase"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(100), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, default="")
    why_this_matters = db.Column(db.Text, nullable=True)
    phase = db.Column(db.String(20), nullable=False, default="foundation")
    estimated_hours = db.Column(db.Float, nullable=False, default=0)
    is_optional = db.Column(db.Boolean, nullable=False, default=False)
    sequence_order = db.Column(db.Integer, nullable=False, default=0, comment="Catalogue order")

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # ── Relationships ────────────────────────────────────────────────────
    resources = db.relationship(
        "Resource", backref="skill", lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Resource.quality.desc()",
    )
    prerequisites = db.relationship(
        "SkillDependency", foreign_keys="SkillDependency.skill_id",
        backref="skill", cascade="all, delete-orphan",
    )
    dependents = db.relationship(
        "SkillDependency", foreign_keys="SkillDependency.depends_on_id",
        backref="depends_on", cascade="all, delete-orphan",
    )

    def to_dict(self, include_resources=False):
        result = {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "why_this_matters": self.why_this_matters,
            "phase": self.phase,
            "estimated_hours": self.estimated_hours,
            "is_optional": self.is_optional,
            "sequence_order": self.sequence_order,
        }
        if include_resources:
            result["resources"] = [r.to_dict() for r in self.resources]
        return result

    def __repr__(self):
        return f"<Skill {self.id}: {self.slug}>"


class SkillDependency(db.Model):
    """Prerequisite edge: ``skill_id`` requires ``depends_on_id`` first."""

    __tablename__ = "skill_dependencies"
    __table_args__ = (
        db.UniqueConstraint("skill_id", "depends_on_id", name="uq_skill_dependency"),
        db.CheckConstraint("skill_id <> depends_on_id", name="ck_skill_dependency_no_self"),
    )

    id = db.Column(db.Integer, primary_key=True)
    skill_id = db.Column(
        db.Integer, db.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    depends_on_id = db.Column(
        db.Integer, db.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    is_hard = db.Column(db.Boolean, nullable=False, default=True, comment="Soft edges are advisory")

    def to_dict(self):
        return {
            "id": self.id,
            "skill_id": self.skill_id,
            "depends_on_id": self.depends_on_id,
            "is_hard": self.is_hard,
        }

    def __repr__(self):
        return f"<SkillDependency {self.skill_id} -> {self.depends_on_id}>"


class Resource(db.Model):
    """Curated learning material. ``quality`` is a 1-5 editorial score."""

    __tablename__ = "resources"
    __table_args__ = (
        in_check("type", RESOURCE_TYPES, "ck_resources_type"),
        db.CheckConstraint("quality >= 1 AND quality <= 5", name="ck_resources_quality"),
    )

    id = db.Column(db.Integer, primary_key=True)
    skill_id = db.Column(
        db.Integer, db.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title = db.Column(db.String(300), nullable=False)
    url = db.Column(db.String(1000), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="article")
    provider = db.Column(db.String(100), nullable=True)
    duration_minutes = db.Column(db.Integer, nullable=True)
    is_free = db.Column(db.Boolean, nullable=False, default=True)
    quality = db.Column(db.Integer, nullable=False, default=3)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "type": self.type,
            "provider": self.provider,
            "duration_minutes": self.duration_minutes,
            "is_free": self.is_free,
            "quality": self.quality,
        }

    def __repr__(self):
        return f"<Resource {self.id}: {self.title}>"
