"""
LearnPath API
Roadmap domain models.

Models:
    - Roadmap: a user's learning plan (soft-deletable, one active at a time)
    - RoadmapModule: one skill placed in a phase at a sequence position
    - Progress: a user's status on one module
"""

from datetime import datetime, timezone

from learnpath.core.constants import PHASE_ORDER, PROGRESS_STATUSES
from learnpath.models import db, in_check
from learnpath.models.soft_delete import SoftDeleteMixin


def _utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class Roadmap(SoftDeleteMixin, db.Model):
    """A user's ordered learning plan."""

    __tablename__ = "roadmaps"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=True)
    source_role = db.Column(db.String(100), nullable=False, default="beginner")
    target_role = db.Column(db.String(100), nullable=False)
    total_estimated_hours = db.Column(db.Float, nullable=False, default=0)
    completed_hours = db.Column(db.Float, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # ── Relationships ────────────────────────────────────────────────────
    modules = db.relationship(
        "RoadmapModule", backref="roadmap", lazy="selectin",
        cascade="all, delete-orphan", order_by="RoadmapModule.sequence_order",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "source_role": self.source_role,
            "target_role": self.target_role,
            "total_estimated_hours": self.total_estimated_hours,
            "completed_hours": self.completed_hours,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Roadmap {self.id}: {self.title}>"


class RoadmapModule(db.Model):
    """A roadmap entry referencing one skill. Sequence order is unique per roadmap."""

    __tablename__ = "roadmap_modules"
    __table_args__ = (
        db.UniqueConstraint("roadmap_id", "sequence_order", name="uq_roadmap_module_sequence"),
        in_check("phase", PHASE_ORDER, "ck_roadmap_modules_phase"),
    )

    id = db.Column(db.Integer, primary_key=True)
    roadmap_id = db.Column(
        db.Integer, db.ForeignKey("roadmaps.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    skill_id = db.Column(
        db.Integer, db.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False,
    )
    phase = db.Column(db.String(20), nullable=False)
    sequence_order = db.Column(db.Integer, nullable=False)
    is_locked = db.Column(db.Boolean, nullable=False, default=True)
    is_skipped = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    skill = db.relationship("Skill", lazy="joined")
    progress_entries = db.relationship(
        "Progress", backref="module", lazy="selectin",
        cascade="all, delete-orphan",
    )

    def progress_for(self, user_id):
        """Return this module's Progress row for ``user_id``, or None."""
        for entry in self.progress_entries:
            if entry.user_id == user_id:
                return entry
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "roadmap_id": self.roadmap_id,
            "skill_id": self.skill_id,
            "phase": self.phase,
            "sequence_order": self.sequence_order,
            "is_locked": self.is_locked,
            "is_skipped": self.is_skipped,
        }

    def __repr__(self):
        return f"<RoadmapModule {self.id}: roadmap={self.roadmap_id} #{self.sequence_order}>"


class Progress(db.Model):
    """A user's status on one roadmap module."""

    __tablename__ = "progress"
    __table_args__ = (
        db.UniqueConstraint("user_id", "roadmap_module_id", name="uq_progress_user_module"),
        in_check("status", PROGRESS_STATUSES, "ck_progress_status"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    roadmap_module_id = db.Column(
        db.Integer, db.ForeignKey("roadmap_modules.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    status = db.Column(db.String(20), nullable=False, default="not_started")
    started_at = db.Column(db.DateTime(timezone=True), nullable=True)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    time_spent_minutes = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "roadmap_module_id": self.roadmap_module_id,
            "status": self.status,
            "started_at": _iso(self.started_at),
            "completed_at": _iso(self.completed_at),
            "time_spent_minutes": self.time_spent_minutes,
            "notes": self.notes,
        }

    def __repr__(self):
        return f"<Progress {self.id}: module={self.roadmap_module_id} {self.status}>"
