"""
LearnPath API
Engagement models: weekly check-ins and product feedback.
"""

from datetime import datetime, timezone

from learnpath.core.constants import FEEDBACK_CATEGORIES, FEEDBACK_STATUSES, FEEDBACK_TYPES
from learnpath.models import db, in_check
from learnpath.models.soft_delete import SoftDeleteMixin


def _utcnow():
    return datetime.now(timezone.utc)


class WeeklyCheckin(SoftDeleteMixin, db.Model):
    """One self-reported check-in per user per week (Monday start)."""

    __tablename__ = "weekly_checkins"
    __table_args__ = (
        db.UniqueConstraint("user_id", "week_start_date", name="uq_checkin_user_week"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    week_start_date = db.Column(db.Date, nullable=False)
    hours_spent = db.Column(db.Float, nullable=False, default=0)
    challenges_faced = db.Column(db.Text, nullable=True)
    wins_achieved = db.Column(db.Text, nullable=True)
    focus_next_week = db.Column(db.Text, nullable=True)
    motivation_level = db.Column(db.Integer, nullable=False, comment="1-10")

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "week_start_date": self.week_start_date.isoformat() if self.week_start_date else None,
            "hours_spent": self.hours_spent,
            "challenges_faced": self.challenges_faced,
            "wins_achieved": self.wins_achieved,
            "focus_next_week": self.focus_next_week,
            "motivation_level": self.motivation_level,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<WeeklyCheckin {self.id}: user={self.user_id} week={self.week_start_date}>"


class Feedback(db.Model):
    """Product feedback submitted by a user."""

    __tablename__ = "feedback"
    __table_args__ = (
        in_check("type", FEEDBACK_TYPES, "ck_feedback_type"),
        in_check("category", FEEDBACK_CATEGORIES, "ck_feedback_category"),
        in_check("status", FEEDBACK_STATUSES, "ck_feedback_status"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    type = db.Column(db.String(30), nullable=False)
    category = db.Column(db.String(30), nullable=False)
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=True)
    # "metadata" is reserved on declarative models
    extra = db.Column("metadata", db.JSON, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="pending")

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "category": self.category,
            "content": self.content,
            "rating": self.rating,
            "metadata": self.extra,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Feedback {self.id}: {self.type}/{self.category}>"
