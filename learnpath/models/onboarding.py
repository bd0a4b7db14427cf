"""
LearnPath API
Onboarding wizard state: one row per user.
"""

from datetime import datetime, timezone

from learnpath.core.constants import ONBOARDING_TOTAL_STEPS
from learnpath.models import db


def _utcnow():
    return datetime.now(timezone.utc)


class OnboardingState(db.Model):
    """Answers captured by the onboarding wizard prior to roadmap generation."""

    __tablename__ = "onboarding_states"
    __table_args__ = (
        db.CheckConstraint(
            f"current_step >= 1 AND current_step <= {ONBOARDING_TOTAL_STEPS}",
            name="ck_onboarding_step_range",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True, index=True,
    )
    current_step = db.Column(db.Integer, nullable=False, default=1)
    current_role = db.Column(db.String(100), nullable=True)
    target_role = db.Column(db.String(100), nullable=True)
    weekly_hours = db.Column(db.Integer, nullable=True)
    existing_skills = db.Column(db.JSON, nullable=False, default=list, comment="Skill slugs")
    is_complete = db.Column(db.Boolean, nullable=False, default=False)
    is_skipped = db.Column(db.Boolean, nullable=False, default=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        """Serialize in the wizard's response shape."""
        return {
            "current_step": self.current_step,
            "total_steps": ONBOARDING_TOTAL_STEPS,
            "is_complete": self.is_complete,
            "is_skipped": self.is_skipped,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "data": {
                "current_role": self.current_role,
                "target_role": self.target_role,
                "weekly_hours": self.weekly_hours,
                "existing_skills": list(self.existing_skills or []),
            },
        }

    def __repr__(self):
        return f"<OnboardingState user={self.user_id} step={self.current_step}>"
