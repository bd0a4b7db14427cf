"""
LearnPath API
User domain models.

Models:
    - User: a learner, mirrored from the identity provider
    - Subscription: billing state used to derive the access tier
"""

from datetime import datetime, timezone

from learnpath.core.constants import SUBSCRIPTION_PLANS, SUBSCRIPTION_STATUSES
from learnpath.models import db, in_check


def _utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class User(db.Model):
    """A learner. Authentication itself happens at the identity provider."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    name = db.Column(db.String(200), nullable=True)
    avatar_url = db.Column(db.String(500), nullable=True)
    trial_start_date = db.Column(db.DateTime(timezone=True), nullable=True)
    trial_end_date = db.Column(db.DateTime(timezone=True), nullable=True)
    email_verified = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # ── Relationships ────────────────────────────────────────────────────
    subscription = db.relationship(
        "Subscription", backref="user", uselist=False,
        cascade="all, delete-orphan",
    )
    onboarding_state = db.relationship(
        "OnboardingState", backref="user", uselist=False,
        cascade="all, delete-orphan",
    )
    roadmaps = db.relationship(
        "Roadmap", backref="user", lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "avatar_url": self.avatar_url,
            "trial_start_date": _iso(self.trial_start_date),
            "trial_end_date": _iso(self.trial_end_date),
            "email_verified": self.email_verified,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"


class Subscription(db.Model):
    """Billing state for one user. Only ``status == "active"`` grants Pro."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        in_check("status", SUBSCRIPTION_STATUSES, "ck_subscriptions_status"),
        in_check("plan", SUBSCRIPTION_PLANS, "ck_subscriptions_plan"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    status = db.Column(db.String(30), nullable=False, default="trialing")
    plan = db.Column(db.String(20), nullable=False, default="free")
    current_period_start = db.Column(db.DateTime(timezone=True), nullable=True)
    current_period_end = db.Column(db.DateTime(timezone=True), nullable=True)
    cancel_at_period_end = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "status": self.status,
            "plan": self.plan,
            "current_period_start": _iso(self.current_period_start),
            "current_period_end": _iso(self.current_period_end),
            "cancel_at_period_end": self.cancel_at_period_end,
        }

    def __repr__(self):
        return f"<Subscription {self.id}: user={self.user_id} {self.status}>"
