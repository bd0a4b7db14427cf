"""
User service: subscription tier resolution and user provisioning.

Tier rules:
    pro   → subscription.status == "active"
    trial → trial_end_date still in the future
    free  → everything else
"""

import logging
from datetime import datetime, timedelta, timezone

from flask import current_app

from learnpath.core.constants import TIER_FREE, TIER_PRO, TIER_TRIAL
from learnpath.core.exceptions import ConflictError
from learnpath.models import db
from learnpath.models.user import Subscription, User

logger = logging.getLogger(__name__)


def _as_utc(value):
    """SQLite drops tzinfo on round-trip; treat naive timestamps as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_tier(user, now=None):
    """Return the access tier for ``user`` at ``now`` (defaults to current time)."""
    now = now or datetime.now(timezone.utc)
    subscription = user.subscription
    if subscription is not None and subscription.status == "active":
        return TIER_PRO
    trial_end = _as_utc(user.trial_end_date)
    if trial_end is not None and trial_end > now:
        return TIER_TRIAL
    return TIER_FREE


def trial_ends_at(user):
    trial_end = _as_utc(user.trial_end_date)
    return trial_end.isoformat() if trial_end else None


def get_user(user_id):
    return db.session.get(User, user_id)


def create_user(email, name=None, pro=False, trial_days=None):
    """Create a user with a fresh trial, plus an active Pro subscription if ``pro``.

    ``trial_days=0`` creates a user whose trial has already lapsed.
    """
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError(f"User {email} already exists")

    if trial_days is None:
        trial_days = current_app.config["TRIAL_DURATION_DAYS"]
    now = datetime.now(timezone.utc)
    user = User(
        email=email,
        name=name,
        trial_start_date=now,
        trial_end_date=now + timedelta(days=trial_days),
    )
    db.session.add(user)
    db.session.flush()

    subscription = Subscription(
        user_id=user.id,
        status="active" if pro else "trialing",
        plan="pro" if pro else "free",
        current_period_start=now if pro else None,
        current_period_end=now + timedelta(days=30) if pro else None,
    )
    db.session.add(subscription)
    db.session.commit()

    logger.info("User created", extra={"user_id": user.id, "event_type": "user_created"})
    return user
