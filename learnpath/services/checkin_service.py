"""
Weekly check-in service.

One check-in per user per week; weeks start on Monday. A soft-deleted
check-in frees its week: creating again revives the row with new answers.
"""

import logging
from datetime import date, timedelta

from learnpath.core.exceptions import ConflictError
from learnpath.models import db
from learnpath.models.engagement import WeeklyCheckin
from learnpath.utils.helpers import get_owned_or_404

logger = logging.getLogger(__name__)

_FIELDS = (
    "hours_spent",
    "challenges_faced",
    "wins_achieved",
    "focus_next_week",
    "motivation_level",
)


def week_start(day=None):
    """Monday of the week containing ``day``."""
    day = day or date.today()
    return day - timedelta(days=day.weekday())


def create_checkin(user_id, data, today=None):
    """Create this week's check-in from a WeeklyCheckinSchema instance."""
    week = week_start(today)
    checkin = WeeklyCheckin.query.filter_by(user_id=user_id, week_start_date=week).first()
    if checkin is not None and not checkin.is_deleted:
        raise ConflictError("A check-in already exists for this week")

    if checkin is None:
        checkin = WeeklyCheckin(user_id=user_id, week_start_date=week)
        db.session.add(checkin)
    else:
        checkin.restore()
    for name in _FIELDS:
        setattr(checkin, name, getattr(data, name))
    db.session.commit()

    logger.info("Weekly check-in recorded for %s", week.isoformat(), extra={"user_id": user_id})
    return checkin


def checkins_query(user_id):
    """Live check-ins for ``user_id``, newest week first."""
    return (
        WeeklyCheckin.query_active()
        .filter_by(user_id=user_id)
        .order_by(WeeklyCheckin.week_start_date.desc())
    )


def list_checkins(user_id):
    return checkins_query(user_id).all()


def current_streak(weeks, today=None):
    """Consecutive weeks with a check-in, ending this week or last week."""
    weeks = set(weeks)
    cursor = week_start(today)
    if cursor not in weeks:
        cursor -= timedelta(weeks=1)
    streak = 0
    while cursor in weeks:
        streak += 1
        cursor -= timedelta(weeks=1)
    return streak


def checkin_summary(user_id, today=None):
    checkins = list_checkins(user_id)
    if not checkins:
        return {
            "total_checkins": 0,
            "average_hours_per_week": 0,
            "average_motivation": 0,
            "streak_weeks": 0,
            "last_checkin_date": None,
        }

    count = len(checkins)
    return {
        "total_checkins": count,
        "average_hours_per_week": round(sum(c.hours_spent for c in checkins) / count, 1),
        "average_motivation": round(sum(c.motivation_level for c in checkins) / count, 1),
        "streak_weeks": current_streak((c.week_start_date for c in checkins), today),
        "last_checkin_date": checkins[0].week_start_date.isoformat(),
    }


def delete_checkin(user_id, checkin_id):
    checkin = get_owned_or_404(WeeklyCheckin, checkin_id, user_id, label="Check-in")
    checkin.soft_delete()
    db.session.commit()
    logger.info("Weekly check-in deleted", extra={"user_id": user_id})
