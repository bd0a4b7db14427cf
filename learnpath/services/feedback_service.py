"""Product feedback."""

import logging

from learnpath.models import db
from learnpath.models.engagement import Feedback

logger = logging.getLogger(__name__)


def submit_feedback(user_id, data):
    feedback = Feedback(
        user_id=user_id,
        type=data.type,
        category=data.category,
        content=data.content,
        rating=data.rating,
        extra=data.metadata,
        status="pending",
    )
    db.session.add(feedback)
    db.session.commit()

    logger.info("Feedback submitted: %s/%s", data.type, data.category,
                extra={"user_id": user_id, "event_type": "feedback"})
    return feedback


def feedback_query(user_id):
    return (
        Feedback.query.filter_by(user_id=user_id)
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
    )
