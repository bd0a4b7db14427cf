"""
Soft Delete Mixin

Rows are stamped with `deleted_at` instead of being removed.
Used by roadmaps and weekly check-ins.

Usage:
    class Roadmap(SoftDeleteMixin, db.Model):
        ...

    roadmap.soft_delete()
    db.session.commit()

    Roadmap.query_active().filter_by(user_id=uid).all()
"""

from datetime import datetime, timezone

from learnpath.models import db


class SoftDeleteMixin:
    """Adds a nullable ``deleted_at`` column; a set value hides the row."""

    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, default=None, index=True)

    def soft_delete(self):
        """Stamp ``deleted_at``; the caller commits."""
        self.deleted_at = datetime.now(timezone.utc)

    def restore(self):
        """Clear ``deleted_at``."""
        self.deleted_at = None

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @classmethod
    def query_active(cls):
        """``Model.query`` without deleted rows."""
        return cls.query.filter(cls.deleted_at.is_(None))
