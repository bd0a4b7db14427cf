"""
LearnPath API
SQLAlchemy models package.

The shared ``db`` handle lives here so every model module can do
``from learnpath.models import db`` without importing the app factory.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def in_check(column, values, name):
    """CHECK constraint limiting ``column`` to ``values``."""
    allowed = ", ".join(f"'{value}'" for value in values)
    return db.CheckConstraint(f"{column} IN ({allowed})", name=name)
