"""
WSGI / Flask-Migrate entry point.

Usage:
    flask --app wsgi db upgrade
    flask --app wsgi seed-skills
    gunicorn wsgi:app
"""

from learnpath import create_app

app = create_app()
