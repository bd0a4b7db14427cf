"""
LearnPath API
Flask Application Factory.

Usage:
    from learnpath import create_app
    app = create_app()           # defaults to APP_ENV or "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

import click
from flask import Flask, abort, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event

from learnpath.config import config
from learnpath.errors import register_error_handlers
from learnpath.middleware.auth import init_auth_middleware
from learnpath.middleware.logging_config import configure_logging
from learnpath.middleware.rate_limiter import init_rate_limits
from learnpath.middleware.security_headers import init_security_headers
from learnpath.middleware.timing import init_request_timing
from learnpath.models import db

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: One of "development", "testing", "production".
                     Defaults to the APP_ENV env var, or "development".

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    # Instantiated so ProductionConfig can refuse to start without secrets
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Security headers, CORS ───────────────────────────────────────────
    init_security_headers(app)
    CORS(
        app,
        origins=[app.config["FRONTEND_URL"]],
        supports_credentials=True,
        expose_headers=["X-Request-ID", "X-Request-Duration-Ms"],
    )

    # ── Request logging ──────────────────────────────────────────────────
    init_request_timing(app)

    # ── Request guards (body size + Content-Type); must follow the timer ─
    @app.before_request
    def _guard_request():
        max_len = app.config.get("MAX_CONTENT_LENGTH")
        if max_len and request.content_length and request.content_length > max_len:
            abort(413)
        if request.method in ("POST", "PUT", "PATCH") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if request.content_length and "json" not in ct:
                abort(415, description="Content-Type must be application/json")

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # ── JWT auth (sets g.current_user) ──────────────────────────────────
    init_auth_middleware(app)

    # ── Import all models so Alembic can detect them ─────────────────────
    from learnpath.models import engagement as _engagement_models  # noqa: F401
    from learnpath.models import onboarding as _onboarding_models  # noqa: F401
    from learnpath.models import roadmap as _roadmap_models  # noqa: F401
    from learnpath.models import skill as _skill_models  # noqa: F401
    from learnpath.models import user as _user_models  # noqa: F401

    if app.config.get("AUTO_CREATE_TABLES"):
        os.makedirs(app.instance_path, exist_ok=True)
        with app.app_context():
            db.create_all()

    # ── Blueprints ───────────────────────────────────────────────────────
    from learnpath.blueprints import register_blueprints
    register_blueprints(app)

    # ── Error handlers ───────────────────────────────────────────────────
    register_error_handlers(app)

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed-skills")
    def seed_skills_cmd():
        """Seed the default skill catalogue (idempotent)."""
        from learnpath.services.skill_service import seed_skills
        created = seed_skills()
        click.echo(
            f"Seeded {created['skills']} skills, {created['dependencies']} dependencies, "
            f"{created['resources']} resources."
        )

    @app.cli.command("create-user")
    @click.argument("email")
    @click.option("--name", default=None, help="Display name.")
    @click.option("--pro", is_flag=True, help="Give the user an active Pro subscription.")
    def create_user_cmd(email, name, pro):
        """Create a user with a trial and print an access token."""
        from learnpath.services.jwt_service import generate_access_token
        from learnpath.services.user_service import create_user
        user = create_user(email, name=name, pro=pro)
        click.echo(f"Created user {user.id} <{user.email}>")
        click.echo(generate_access_token(user.id, user.email))

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
