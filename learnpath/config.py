"""
LearnPath API
Environment configuration, selected by APP_ENV.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name]())
"""

import os
import secrets

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

# Local fallback when DATABASE_URL is unset
_SQLITE_DEV = f"sqlite:///{os.path.join(basedir, 'instance', 'learnpath_dev.db')}"
_SQLITE_TEST = "sqlite:///:memory:"

# Per-process key for development only; tokens do not survive a restart
_DEV_SECRET = secrets.token_hex(32)


def _database_url(default=None):
    # SQLAlchemy 2 only accepts the postgresql:// scheme
    raw = os.getenv("DATABASE_URL", "")
    if raw:
        return raw.replace("postgres://", "postgresql://", 1)
    return default


class Config:
    """Settings common to every environment."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    DEBUG = False
    TESTING = False

    # Request body cap (JSON payloads are small)
    MAX_CONTENT_LENGTH = 10 * 1024

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }

    # JWT
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_ACCESS_EXPIRES = int(os.getenv("JWT_ACCESS_EXPIRES", "3600"))

    # CORS: the SPA origin; credentials are allowed
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Rate limiting (Flask-Limiter)
    RATELIMIT_STORAGE_URI = os.getenv("REDIS_URL", "memory://")
    RATELIMIT_DEFAULT = "1000 per 15 minutes"
    RATELIMIT_AUTH = "10 per 15 minutes"
    RATELIMIT_HEADERS_ENABLED = True

    # Migrations own the schema outside development
    AUTO_CREATE_TABLES = False

    # Subscription / roadmap tuning
    TRIAL_DURATION_DAYS = int(os.getenv("TRIAL_DURATION_DAYS", "14"))
    DEFAULT_WEEKLY_HOURS = int(os.getenv("DEFAULT_WEEKLY_HOURS", "10"))
    DEFAULT_TARGET_ROLE = os.getenv("DEFAULT_TARGET_ROLE", "ML Engineer")
    ROADMAP_PRACTICE_RATIO = float(os.getenv("ROADMAP_PRACTICE_RATIO", "0.5"))
    ROADMAP_BUFFER_RATIO = float(os.getenv("ROADMAP_BUFFER_RATIO", "0.1"))


class DevelopmentConfig(Config):
    """Local development: SQLite file, tables created on startup."""

    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _database_url(_SQLITE_DEV)
    AUTO_CREATE_TABLES = True


class TestingConfig(Config):
    """pytest: in-memory SQLite, fixed secrets, no rate limiting."""

    TESTING = True
    SECRET_KEY = "test-secret-key-learnpath-0123456789abcdef"
    JWT_SECRET_KEY = "test-jwt-secret-learnpath-0123456789abcdef"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", _SQLITE_TEST)
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production: PostgreSQL and secrets from the environment are mandatory."""

    DEBUG = False
    SQLALCHEMY_DATABASE_URI = _database_url()
    RATELIMIT_DEFAULT = "100 per 15 minutes"

    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 300,
        "pool_timeout": 20,
        "connect_args": {
            "options": "-c statement_timeout=30000",
        },
    }

    def __init__(self):
        if not self.SQLALCHEMY_DATABASE_URI:
            raise RuntimeError("DATABASE_URL environment variable is required in production")
        if not os.getenv("SECRET_KEY"):
            raise RuntimeError("SECRET_KEY environment variable must be set in production")


# APP_ENV -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
