"""
Rate limiting configuration.

The Limiter instance lives in learnpath/__init__.py with the app-wide
default from RATELIMIT_DEFAULT (100 per 15 minutes in production, 1000
elsewhere). This module applies the per-blueprint overrides.

Usage:
    from learnpath.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP, 15-minute window):
        - Auth endpoints:  RATELIMIT_AUTH (10)
        - Everything else: RATELIMIT_DEFAULT
        - Health check:    exempt

    Limiting is switched off under TESTING via RATELIMIT_ENABLED.
    """
    bp = app.blueprints.get("auth")
    if bp:
        limiter.limit(app.config["RATELIMIT_AUTH"])(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    if not app.config.get("TESTING"):
        app.logger.info(
            "Rate limiter configured: default=%s auth=%s storage=%s",
            app.config["RATELIMIT_DEFAULT"],
            app.config["RATELIMIT_AUTH"],
            app.config["RATELIMIT_STORAGE_URI"].split("://", 1)[0],
        )
