"""
Auth middleware: parses the bearer JWT into ``g.current_user``.

Every ``/api/v1/*`` request (health excluded) runs through ``_jwt_auth``.
A valid token for an existing user yields a ``CurrentUser`` with the
subscription tier resolved at request time. A bad token never blocks the
request here; it records ``g.auth_error`` and leaves ``g.current_user``
unset so public routes keep working. Protected routes opt in with the
decorators below.

Usage:
    @bp.route("/checkins", methods=["POST"])
    @require_auth
    @require_pro
    def create_checkin():
        ...
"""

import functools
import logging
from dataclasses import asdict, dataclass

import jwt as pyjwt
from flask import g, request

from learnpath.core.constants import PHASE_ACCESS, PHASE_LABELS, TIER_FREE
from learnpath.core.exceptions import ForbiddenError, UnauthorizedError
from learnpath.services.jwt_service import decode_access_token
from learnpath.services.user_service import get_user, resolve_tier, trial_ends_at

logger = logging.getLogger(__name__)

# Paths that never carry credentials
AUTH_SKIP_PREFIXES = (
    "/api/v1/health",
)


@dataclass
class CurrentUser:
    id: int
    email: str
    name: str | None
    subscription_status: str
    trial_ends_at: str | None

    def to_session(self):
        data = asdict(self)
        data["user_id"] = data.pop("id")
        return data


def init_auth_middleware(app):
    """Register the JWT parser as a before_request hook."""

    @app.before_request
    def _jwt_auth():
        g.current_user = None
        g.auth_error = None

        path = request.path
        if not path.startswith("/api/v1/"):
            return
        if path.startswith(AUTH_SKIP_PREFIXES):
            return

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return

        token = auth_header[7:].strip()
        try:
            payload = decode_access_token(token)
        except pyjwt.ExpiredSignatureError:
            g.auth_error = "Token expired"
            return
        except pyjwt.InvalidTokenError:
            g.auth_error = "Invalid token"
            return

        user = get_user(payload["sub"])
        if user is None:
            g.auth_error = "User not found"
            return
        if payload["email"] != user.email:
            logger.warning("Token email mismatch", extra={"user_id": user.id})
            g.auth_error = "Invalid token"
            return

        g.current_user = CurrentUser(
            id=user.id,
            email=user.email,
            name=user.name,
            subscription_status=resolve_tier(user),
            trial_ends_at=trial_ends_at(user),
        )


# ═══════════════════════════════════════════════════════════════
# Decorators
# ═══════════════════════════════════════════════════════════════

def require_auth(f):
    """Reject the request with 401 unless a valid user was resolved."""
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if getattr(g, "current_user", None) is None:
            raise UnauthorizedError(getattr(g, "auth_error", None) or "Authentication required")
        return f(*args, **kwargs)
    return decorated


def require_pro(f):
    """Reject free-tier users. Trial users pass."""
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        user = getattr(g, "current_user", None)
        if user is None:
            raise UnauthorizedError(getattr(g, "auth_error", None) or "Authentication required")
        if user.subscription_status == TIER_FREE:
            logger.info("Pro route denied to free user %d on %s", user.id, f.__name__)
            raise ForbiddenError("Pro subscription required")
        return f(*args, **kwargs)
    return decorated


def check_phase_access(user, phase):
    """Raise ForbiddenError when ``user``'s tier may not open ``phase`` content."""
    allowed = PHASE_ACCESS.get(phase)
    if allowed is None or user.subscription_status in allowed:
        return
    if phase == "foundation":
        raise ForbiddenError("Subscription required for this content")
    raise ForbiddenError(f"{PHASE_LABELS[phase]} phase requires Pro subscription")


def require_phase_access(phase: str):
    """
    Decorator: require a tier that may open ``phase`` content.

    Args:
        phase: foundation | intermediate | advanced
    """
    def decorator(f):
        @functools.wraps(f)
        def decorated(*args, **kwargs):
            user = getattr(g, "current_user", None)
            if user is None:
                raise UnauthorizedError(getattr(g, "auth_error", None) or "Authentication required")
            check_phase_access(user, phase)
            return f(*args, **kwargs)
        return decorated
    return decorator
