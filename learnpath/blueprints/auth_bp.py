"""
Auth blueprint: session introspection.

Tokens are issued outside the API (identity provider, or
``flask create-user`` in development).
"""

from flask import Blueprint, g

from learnpath.middleware.auth import require_auth
from learnpath.utils.helpers import ok

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@auth_bp.route("/me", methods=["GET"])
@require_auth
def me():
    """Current session: user id, email, name, tier and trial end."""
    return ok(g.current_user.to_session())
