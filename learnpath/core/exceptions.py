"""
Application-wide exception hierarchy.

Services raise these; the central error handler in ``learnpath.errors``
turns them into the standard JSON error envelope:

    {"success": false, "error": {"code": "...", "message": "..."}}

Usage:
    from learnpath.core.exceptions import NotFoundError, BadRequestError

    raise NotFoundError("Roadmap not found")
    raise BadRequestError("target_role query parameter is required")
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP response.

    Args:
        message: Human-readable explanation, returned to the client.
        code: Machine-readable error code.
        status_code: HTTP status for the response.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequestError(AppError):
    """Malformed or incomplete request (HTTP 400)."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(AppError):
    """Missing or invalid credentials (HTTP 401)."""

    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    """Authenticated, but the subscription tier does not allow it (HTTP 403)."""

    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    """Resource does not exist or is not owned by the caller (HTTP 404).

    Ownership failures use this too, so a 404 never confirms that another
    user's record exists.
    """

    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    """Operation clashes with existing state (HTTP 409)."""

    status_code = 409
    code = "CONFLICT"


class ValidationError(AppError):
    """Well-formed input that failed validation (HTTP 422).

    Args:
        message: Summary message.
        errors: Field path -> list of messages.
    """

    status_code = 422
    code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Validation failed", errors: dict | None = None) -> None:
        self.errors = errors or {}
        super().__init__(message)
