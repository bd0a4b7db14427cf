"""
Central error handling.

Every error leaves the API in one envelope:

    {"success": false, "error": {"code": "NOT_FOUND", "message": "..."}}

Validation failures add ``"errors": {"field.path": ["message", ...]}``.
"""

import logging

import pydantic
from flask import jsonify
from werkzeug.exceptions import HTTPException

from learnpath.core.exceptions import AppError, ValidationError
from learnpath.models import db

logger = logging.getLogger(__name__)

# werkzeug status -> envelope code
HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
    422: "VALIDATION_ERROR",
    429: "RATE_LIMIT_EXCEEDED",
}

HTTP_ERROR_MESSAGES = {
    404: "Resource not found",
    405: "Method not allowed",
    413: "Request body too large",
    429: "Too many requests, please try again later",
}


def error_response(code, message, status, errors=None, **extra):
    error = {"code": code, "message": message}
    if errors:
        error["errors"] = errors
    body = {"success": False, "error": error}
    body.update(extra)
    return jsonify(body), status


def pydantic_errors(exc):
    """Flatten pydantic errors into {dotted.path: [messages]}."""
    errors = {}
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ())) or "body"
        errors.setdefault(path, []).append(err.get("msg", "Invalid value"))
    return errors


def register_error_handlers(app):
    """Attach the envelope-producing handlers to ``app``."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        return error_response(exc.code, exc.message, exc.status_code, exc.errors)

    @app.errorhandler(AppError)
    def handle_app_error(exc):
        if exc.status_code >= 500:
            logger.error("Application error: %s", exc.message, exc_info=exc)
        extra = {}
        if getattr(exc, "redirect_to", None):
            extra["redirect_to"] = exc.redirect_to
        return error_response(exc.code, exc.message, exc.status_code, **extra)

    @app.errorhandler(pydantic.ValidationError)
    def handle_pydantic_error(exc):
        return error_response("VALIDATION_ERROR", "Validation failed", 422, pydantic_errors(exc))

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        status = exc.code or 500
        code = HTTP_ERROR_CODES.get(status, "INTERNAL_ERROR" if status >= 500 else "BAD_REQUEST")
        message = HTTP_ERROR_MESSAGES.get(status) or exc.description or exc.name
        response, status = error_response(code, message, status)
        if getattr(exc, "valid_methods", None):
            response.headers["Allow"] = ", ".join(exc.valid_methods)
        return response, status

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        logger.error("Unhandled exception: %s", exc, exc_info=exc)
        message = "Internal server error" if not app.debug else str(exc)
        return error_response("INTERNAL_ERROR", message, 500)
