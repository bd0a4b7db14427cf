"""Shared blueprint helpers: response envelope, body validation, ownership lookups."""

import logging

from flask import jsonify, request

from learnpath.core.exceptions import BadRequestError, NotFoundError
from learnpath.models import db

logger = logging.getLogger(__name__)


def ok(data=None, status=200, **extra):
    """Return the standard success envelope: {"success": true, "data": ...}."""
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body), status


def validate_body(schema):
    """Parse the JSON body with a pydantic ``schema``.

    Returns the validated model. A missing or non-object body is a 400;
    field errors propagate as pydantic's ValidationError and are turned
    into a 422 by the central error handler.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")
    return schema.model_validate(payload)


def get_owned_or_404(model, pk, user_id, label=None):
    """Fetch ``model`` by primary key, scoped to ``user_id``.

    Soft-deleted rows and rows owned by someone else are both reported as
    not found.
    """
    label = label or model.__name__
    obj = db.session.get(model, pk)
    if obj is None or obj.user_id != user_id or getattr(obj, "deleted_at", None) is not None:
        raise NotFoundError(f"{label} not found")
    return obj


def parse_int_list(raw, field):
    """Parse "1,2,3" into [1, 2, 3]; blank items are ignored."""
    if raw is None:
        return None
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise BadRequestError(f"{field} must be a comma-separated list of integers")
