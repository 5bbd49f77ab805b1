from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyCompleteError,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    MissingConfigurationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(exc: DomainError):
    """Translate a domain error into a JSON response."""

    message = str(exc)
    if isinstance(exc, ValidationError):
        body = {"message": message}
        if exc.field:
            body["errors"] = {exc.field: [message]}
        return jsonify(body), 422
    if isinstance(exc, AlreadyCompleteError):
        return jsonify({"message": message}), 409
    if isinstance(exc, MissingConfigurationError):
        return jsonify({"message": message}), 503
    if isinstance(exc, NotFoundError):
        return jsonify({"message": message}), 404
    if isinstance(exc, AuthenticationError):
        return jsonify({"message": message}), 401
    if isinstance(exc, AuthorizationError):
        return jsonify({"message": message}), 403
    return jsonify({"message": message}), 400


def server_error(context: str):
    logger.exception("Unhandled error in %s", context)
    return jsonify({"message": "Internal server error"}), 500


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Unauthenticated."}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"message": "Unauthenticated."}), 401

        if session.get("role") != Role.ADMIN.value:
            return jsonify({"message": "This action is unauthorized."}), 403

        return view(*args, **kwargs)

    return wrapper
