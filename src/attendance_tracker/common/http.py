from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    DomainError,
    EmptyResultError,
    IntegrityViolation,
    NotFoundError,
    UpstreamFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_CODES = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (EmptyResultError, 404),
    (IntegrityViolation, 409),
    (UpstreamFailure, 502),
)


def error_response(message: str, status_code: int):
    return jsonify({"success": False, "message": message}), status_code


def status_code_for(error: DomainError) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(error, exc_type):
            return code
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        code = status_code_for(error)
        if code >= 500:
            logger.error("Upstream failure while serving request: %s", error)
        return error_response(str(error), code)


def login_required(view):
    """Identity is put in the session by the external auth layer."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please sign in to continue", 401)
        if session.get("role") != Role.MANAGER.value:
            return error_response("Managers only", 403)
        return view(*args, **kwargs)

    return wrapper
