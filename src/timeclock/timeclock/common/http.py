"""JSON helpers shared by the controllers: bearer auth guards, error mapping, query parsing."""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AlreadyClockedIn,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InconsistentSequence,
    InvalidConfiguration,
    NoActiveSession,
    NotFoundError,
    PeriodBeforeAnchor,
    ValidationError,
)
from ..users.model import SessionUser
from ..users.service import AuthService
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

# Most specific first: the clock conflicts subclass InconsistentSequence.
ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (AlreadyClockedIn, 409),
    (NoActiveSession, 409),
    (InconsistentSequence, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PeriodBeforeAnchor, 422),
    (InvalidConfiguration, 422),
]


def status_for(error: DomainError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": type(e).__name__, "message": str(e)}), status_for(e)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.name, "message": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(e) if app.config.get("DEBUG") else "Internal server error"
        return jsonify({"error": "InternalError", "message": message}), 500


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def session_guards(auth: AuthService):
    """Build (login_required, admin_required) decorators bound to `auth`."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.session_user = auth.resolve(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.session_user = auth.resolve(bearer_token())
            if not g.session_user.is_admin:
                raise AuthorizationError("Admin access required")
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def current_user() -> SessionUser:
    return g.session_user


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str, default: Optional[date] = None) -> date:
    value = request.args.get(name)
    if not value:
        if default is None:
            raise ValidationError(f"Query parameter '{name}' is required")
        return default
    return parse_iso_date(value)


def query_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer")
