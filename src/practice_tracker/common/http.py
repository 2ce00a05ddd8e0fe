from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, ValidationError
from .datetime_utils import parse_iso_date

log = logging.getLogger(__name__)


def login_required(view):
    """Session is populated by the sign-in flow, which lives outside this package."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.MEMBER


def fail(message: str, status: int, **extra: Any):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def domain_error_response(e: Exception):
    """Translate domain exceptions into JSON responses.

    Unexpected exceptions are logged with their traceback and answered 500.
    """

    if isinstance(e, ConflictError):
        return fail(str(e), 409, weekdays=e.weekdays, weekday_names=e.weekday_names)
    if isinstance(e, AuthorizationError):
        return fail(str(e), 403)
    if isinstance(e, ValidationError):
        return fail(str(e), 400)

    log.exception("unhandled error on %s %s", request.method, request.path)
    return fail("Internal server error", 500)


def arg_date(name: str, default: Optional[date] = None) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date for {name}: {value!r}") from e


def body_date(payload: dict, name: str) -> date:
    value = payload.get(name)
    if not value:
        raise ValidationError(f"{name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid date for {name}: {value!r}") from e


def body_datetime(payload: dict, name: str) -> Optional[datetime]:
    value = payload.get(name)
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp for {name}: {value!r}") from e
    if parsed.tzinfo is not None:
        raise ValidationError(f"{name} must be a local time without a UTC offset")
    return parsed


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
