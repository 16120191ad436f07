"""Helpers shared by the JSON controllers."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from flask import Flask, jsonify, session

from ..core.auth import AuthContext
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConcurrentUpdateError,
    NotFoundError,
    SheetLockedError,
    ValidationError,
)


def current_auth() -> AuthContext:
    """Authorization context from the session set up by the login layer."""
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        raise AuthenticationError("Please log in to continue")
    try:
        return AuthContext(user_id=str(user_id), role=Role(role))
    except ValueError:
        raise AuthenticationError("Unknown role in session")


def to_json(value: Any) -> Any:
    """Make dataclasses, Decimals, dates and enums JSON friendly."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (SheetLockedError, 409),
    (ConcurrentUpdateError, 409),
    (ValidationError, 400),
)


def register_error_handlers(app: Flask) -> None:
    for exc_type, status in _STATUS_BY_ERROR:

        def handler(e, status=status):
            return jsonify({"error": str(e)}), status

        app.register_error_handler(exc_type, handler)
