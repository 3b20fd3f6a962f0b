from __future__ import annotations

import logging
from typing import Optional, Tuple

from flask import Flask, jsonify, request, session

from ..common.validators import optional_text
from ..container import Container
from ..core.constants import LOCATION_MAX_LENGTH
from ..core.exceptions import (
    AlreadyStartedError,
    AuthenticationError,
    DomainError,
    EndFailedError,
    NoUserError,
    NotStartedError,
    StartFailedError,
    StoreError,
    StoreNotFoundError,
    ValidationError,
)
from ..location.address import format_address

log = logging.getLogger(__name__)


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def _location_from_body(body) -> Optional[str]:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    if body.get("location") is not None:
        return optional_text(body.get("location"), "location", max_len=LOCATION_MAX_LENGTH)

    address = body.get("address")
    if address is None:
        return None
    if not isinstance(address, dict):
        raise ValidationError("address must be an object")
    return optional_text(format_address(address), "address", max_len=LOCATION_MAX_LENGTH)


def _error_status(exc: DomainError) -> Tuple[int, str]:
    """Map every domain error to (HTTP status, user-visible message)."""
    if isinstance(exc, (NoUserError, AuthenticationError)):
        return 401, str(exc)
    if isinstance(exc, ValidationError):
        return 400, str(exc)
    if isinstance(exc, AlreadyStartedError):
        return 409, "Shift already started"
    if isinstance(exc, NotStartedError):
        return 409, "Shift has not started yet"
    if isinstance(exc, StartFailedError):
        return 502, "Error starting shift"
    if isinstance(exc, EndFailedError):
        if isinstance(exc.cause, StoreNotFoundError):
            return 404, "Shift record no longer exists"
        return 502, "Error ending shift"
    if isinstance(exc, StoreError):
        return 502, "Attendance service is unavailable"
    return 400, str(exc)


def _fail(exc: DomainError):
    status, message = _error_status(exc)
    return jsonify({"success": False, "message": message}), status


def register(app: Flask, container: Container) -> None:
    def current_manager():
        return container.sessions.get(session.get("user_id"))

    @app.route("/api/session", methods=["POST"], endpoint="open_session")
    def open_session():
        try:
            user_id = container.identity.resolve_user_id(_bearer_token())
            manager = container.sessions.open_session(user_id)
        except StoreError as e:
            log.error("Could not check open shifts at login: %s", e)
            return _fail(e)
        except DomainError as e:
            return _fail(e)

        session["user_id"] = user_id
        return jsonify({"success": True, "message": "Signed in", "shift": manager.current_state().to_dict()}), 200

    @app.route("/api/session", methods=["DELETE"], endpoint="close_session")
    def close_session():
        container.sessions.close_session(session.get("user_id"))
        session.clear()
        return jsonify({"success": True, "message": "Signed out"}), 200

    @app.route("/api/shift", methods=["GET"], endpoint="shift_state")
    def shift_state():
        try:
            manager = current_manager()
        except DomainError as e:
            return _fail(e)
        return jsonify({"success": True, "message": "", "shift": manager.current_state().to_dict()}), 200

    @app.route("/api/shift/start", methods=["POST"], endpoint="start_shift")
    def start_shift():
        body = request.get_json(silent=True) or {}
        try:
            manager = current_manager()
            label = _location_from_body(body)
            manager.start_shift(session.get("user_id"), label)
        except StartFailedError as e:
            log.error("Error starting shift: %s", e.cause)
            return _fail(e)
        except DomainError as e:
            return _fail(e)

        return jsonify(
            {"success": True, "message": "Shift started successfully", "shift": manager.current_state().to_dict()}
        ), 201

    @app.route("/api/shift/end", methods=["POST"], endpoint="end_shift")
    def end_shift():
        try:
            manager = current_manager()
            manager.end_shift()
        except EndFailedError as e:
            log.error("Error ending shift: %s", e.cause)
            return _fail(e)
        except DomainError as e:
            return _fail(e)

        return jsonify(
            {"success": True, "message": "Shift ended successfully", "shift": manager.current_state().to_dict()}
        ), 200
