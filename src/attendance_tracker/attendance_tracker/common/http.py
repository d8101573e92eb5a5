"""JSON plumbing shared by the API controllers."""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError, StoreError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.INVALID_FIELD: 400,
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONSTRAINT_VIOLATION: 409,
    ErrorKind.STORE_UNAVAILABLE: 503,
    ErrorKind.INTERNAL: 500,
}


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def pick(data: dict, *names: str) -> Any:
    """First non-empty value among ``names`` (camelCase name first, then aliases)."""

    for name in names:
        value = data.get(name)
        if value is not None and value != "":
            return value
    return None


def error_payload(kind: str, message: str) -> dict:
    return {"error": kind, "message": message}


def status_for(e: DomainError) -> int:
    return STATUS_BY_KIND.get(e.kind, 500)


def error_response(e: DomainError):
    status = status_for(e)
    if isinstance(e, StoreError):
        # Driver detail stays in the log.
        if e.kind == ErrorKind.STORE_UNAVAILABLE:
            message = "Attendance store is unavailable"
        else:
            message = "Attendance store rejected the write"
    else:
        message = str(e)
    return jsonify(error_payload(e.kind.value, message)), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StoreError) or status_for(e) >= 500:
            logger.error("%s on %s %s: %s", e.kind.value, request.method, request.path, e)
        return error_response(e)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        kind = ErrorKind.NOT_FOUND.value if e.code == 404 else (e.name or "HTTPError").replace(" ", "")
        return jsonify(error_payload(kind, e.description or e.name)), e.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(error_payload(ErrorKind.INTERNAL.value, "Internal server error")), 500
