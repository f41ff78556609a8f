"""Shared helpers for route blueprints."""

from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.routing import IntegerConverter

from database import MAX_ID, db
from services.errors import NotFoundError, RequestValidationError
from services.queries import Queries

__all__ = [
    "IdConverter",
    "get_queries",
    "json_error",
    "json_success",
    "register_error_handlers",
    "request_payload",
]


class IdConverter(IntegerConverter):
    """Path segment holding a 64-bit id; larger values do not match the route."""

    def __init__(self, url_map, *args, **kwargs):
        kwargs.setdefault("max", MAX_ID)
        super().__init__(url_map, *args, **kwargs)


def get_queries() -> Queries:
    """Build the query layer for the current request."""
    return Queries(db.session, timeout=current_app.config.get("QUERY_TIMEOUT_SECONDS"))


def request_payload():
    """Decoded JSON body, or None when the body is missing or not JSON."""
    return request.get_json(silent=True)


def json_success(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def json_error(message: str, *, status: int = 400, errors: dict | None = None):
    """Return a JSON error response."""
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def _handle_validation_error(error: RequestValidationError):
    return json_error(error.message, status=400, errors=error.errors)


def _handle_not_found(error: NotFoundError):
    db.session.rollback()
    return json_error(str(error), status=404)


def _handle_store_error(error: SQLAlchemyError):
    db.session.rollback()
    logging.exception("Database error while handling %s %s", request.method, request.path)
    return json_error("An unexpected database error occurred.", status=500)


def _handle_http_error(error: HTTPException):
    return json_error(error.description or error.name, status=error.code or 500)


def register_error_handlers(app: Flask) -> None:
    """Translate query-layer failures into JSON responses for every blueprint."""
    app.register_error_handler(RequestValidationError, _handle_validation_error)
    app.register_error_handler(NotFoundError, _handle_not_found)
    app.register_error_handler(SQLAlchemyError, _handle_store_error)
    app.register_error_handler(HTTPException, _handle_http_error)
