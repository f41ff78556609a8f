"""Liveness check against the relational store."""
from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text

from database import db, statement_deadline
from routes import json_success

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz", methods=["GET"])
def healthz():
    with statement_deadline(db.session, current_app.config.get("QUERY_TIMEOUT_SECONDS")):
        db.session.execute(text("SELECT 1"))
    return json_success(status="ok")
