"""User management blueprint."""
from __future__ import annotations

from flask import Blueprint, request

from database import db
from routes import get_queries, json_success, request_payload
from services.queries import serialize_all
from services.request_mapper import map_create_user, map_update_user, map_user_search

users_bp = Blueprint("users", __name__, url_prefix="/users")


@users_bp.route("", methods=["GET"])
def list_users():
    return json_success(users=serialize_all(get_queries().list_users()))


@users_bp.route("", methods=["POST"])
def create_user():
    params = map_create_user(request_payload())
    user = get_queries().create_user(params)
    db.session.commit()
    return json_success(201, user=user.to_dict())


@users_bp.route("/search", methods=["GET"])
def search_users():
    """Search users by ``name`` or ``email`` (name wins when both are given)."""
    criterion = map_user_search(request.args)
    queries = get_queries()
    if criterion.field == "name":
        users = queries.search_users_by_name(criterion.value)
    else:
        users = queries.search_users_by_email(criterion.value)
    return json_success(users=serialize_all(users))


@users_bp.route("/<id:user_id>", methods=["GET"])
def get_user(user_id: int):
    return json_success(user=get_queries().get_user(user_id).to_dict())


@users_bp.route("/<id:user_id>", methods=["PUT"])
def update_user(user_id: int):
    params = map_update_user(user_id, request_payload())
    user = get_queries().update_user(params)
    db.session.commit()
    return json_success(user=user.to_dict())


@users_bp.route("/<id:user_id>", methods=["DELETE"])
def delete_user(user_id: int):
    get_queries().delete_user(user_id)
    db.session.commit()
    return "", 204


@users_bp.route("/<id:user_id>/tasks", methods=["GET"])
def list_user_tasks(user_id: int):
    """Tasks assigned to the user, oldest first."""
    return json_success(tasks=serialize_all(get_queries().get_user_tasks(user_id)))
