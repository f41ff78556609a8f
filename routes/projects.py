"""Project management blueprint."""
from __future__ import annotations

from flask import Blueprint, request

from database import db
from routes import get_queries, json_success, request_payload
from services.queries import serialize_all
from services.request_mapper import (
    map_create_project,
    map_project_search,
    map_update_project,
)

projects_bp = Blueprint("projects", __name__, url_prefix="/projects")


@projects_bp.route("", methods=["GET"])
def list_projects():
    return json_success(projects=serialize_all(get_queries().list_projects()))


@projects_bp.route("", methods=["POST"])
def create_project():
    params = map_create_project(request_payload())
    project = get_queries().create_project(params)
    db.session.commit()
    return json_success(201, project=project.to_dict())


@projects_bp.route("/search", methods=["GET"])
def search_projects():
    """Search projects by ``name`` substring or exact ``manager_id``."""
    criterion = map_project_search(request.args)
    queries = get_queries()
    if criterion.field == "name":
        projects = queries.search_projects_by_name(criterion.value)
    else:
        projects = queries.search_projects_by_manager(criterion.value)
    return json_success(projects=serialize_all(projects))


@projects_bp.route("/<id:project_id>", methods=["GET"])
def get_project(project_id: int):
    return json_success(project=get_queries().get_project(project_id).to_dict())


@projects_bp.route("/<id:project_id>", methods=["PUT"])
def update_project(project_id: int):
    params = map_update_project(project_id, request_payload())
    project = get_queries().update_project(params)
    db.session.commit()
    return json_success(project=project.to_dict())


@projects_bp.route("/<id:project_id>", methods=["DELETE"])
def delete_project(project_id: int):
    get_queries().delete_project(project_id)
    db.session.commit()
    return "", 204


@projects_bp.route("/<id:project_id>/tasks", methods=["GET"])
def list_project_tasks(project_id: int):
    return json_success(tasks=serialize_all(get_queries().get_project_tasks(project_id)))
