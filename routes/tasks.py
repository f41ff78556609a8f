"""Task management blueprint."""
from __future__ import annotations

from flask import Blueprint, request

from database import db
from routes import get_queries, json_success, request_payload
from services.queries import serialize_all
from services.request_mapper import map_create_task, map_task_search, map_update_task

tasks_bp = Blueprint("tasks", __name__, url_prefix="/tasks")

SEARCH_QUERIES = {
    "title": "search_tasks_by_title",
    "status": "search_tasks_by_status",
    "priority": "search_tasks_by_priority",
    "assignee_id": "search_tasks_by_assignee",
    "project_id": "search_tasks_by_project",
}


@tasks_bp.route("", methods=["GET"])
def list_tasks():
    return json_success(tasks=serialize_all(get_queries().list_tasks()))


@tasks_bp.route("", methods=["POST"])
def create_task():
    params = map_create_task(request_payload())
    task = get_queries().create_task(params)
    db.session.commit()
    return json_success(201, task=task.to_dict())


@tasks_bp.route("/search", methods=["GET"])
def search_tasks():
    """Search tasks by one of title, status, priority, assignee_id or project_id."""
    criterion = map_task_search(request.args)
    search = getattr(get_queries(), SEARCH_QUERIES[criterion.field])
    return json_success(tasks=serialize_all(search(criterion.value)))


@tasks_bp.route("/<id:task_id>", methods=["GET"])
def get_task(task_id: int):
    return json_success(task=get_queries().get_task(task_id).to_dict())


@tasks_bp.route("/<id:task_id>", methods=["PUT"])
def update_task(task_id: int):
    params = map_update_task(task_id, request_payload())
    task = get_queries().update_task(params)
    db.session.commit()
    return json_success(task=task.to_dict())


@tasks_bp.route("/<id:task_id>", methods=["DELETE"])
def delete_task(task_id: int):
    get_queries().delete_task(task_id)
    db.session.commit()
    return "", 204
