"""CRUD and search queries for users, projects and tasks.

A ``Queries`` object wraps the SQLAlchemy session of the current request.
It never commits: the route that owns the request decides whether the unit
of work is committed or rolled back. Every statement is issued under the
request deadline (see ``database.statement_deadline``).

Store failures propagate as ``sqlalchemy.exc.SQLAlchemyError``. The only
translation performed here is "no matching row" on a single-row lookup,
update or delete, which becomes ``NotFoundError``.
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from database import statement_deadline
from models.project import Project
from models.task import Task
from models.user import User
from services.errors import NotFoundError
from services.params import (
    CreateProjectParams,
    CreateTaskParams,
    CreateUserParams,
    UpdateProjectParams,
    UpdateTaskParams,
    UpdateUserParams,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", User, Project, Task)

USER_ORDER = (User.full_name.asc(), User.id.asc())
PROJECT_ORDER = (Project.start_date.asc(), Project.id.asc())
TASK_ORDER = (Task.creation_date.asc(), Task.id.asc())


class Queries:
    """Parameterized statements for the three entities."""

    def __init__(self, session: Session, timeout: float | None = None):
        self.session = session
        self.timeout = timeout

    # Shared helpers
    # ------------------------------
    def _deadline(self):
        return statement_deadline(self.session, self.timeout)

    def _scalars(self, statement) -> list:
        with self._deadline():
            return list(self.session.scalars(statement).all())

    def _get(self, model: type[ModelT], entity_id: int) -> ModelT:
        with self._deadline():
            record = self.session.get(model, entity_id)
        if record is None:
            raise NotFoundError(model.__name__, entity_id)
        return record

    def _insert(self, record: ModelT) -> ModelT:
        with self._deadline():
            self.session.add(record)
            self.session.flush()
            self.session.refresh(record)
        return record

    def _update(self, model: type[ModelT], entity_id: int, values: dict) -> ModelT:
        record = self._get(model, entity_id)
        for attribute, value in values.items():
            setattr(record, attribute, value)
        with self._deadline():
            try:
                self.session.flush()
            except StaleDataError:
                # The row was deleted after it was read.
                raise NotFoundError(model.__name__, entity_id) from None
            self.session.refresh(record)
        return record

    def _delete(self, model: type[ModelT], entity_id: int) -> None:
        record = self._get(model, entity_id)
        with self._deadline():
            self.session.delete(record)
            self.session.flush()
        logger.debug("Deleted %s %s", model.__name__, entity_id)

    # Users
    # ------------------------------
    def create_user(self, params: CreateUserParams) -> User:
        return self._insert(
            User(full_name=params.full_name, email=params.email, role=str(params.role))
        )

    def get_user(self, user_id: int) -> User:
        return self._get(User, user_id)

    def list_users(self) -> list[User]:
        return self._scalars(select(User).order_by(*USER_ORDER))

    def update_user(self, params: UpdateUserParams) -> User:
        return self._update(
            User,
            params.id,
            {"full_name": params.full_name, "email": params.email, "role": str(params.role)},
        )

    def delete_user(self, user_id: int) -> None:
        self._delete(User, user_id)

    def search_users_by_name(self, name: str) -> list[User]:
        statement = (
            select(User)
            .where(User.full_name.icontains(name, autoescape=True))
            .order_by(*USER_ORDER)
        )
        return self._scalars(statement)

    def search_users_by_email(self, email: str) -> list[User]:
        statement = (
            select(User)
            .where(User.email.icontains(email, autoescape=True))
            .order_by(*USER_ORDER)
        )
        return self._scalars(statement)

    def get_user_tasks(self, assignee_id: int) -> list[Task]:
        return self.search_tasks_by_assignee(assignee_id)

    # Projects
    # ------------------------------
    def create_project(self, params: CreateProjectParams) -> Project:
        return self._insert(
            Project(
                name=params.name,
                description=params.description,
                start_date=params.start_date,
                end_date=params.end_date,
                manager_id=params.manager_id,
            )
        )

    def get_project(self, project_id: int) -> Project:
        return self._get(Project, project_id)

    def list_projects(self) -> list[Project]:
        return self._scalars(select(Project).order_by(*PROJECT_ORDER))

    def update_project(self, params: UpdateProjectParams) -> Project:
        return self._update(
            Project,
            params.id,
            {
                "name": params.name,
                "description": params.description,
                "start_date": params.start_date,
                "end_date": params.end_date,
                "manager_id": params.manager_id,
            },
        )

    def delete_project(self, project_id: int) -> None:
        self._delete(Project, project_id)

    def search_projects_by_name(self, name: str) -> list[Project]:
        statement = (
            select(Project)
            .where(Project.name.icontains(name, autoescape=True))
            .order_by(*PROJECT_ORDER)
        )
        return self._scalars(statement)

    def search_projects_by_manager(self, manager_id: int) -> list[Project]:
        statement = (
            select(Project).where(Project.manager_id == manager_id).order_by(*PROJECT_ORDER)
        )
        return self._scalars(statement)

    def get_project_tasks(self, project_id: int) -> list[Task]:
        return self.search_tasks_by_project(project_id)

    # Tasks
    # ------------------------------
    def create_task(self, params: CreateTaskParams) -> Task:
        return self._insert(
            Task(
                title=params.title,
                description=params.description,
                priority=str(params.priority),
                status=str(params.status),
                assignee_id=params.assignee_id,
                project_id=params.project_id,
                completion_date=params.completion_date,
            )
        )

    def get_task(self, task_id: int) -> Task:
        return self._get(Task, task_id)

    def list_tasks(self) -> list[Task]:
        return self._scalars(select(Task).order_by(*TASK_ORDER))

    def update_task(self, params: UpdateTaskParams) -> Task:
        return self._update(
            Task,
            params.id,
            {
                "title": params.title,
                "description": params.description,
                "priority": str(params.priority),
                "status": str(params.status),
                "assignee_id": params.assignee_id,
                "project_id": params.project_id,
                "completion_date": params.completion_date,
            },
        )

    def delete_task(self, task_id: int) -> None:
        self._delete(Task, task_id)

    def search_tasks_by_title(self, title: str) -> list[Task]:
        statement = (
            select(Task).where(Task.title.icontains(title, autoescape=True)).order_by(*TASK_ORDER)
        )
        return self._scalars(statement)

    def search_tasks_by_status(self, status: str) -> list[Task]:
        return self._scalars(select(Task).where(Task.status == str(status)).order_by(*TASK_ORDER))

    def search_tasks_by_priority(self, priority: str) -> list[Task]:
        return self._scalars(
            select(Task).where(Task.priority == str(priority)).order_by(*TASK_ORDER)
        )

    def search_tasks_by_assignee(self, assignee_id: int) -> list[Task]:
        return self._scalars(
            select(Task).where(Task.assignee_id == assignee_id).order_by(*TASK_ORDER)
        )

    def search_tasks_by_project(self, project_id: int) -> list[Task]:
        return self._scalars(
            select(Task).where(Task.project_id == project_id).order_by(*TASK_ORDER)
        )


def serialize_all(records: Sequence) -> list[dict]:
    return [record.to_dict() for record in records]


__all__ = ["Queries", "serialize_all"]
