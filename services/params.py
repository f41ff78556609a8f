"""Typed parameters accepted by the query layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CreateUserParams:
    full_name: str
    email: str
    role: str


@dataclass(frozen=True)
class UpdateUserParams:
    id: int
    full_name: str
    email: str
    role: str


@dataclass(frozen=True)
class CreateProjectParams:
    name: str
    description: str
    start_date: datetime
    end_date: datetime
    manager_id: int


@dataclass(frozen=True)
class UpdateProjectParams:
    id: int
    name: str
    description: str
    start_date: datetime
    end_date: datetime
    manager_id: int


@dataclass(frozen=True)
class CreateTaskParams:
    title: str
    description: str
    priority: str
    status: str
    assignee_id: int
    project_id: int
    completion_date: datetime | None = None


@dataclass(frozen=True)
class UpdateTaskParams:
    id: int
    title: str
    description: str
    priority: str
    status: str
    assignee_id: int
    project_id: int
    completion_date: datetime | None = None


__all__ = [
    "CreateProjectParams",
    "CreateTaskParams",
    "CreateUserParams",
    "UpdateProjectParams",
    "UpdateTaskParams",
    "UpdateUserParams",
]
