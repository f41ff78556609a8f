"""A task represent an objective that needs to be completed

A Task belongs to a Project and is assigned to a User
A Task records when it was created
A Task only has a completion date once it is finished

"""
from __future__ import annotations

from enum import StrEnum

from database import ID_TYPE, db
from utils.dates import isoformat, utcnow


class TaskPriority(StrEnum):
    """Closed set of task priorities, stored by value."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(StrEnum):
    """Lifecycle states for tasks, stored by value."""

    NEW = "New"
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(ID_TYPE, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    priority = db.Column(db.String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    status = db.Column(db.String(20), nullable=False, default=TaskStatus.NEW.value)
    assignee_id = db.Column(ID_TYPE, nullable=False, index=True)
    project_id = db.Column(ID_TYPE, nullable=False, index=True)
    creation_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    completion_date = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.CheckConstraint(_in_clause("priority", TaskPriority), name="ck_tasks_priority"),
        db.CheckConstraint(_in_clause("status", TaskStatus), name="ck_tasks_status"),
    )

    def __repr__(self):
        return f"<Task {self.id}>"

    @property
    def priority_enum(self) -> TaskPriority:
        """Return the priority as an enum value."""
        return TaskPriority(self.priority)

    @property
    def status_enum(self) -> TaskStatus:
        """Return the status as an enum value."""
        return TaskStatus(self.status)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "assignee_id": self.assignee_id,
            "project_id": self.project_id,
            "creation_date": isoformat(self.creation_date),
            "completion_date": isoformat(self.completion_date),
        }
