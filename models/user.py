""" Represents a user in the system.

Users are referenced by Projects (as manager) and by Tasks (as assignee).
Those references are plain integer columns: deleting a User leaves them
in place.

"""
from __future__ import annotations

from enum import StrEnum

from database import ID_TYPE, db
from utils.dates import isoformat, utcnow


class UserRole(StrEnum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(ID_TYPE, primary_key=True)
    full_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    registration_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    role = db.Column(db.String(20), nullable=False, default=UserRole.USER.value)

    def __repr__(self):
        return f"<User {self.id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "registration_date": isoformat(self.registration_date),
            "role": self.role,
        }
