"""A project groups tasks under a managing user.

``end_date`` is expected to fall on or after ``start_date``; that is left
to the caller.
"""
from __future__ import annotations

from database import ID_TYPE, db
from utils.dates import isoformat


class Project(db.Model):
    __tablename__ = "projects"

    id = db.Column(ID_TYPE, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    manager_id = db.Column(ID_TYPE, nullable=False, index=True)

    def __repr__(self):
        return f"<Project {self.name}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "start_date": isoformat(self.start_date),
            "end_date": isoformat(self.end_date),
            "manager_id": self.manager_id,
        }
