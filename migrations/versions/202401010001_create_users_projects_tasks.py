"""Create users, projects and tasks tables (idempotent)."""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202401010001_initial"
down_revision = None
branch_labels = None
depends_on = None


# 64-bit ids; SQLite only autoincrements a column declared INTEGER.
ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

TASK_PRIORITIES = ("low", "medium", "high")
TASK_STATUSES = ("New", "Pending", "InProgress", "Done")


def _in_clause(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(value) for value in values)})"


def upgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing = set(inspector.get_table_names())

    if "users" not in existing:
        op.create_table(
            "users",
            sa.Column("id", ID_TYPE, nullable=False),
            sa.Column("full_name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column(
                "registration_date",
                sa.DateTime(),
                nullable=False,
                server_default=sa.func.now(),
            ),
            sa.Column("role", sa.String(length=20), nullable=False, server_default="user"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("email", name="uq_users_email"),
        )

    if "projects" not in existing:
        op.create_table(
            "projects",
            sa.Column("id", ID_TYPE, nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False, server_default=""),
            sa.Column("start_date", sa.DateTime(), nullable=False),
            sa.Column("end_date", sa.DateTime(), nullable=False),
            sa.Column("manager_id", ID_TYPE, nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_projects_manager_id", "projects", ["manager_id"])

    if "tasks" not in existing:
        op.create_table(
            "tasks",
            sa.Column("id", ID_TYPE, nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False, server_default=""),
            sa.Column("priority", sa.String(length=20), nullable=False, server_default="medium"),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="New"),
            sa.Column("assignee_id", ID_TYPE, nullable=False),
            sa.Column("project_id", ID_TYPE, nullable=False),
            sa.Column(
                "creation_date",
                sa.DateTime(),
                nullable=False,
                server_default=sa.func.now(),
            ),
            sa.Column("completion_date", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.CheckConstraint(_in_clause("priority", TASK_PRIORITIES), name="ck_tasks_priority"),
            sa.CheckConstraint(_in_clause("status", TASK_STATUSES), name="ck_tasks_status"),
        )
        op.create_index("ix_tasks_assignee_id", "tasks", ["assignee_id"])
        op.create_index("ix_tasks_project_id", "tasks", ["project_id"])


def downgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing = set(inspector.get_table_names())

    if "tasks" in existing:
        op.drop_index("ix_tasks_project_id", table_name="tasks")
        op.drop_index("ix_tasks_assignee_id", table_name="tasks")
        op.drop_table("tasks")
    if "projects" in existing:
        op.drop_index("ix_projects_manager_id", table_name="projects")
        op.drop_table("projects")
    if "users" in existing:
        op.drop_table("users")
