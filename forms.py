from flask_wtf import FlaskForm
from wtforms import (
    DateTimeField,
    IntegerField,
    SelectField,
    StringField,
    TextAreaField,
)
from wtforms.validators import (
    DataRequired,
    Email,
    InputRequired,
    Length,
    NumberRange,
    Optional,
)

from database import MAX_ID
from models.task import TaskPriority, TaskStatus
from models.user import UserRole
from utils.dates import DATE_FORMAT

ROLE_CHOICES = [(role.value, role.value) for role in UserRole]
PRIORITY_CHOICES = [(priority.value, priority.value) for priority in TaskPriority]
STATUS_CHOICES = [(status.value, status.value) for status in TaskStatus]

DATE_MESSAGE = "Dates must use the YYYY-MM-DD format."
ID_MESSAGE = "Ids must be between 0 and 9223372036854775807."


def id_range():
    return NumberRange(min=0, max=MAX_ID, message=ID_MESSAGE)


class ApiForm(FlaskForm):
    """Base form for JSON payloads: no CSRF token, formdata supplied explicitly."""

    class Meta:
        csrf = False


# Users
# ------------------------------
class UserForm(ApiForm):
    full_name = StringField(
        "Full name",
        validators=[
            DataRequired(message="Full name is required."),
            Length(max=255, message="Full name must be 255 characters or fewer."),
        ],
    )
    email = StringField(
        "Email",
        validators=[
            DataRequired(message="Email is required."),
            Email(message="Email address is invalid."),
            Length(max=255),
        ],
    )
    role = SelectField(
        "Role",
        choices=ROLE_CHOICES,
        default=UserRole.USER.value,
    )


class UserUpdateForm(UserForm):
    # Updates overwrite every field, so the role cannot fall back to a default.
    role = SelectField(
        "Role",
        choices=ROLE_CHOICES,
        validators=[InputRequired(message="Role is required.")],
    )


class UserSearchForm(ApiForm):
    name = StringField("Name", [Optional()])
    email = StringField("Email", [Optional()])


# Projects
# ------------------------------
class ProjectForm(ApiForm):
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Name is required."),
            Length(max=255, message="Name must be 255 characters or fewer."),
        ],
    )
    description = TextAreaField("Description")
    start_date = DateTimeField(
        "Start date",
        format=DATE_FORMAT,
        validators=[DataRequired(message=DATE_MESSAGE)],
    )
    end_date = DateTimeField(
        "End date",
        format=DATE_FORMAT,
        validators=[DataRequired(message=DATE_MESSAGE)],
    )
    manager_id = IntegerField(
        "Manager",
        validators=[InputRequired(message="Manager id is required."), id_range()],
    )


class ProjectSearchForm(ApiForm):
    name = StringField("Name", [Optional()])
    manager_id = IntegerField("Manager", [Optional(), id_range()])


# Tasks
# ------------------------------
class TaskForm(ApiForm):
    title = StringField(
        "Title",
        validators=[
            DataRequired(message="Title is required."),
            Length(max=255, message="Title must be 255 characters or fewer."),
        ],
    )
    description = TextAreaField("Description")
    priority = SelectField(
        "Priority",
        choices=PRIORITY_CHOICES,
        default=TaskPriority.MEDIUM.value,
    )
    status = SelectField(
        "Status",
        choices=STATUS_CHOICES,
        default=TaskStatus.NEW.value,
    )
    assignee_id = IntegerField(
        "Assignee",
        validators=[InputRequired(message="Assignee id is required."), id_range()],
    )
    project_id = IntegerField(
        "Project",
        validators=[InputRequired(message="Project id is required."), id_range()],
    )


class TaskUpdateForm(TaskForm):
    priority = SelectField(
        "Priority",
        choices=PRIORITY_CHOICES,
        validators=[InputRequired(message="Priority is required.")],
    )
    status = SelectField(
        "Status",
        choices=STATUS_CHOICES,
        validators=[InputRequired(message="Status is required.")],
    )


class TaskSearchForm(ApiForm):
    title = StringField("Title", [Optional()])
    status = SelectField("Status", choices=STATUS_CHOICES, validators=[Optional()])
    priority = SelectField("Priority", choices=PRIORITY_CHOICES, validators=[Optional()])
    assignee_id = IntegerField("Assignee", [Optional(), id_range()])
    project_id = IntegerField("Project", [Optional(), id_range()])
