"""Map untyped request payloads onto query parameters.

JSON bodies are flattened into form data and validated with the WTForms
forms in ``forms.py``; query-string searches go through the search forms.
``completion_date`` is handled here because it accepts several shapes:

* absent, ``null`` or ``""``: no completion date
* ``"YYYY-MM-DD"``: that day at midnight
* ``{"time": null}``: no completion date
* ``{"time": "YYYY-MM-DD", "valid": true|false}``: the date when ``valid``
  is true (or omitted), no date otherwise

Anything else is rejected with ``RequestValidationError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from werkzeug.datastructures import MultiDict

from forms import (
    ProjectForm,
    ProjectSearchForm,
    TaskForm,
    TaskSearchForm,
    TaskUpdateForm,
    UserForm,
    UserSearchForm,
    UserUpdateForm,
)
from services.errors import RequestValidationError
from services.params import (
    CreateProjectParams,
    CreateTaskParams,
    CreateUserParams,
    UpdateProjectParams,
    UpdateTaskParams,
    UpdateUserParams,
)
from utils.dates import parse_date

COMPLETION_DATE_FIELD = "completion_date"
COMPLETION_DATE_MESSAGE = (
    "completion_date must be empty, a YYYY-MM-DD string or an object with a 'time' key."
)

USER_SEARCH_FIELDS = ("name", "email")
PROJECT_SEARCH_FIELDS = ("name", "manager_id")
TASK_SEARCH_FIELDS = ("title", "status", "priority", "assignee_id", "project_id")


@dataclass(frozen=True)
class SearchCriterion:
    """A single search filter: ``field`` names the criterion, ``value`` is typed."""

    field: str
    value: Any


def _require_object(payload: Any) -> Mapping[str, Any]:
    if payload is None:
        raise RequestValidationError({}, "A JSON object body is required.")
    if not isinstance(payload, Mapping):
        raise RequestValidationError({}, "The request body must be a JSON object.")
    return payload


def _to_formdata(payload: Mapping[str, Any], skip: tuple[str, ...] = ()) -> MultiDict:
    """Flatten scalar JSON values into form data, rejecting nested values."""
    formdata = MultiDict()
    errors: dict[str, list[str]] = {}
    for key, value in payload.items():
        if key in skip or value is None:
            continue
        if isinstance(value, (dict, list)):
            errors[key] = ["Nested values are not accepted for this field."]
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        formdata.add(key, value if isinstance(value, str) else str(value))
    if errors:
        raise RequestValidationError(errors)
    return formdata


def _validated(form):
    if not form.validate():
        raise RequestValidationError(
            {name: list(messages) for name, messages in form.errors.items()}
        )
    return form


def _text(value: str | None) -> str:
    return value or ""


def parse_nullable_date(value: Any) -> datetime | None:
    """Coerce a nullable date payload value into a datetime or None."""
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return _parse_completion_date(value)
    if isinstance(value, Mapping):
        if "time" not in value:
            raise RequestValidationError.for_field(COMPLETION_DATE_FIELD, COMPLETION_DATE_MESSAGE)
        raw_time = value["time"]
        if raw_time is None:
            return None
        valid = value.get("valid", True)
        if not isinstance(raw_time, str) or not isinstance(valid, bool):
            raise RequestValidationError.for_field(COMPLETION_DATE_FIELD, COMPLETION_DATE_MESSAGE)
        if not valid or not raw_time.strip():
            return None
        return _parse_completion_date(raw_time)
    raise RequestValidationError.for_field(COMPLETION_DATE_FIELD, COMPLETION_DATE_MESSAGE)


def _parse_completion_date(value: str) -> datetime:
    try:
        return parse_date(value)
    except ValueError:
        raise RequestValidationError.for_field(
            COMPLETION_DATE_FIELD, "completion_date must use the YYYY-MM-DD format."
        ) from None


def _merge_errors(*errors: RequestValidationError | None) -> None:
    collected: dict[str, list[str]] = {}
    for error in errors:
        if error is not None:
            for field, messages in error.errors.items():
                collected.setdefault(field, []).extend(messages)
    if collected:
        raise RequestValidationError(collected)


# Users
# ------------------------------
def map_create_user(payload: Any) -> CreateUserParams:
    form = _validated(UserForm(formdata=_to_formdata(_require_object(payload))))
    return CreateUserParams(
        full_name=_text(form.full_name.data),
        email=_text(form.email.data),
        role=form.role.data,
    )


def map_update_user(user_id: int, payload: Any) -> UpdateUserParams:
    # The path id wins over any "id" present in the body.
    form = _validated(UserUpdateForm(formdata=_to_formdata(_require_object(payload), skip=("id",))))
    return UpdateUserParams(
        id=user_id,
        full_name=_text(form.full_name.data),
        email=_text(form.email.data),
        role=form.role.data,
    )


# Projects
# ------------------------------
def _project_form(payload: Any) -> ProjectForm:
    return _validated(ProjectForm(formdata=_to_formdata(_require_object(payload), skip=("id",))))


def map_create_project(payload: Any) -> CreateProjectParams:
    form = _project_form(payload)
    return CreateProjectParams(
        name=_text(form.name.data),
        description=form.description.data or "",
        start_date=form.start_date.data,
        end_date=form.end_date.data,
        manager_id=form.manager_id.data,
    )


def map_update_project(project_id: int, payload: Any) -> UpdateProjectParams:
    form = _project_form(payload)
    return UpdateProjectParams(
        id=project_id,
        name=_text(form.name.data),
        description=form.description.data or "",
        start_date=form.start_date.data,
        end_date=form.end_date.data,
        manager_id=form.manager_id.data,
    )


# Tasks
# ------------------------------
def _task_fields(form_class, payload: Any) -> tuple[Any, datetime | None]:
    payload = _require_object(payload)
    form_error = date_error = None
    completion_date = None
    try:
        completion_date = parse_nullable_date(payload.get(COMPLETION_DATE_FIELD))
    except RequestValidationError as exc:
        date_error = exc
    form = None
    try:
        form = _validated(
            form_class(formdata=_to_formdata(payload, skip=("id", COMPLETION_DATE_FIELD)))
        )
    except RequestValidationError as exc:
        form_error = exc
    _merge_errors(form_error, date_error)
    return form, completion_date


def map_create_task(payload: Any) -> CreateTaskParams:
    form, completion_date = _task_fields(TaskForm, payload)
    return CreateTaskParams(
        title=_text(form.title.data),
        description=form.description.data or "",
        priority=form.priority.data,
        status=form.status.data,
        assignee_id=form.assignee_id.data,
        project_id=form.project_id.data,
        completion_date=completion_date,
    )


def map_update_task(task_id: int, payload: Any) -> UpdateTaskParams:
    form, completion_date = _task_fields(TaskUpdateForm, payload)
    return UpdateTaskParams(
        id=task_id,
        title=_text(form.title.data),
        description=form.description.data or "",
        priority=form.priority.data,
        status=form.status.data,
        assignee_id=form.assignee_id.data,
        project_id=form.project_id.data,
        completion_date=completion_date,
    )


# Search
# ------------------------------
def _map_search(form_class, args: Mapping[str, Any], fields: tuple[str, ...]) -> SearchCriterion:
    formdata = MultiDict()
    for name in fields:
        value = args.get(name)
        if value is not None and str(value).strip():
            formdata.add(name, str(value).strip())
    form = _validated(form_class(formdata=formdata))
    for name in fields:
        if name in formdata:
            return SearchCriterion(name, form[name].data)
    raise RequestValidationError(
        {}, f"One of the query parameters {', '.join(fields)} is required."
    )


def map_user_search(args: Mapping[str, Any]) -> SearchCriterion:
    return _map_search(UserSearchForm, args, USER_SEARCH_FIELDS)


def map_project_search(args: Mapping[str, Any]) -> SearchCriterion:
    return _map_search(ProjectSearchForm, args, PROJECT_SEARCH_FIELDS)


def map_task_search(args: Mapping[str, Any]) -> SearchCriterion:
    return _map_search(TaskSearchForm, args, TASK_SEARCH_FIELDS)


__all__ = [
    "SearchCriterion",
    "map_create_project",
    "map_create_task",
    "map_create_user",
    "map_project_search",
    "map_task_search",
    "map_update_project",
    "map_update_task",
    "map_update_user",
    "map_user_search",
    "parse_nullable_date",
]
