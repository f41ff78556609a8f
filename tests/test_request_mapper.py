"""Tests for mapping request payloads onto query parameters."""

from datetime import datetime

import pytest
from werkzeug.datastructures import MultiDict

from services.errors import RequestValidationError
from services.request_mapper import (
    SearchCriterion,
    map_create_project,
    map_create_task,
    map_create_user,
    map_project_search,
    map_task_search,
    map_update_project,
    map_update_task,
    map_update_user,
    map_user_search,
    parse_nullable_date,
)
from tests.utils.db import build_test_app, dispose_test_app, temporary_database


@pytest.fixture()
def request_context():
    with temporary_database() as (_name, uri):
        app = build_test_app(uri)
        with app.test_request_context():
            yield app
        dispose_test_app(app)


def _project_payload(**overrides):
    payload = {
        "name": "Test Project",
        "description": "Description",
        "start_date": "2024-01-01",
        "end_date": "2024-02-01",
        "manager_id": 123,
    }
    payload.update(overrides)
    return payload


def _task_payload(**overrides):
    payload = {
        "title": "Sample Task",
        "description": "This is a sample task",
        "priority": "medium",
        "status": "Pending",
        "assignee_id": 1,
        "project_id": 1,
    }
    payload.update(overrides)
    return payload


class TestParseNullableDate:
    """parse_nullable_date accepts the documented shapes only."""

    @pytest.mark.parametrize("value", [None, "", "   ", {"time": None}, {"time": "2024-03-01", "valid": False}])
    def test_no_value_shapes(self, value):
        assert parse_nullable_date(value) is None

    def test_date_string(self):
        assert parse_nullable_date("2024-03-01") == datetime(2024, 3, 1)

    def test_object_with_time(self):
        assert parse_nullable_date({"time": "2024-03-01", "valid": True}) == datetime(2024, 3, 1)
        assert parse_nullable_date({"time": "2024-03-01"}) == datetime(2024, 3, 1)

    @pytest.mark.parametrize(
        "value",
        ["03/01/2024", "2024-03-01T10:00:00", 20240301, ["2024-03-01"], {"date": "2024-03-01"}, {"time": 5}],
    )
    def test_rejects_other_shapes(self, value):
        with pytest.raises(RequestValidationError) as caught:
            parse_nullable_date(value)
        assert "completion_date" in caught.value.errors


class TestUserMapping:
    def test_create_user_defaults_role(self, request_context):
        params = map_create_user({"full_name": "Test User", "email": "test@example.com"})
        assert params.full_name == "Test User"
        assert params.email == "test@example.com"
        assert params.role == "user"

    def test_create_user_requires_fields(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_user({"email": "not-an-email"})
        assert set(caught.value.errors) == {"full_name", "email"}

    def test_text_fields_are_passed_through_unchanged(self, request_context):
        params = map_create_user({"full_name": "  Test User ", "email": "test@example.com"})
        assert params.full_name == "  Test User "

    def test_unknown_role_is_rejected(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_user({"full_name": "X", "email": "x@example.com", "role": "root"})
        assert "role" in caught.value.errors

    def test_update_uses_path_id(self, request_context):
        params = map_update_user(7, {"id": 99, "full_name": "Y", "email": "y@example.com", "role": "admin"})
        assert params.id == 7
        assert params.role == "admin"

    def test_update_requires_role(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_update_user(7, {"full_name": "Y", "email": "y@example.com"})
        assert caught.value.errors["role"] == ["Role is required."]

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_body_must_be_an_object(self, request_context, payload):
        with pytest.raises(RequestValidationError):
            map_create_user(payload)


class TestProjectMapping:
    def test_dates_parse_to_midnight(self, request_context):
        params = map_create_project(_project_payload())
        assert params.start_date == datetime(2024, 1, 1)
        assert params.end_date == datetime(2024, 2, 1)
        assert params.manager_id == 123
        assert params.name == "Test Project"

    @pytest.mark.parametrize("bad_date", ["2024-13-01", "01/02/2024", "yesterday", ""])
    def test_bad_dates_are_validation_errors(self, request_context, bad_date):
        with pytest.raises(RequestValidationError) as caught:
            map_create_project(_project_payload(start_date=bad_date))
        assert "start_date" in caught.value.errors

    def test_manager_id_must_be_integer(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_project(_project_payload(manager_id="abc"))
        assert "manager_id" in caught.value.errors

    @pytest.mark.parametrize("manager_id", [2**63, -1])
    def test_manager_id_must_fit_in_64_bits(self, request_context, manager_id):
        with pytest.raises(RequestValidationError) as caught:
            map_create_project(_project_payload(manager_id=manager_id))
        assert "manager_id" in caught.value.errors

    def test_largest_id_is_accepted(self, request_context):
        assert map_create_project(_project_payload(manager_id=2**63 - 1)).manager_id == 2**63 - 1

    def test_nested_values_are_rejected(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_project(_project_payload(name={"first": "x"}))
        assert "name" in caught.value.errors

    def test_update_path_id_overrides_body(self, request_context):
        params = map_update_project(1, _project_payload(id=55, description=None))
        assert params.id == 1
        assert params.description == ""


class TestTaskMapping:
    def test_create_without_completion_date(self, request_context):
        params = map_create_task(_task_payload())
        assert params.completion_date is None
        assert params.priority == "medium"
        assert params.status == "Pending"

    def test_create_defaults_priority_and_status(self, request_context):
        payload = _task_payload()
        del payload["priority"]
        del payload["status"]
        params = map_create_task(payload)
        assert params.priority == "medium"
        assert params.status == "New"

    def test_update_with_completion_date(self, request_context):
        params = map_update_task(3, _task_payload(id=8, completion_date="2024-03-01"))
        assert params.id == 3
        assert params.completion_date == datetime(2024, 3, 1)

    def test_update_accepts_null_object(self, request_context):
        params = map_update_task(3, _task_payload(completion_date={"time": None}))
        assert params.completion_date is None

    def test_unknown_enum_values_are_rejected(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_task(_task_payload(priority="urgent", status="Archived"))
        assert {"priority", "status"} <= set(caught.value.errors)

    def test_form_and_date_errors_are_reported_together(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_create_task(_task_payload(title="", completion_date="someday"))
        assert {"title", "completion_date"} <= set(caught.value.errors)

    def test_update_requires_status(self, request_context):
        payload = _task_payload()
        del payload["status"]
        with pytest.raises(RequestValidationError) as caught:
            map_update_task(3, payload)
        assert "status" in caught.value.errors


class TestSearchMapping:
    def test_user_search_prefers_name(self, request_context):
        criterion = map_user_search(MultiDict({"name": "ali", "email": "corp"}))
        assert criterion == SearchCriterion("name", "ali")

    def test_user_search_by_email(self, request_context):
        assert map_user_search({"email": "corp"}) == SearchCriterion("email", "corp")

    def test_search_requires_a_criterion(self, request_context):
        with pytest.raises(RequestValidationError):
            map_user_search(MultiDict())
        with pytest.raises(RequestValidationError):
            map_task_search({"title": "   "})

    def test_project_search_by_manager_parses_integer(self, request_context):
        assert map_project_search({"manager_id": "12"}) == SearchCriterion("manager_id", 12)
        with pytest.raises(RequestValidationError):
            map_project_search({"manager_id": "twelve"})

    def test_task_search_by_status_validates_enum(self, request_context):
        assert map_task_search({"status": "InProgress"}) == SearchCriterion("status", "InProgress")
        with pytest.raises(RequestValidationError) as caught:
            map_task_search({"status": "Archived"})
        assert "status" in caught.value.errors

    def test_task_search_by_assignee(self, request_context):
        assert map_task_search({"assignee_id": "4"}) == SearchCriterion("assignee_id", 4)

    def test_task_search_rejects_ids_beyond_64_bits(self, request_context):
        with pytest.raises(RequestValidationError) as caught:
            map_task_search({"project_id": str(2**63)})
        assert "project_id" in caught.value.errors
