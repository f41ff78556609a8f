"""Statement deadlines abort long-running queries on SQLite."""

import time

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from database import db, statement_deadline
from services.params import CreateUserParams
from services.queries import Queries
from tests.utils.db import build_test_app, dispose_test_app, temporary_database

# Counts up to a very large bound; never finishes within the test deadline.
SLOW_QUERY = text(
    "WITH RECURSIVE counter(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM counter WHERE x < 1000000000) "
    "SELECT count(*) FROM counter"
)


@pytest.fixture()
def app_context():
    with temporary_database() as (_name, uri):
        if not uri.startswith("sqlite"):
            pytest.skip("progress-handler deadlines only apply to SQLite")
        app = build_test_app(uri)
        with app.app_context():
            yield app
            db.session.remove()
        dispose_test_app(app)


def test_slow_statement_is_interrupted(app_context):
    started = time.monotonic()
    with pytest.raises(OperationalError):
        with statement_deadline(db.session, 0.05):
            db.session.execute(SLOW_QUERY).scalar()
    assert time.monotonic() - started < 5
    db.session.rollback()


def test_deadline_is_cleared_after_the_block(app_context):
    with statement_deadline(db.session, 0.05):
        db.session.execute(text("SELECT 1")).scalar()
    time.sleep(0.1)
    assert db.session.execute(text("SELECT 1")).scalar() == 1


@pytest.mark.parametrize("seconds", [None, 0])
def test_disabled_deadline_runs_normally(app_context, seconds):
    with statement_deadline(db.session, seconds):
        assert db.session.execute(text("SELECT 2")).scalar() == 2


def test_queries_run_under_the_deadline(app_context):
    queries = Queries(db.session, timeout=0.5)
    user = queries.create_user(CreateUserParams(full_name="Timed", email="timed@example.com", role="user"))
    assert queries.get_user(user.id).full_name == "Timed"
