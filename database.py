"""Database extension and per-statement deadlines."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import Session

db = SQLAlchemy()

# Ids are 64-bit. SQLite only autoincrements a column declared INTEGER.
ID_TYPE = db.BigInteger().with_variant(db.Integer(), "sqlite")
MAX_ID = 2**63 - 1

# Number of SQLite VM instructions between deadline checks.
SQLITE_PROGRESS_STEPS = 1000


@contextmanager
def statement_deadline(session: Session, seconds: float | None) -> Iterator[None]:
    """Abort statements issued inside the block once ``seconds`` have elapsed.

    PostgreSQL gets a transaction-local ``statement_timeout``; SQLite gets a
    progress handler that interrupts the running statement. Other dialects run
    without a deadline. An aborted statement surfaces as the driver's
    ``OperationalError`` wrapped by SQLAlchemy.
    """
    if not seconds or seconds <= 0:
        yield
        return

    connection = session.connection()
    dialect = connection.dialect.name

    if dialect == "postgresql":
        milliseconds = max(int(seconds * 1000), 1)
        connection.exec_driver_sql(f"SET LOCAL statement_timeout = {milliseconds}")
        yield
        # A failed statement aborts the transaction, which discards SET LOCAL.
        connection.exec_driver_sql("SET LOCAL statement_timeout = DEFAULT")
        return

    if dialect == "sqlite":
        raw = connection.connection.driver_connection
        deadline = time.monotonic() + seconds

        def _expired() -> int:
            return 1 if time.monotonic() > deadline else 0

        raw.set_progress_handler(_expired, SQLITE_PROGRESS_STEPS)
        try:
            yield
        finally:
            raw.set_progress_handler(None, SQLITE_PROGRESS_STEPS)
        return

    logging.debug("No statement deadline support for dialect %s", dialect)
    yield
