"""Unit tests for concurrency conflict classification"""

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from src.app.use_cases.ledger.concurrency import is_concurrency_conflict


class FakePgError(Exception):
    def __init__(self, message, sqlstate):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize("message", ["database is locked", "database table is locked"])
def test_sqlite_lock_contention_is_a_conflict(message):
    exc = OperationalError("DELETE FROM payments", {}, Exception(message))
    assert is_concurrency_conflict(exc)


@pytest.mark.parametrize("sqlstate", ["40001", "40P01", "55P03"])
def test_postgres_conflict_sqlstates(sqlstate):
    exc = DBAPIError("SELECT ... FOR UPDATE", {}, FakePgError("could not serialize access", sqlstate))
    assert is_concurrency_conflict(exc)


def test_sqlstate_on_wrapped_driver_error():
    driver_error = FakePgError("deadlock detected", "40P01")
    adapted = Exception("deadlock detected")
    adapted.__cause__ = driver_error
    exc = OperationalError("UPDATE payments", {}, adapted)
    assert is_concurrency_conflict(exc)


@pytest.mark.parametrize(
    "exc",
    [
        OperationalError("SELECT 1", {}, Exception("no such table: payments")),
        OperationalError("connect", {}, Exception("connection refused")),
        IntegrityError("INSERT", {}, FakePgError("duplicate key", "23505")),
        ValueError("not a database error"),
    ],
)
def test_other_errors_are_not_conflicts(exc):
    assert not is_concurrency_conflict(exc)
