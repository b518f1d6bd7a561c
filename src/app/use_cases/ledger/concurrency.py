"""Recognizing database-level concurrency failures

Lock timeouts, deadlocks and serialization failures abort the posting
transaction; they are reported as CONCURRENCY_CONFLICT so the caller can
retry the whole posting instead of treating it as a hard failure. Other
operational errors (missing tables, refused connections) are not retryable
and fall through to the use case's generic failure.
"""

from typing import Optional
from sqlalchemy.exc import DBAPIError

# serialization_failure, deadlock_detected, lock_not_available
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})

# sqlite3 reports lock contention only through the message text
_SQLITE_BUSY_MESSAGES = ("database is locked", "database table is locked")


def _sqlstate(orig) -> Optional[str]:
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return code
    return None


def is_concurrency_conflict(exc: BaseException) -> bool:
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    if _sqlstate(orig) in _CONFLICT_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(busy in message for busy in _SQLITE_BUSY_MESSAGES)
