"""Database Session Manager — verifies failure mapping and the readiness check.

Tests:
    - Each SQLAlchemy failure family maps to an operation and a client-safe message
    - A failing statement inside session() surfaces as DatabaseError after rollback
    - health_check is True for a reachable store
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)

from etuition.core.errors import DatabaseError
from etuition.infrastructure.database import DatabaseSessionManager, classify_failure


@pytest.mark.parametrize("error, operation", [
    (IntegrityError("INSERT", {}, Exception("UNIQUE")), "commit"),
    (OperationalError("SELECT", {}, Exception("locked")), "execute"),
    (DBAPIError("SELECT", {}, Exception("driver")), "query"),
    (SQLAlchemyError("other"), "unknown"),
])
def test_classify_failure(error, operation):
    assert classify_failure(error)[0] == operation


def test_classified_message_hides_driver_text():
    _, message = classify_failure(
        IntegrityError("INSERT", {}, Exception("duplicate key users_email")),
    )
    assert "users_email" not in message


async def test_session_maps_failures_to_database_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.operation == "execute"
    assert exc.value.http_status == 500
    await manager.close()


async def test_health_check_reachable_store():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    assert await manager.health_check() is True
    await manager.close()
