"""Route test fixtures — async DB, FastAPI test client, tokens, and seed helpers.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine
    - The charge provider is a recording fake (no network)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - load()/count_rows() open their own session so assertions never read a
      stale identity map from the seeding session
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from etuition.db.base import Base
from etuition.infrastructure.database import get_db, DatabaseSessionManager
from etuition.infrastructure.identity_tokens import get_token_service
from etuition.infrastructure.payment_provider import get_charge_provider
from etuition.models.application import Application
from etuition.models.payment import Payment
from etuition.models.tuition import Tuition
from etuition.models.user import User
import etuition.infrastructure.database as db_module
from etuition.main import app


class FakeChargeProvider:
    def __init__(self):
        self.calls: list[tuple[int, str]] = []

    async def create_charge_intent(self, amount_minor_units: int, currency: str) -> str:
        self.calls.append((amount_minor_units, currency))
        return f"pi_{amount_minor_units}_secret_test"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def charge_provider():
    return FakeChargeProvider()


@pytest.fixture
async def client(test_engine, test_session_factory, charge_provider):
    """FastAPI test client with DB and charge provider overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_charge_provider] = lambda: charge_provider

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def auth_headers():
    """Build an Authorization header for an email, signed with the app's key."""
    def _headers(email: str, role: str | None = None) -> dict:
        token = get_token_service().issue({"email": email, "role": role})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def load(test_session_factory):
    async def _load(model, ident):
        async with test_session_factory() as session:
            return await session.get(model, ident)
    return _load


@pytest.fixture
def count_rows(test_session_factory):
    async def _count(model, *conditions) -> int:
        query = select(func.count()).select_from(model)
        if conditions:
            query = query.where(*conditions)
        async with test_session_factory() as session:
            return (await session.execute(query)).scalar_one()
    return _count


@pytest.fixture
def make_user(test_db):
    async def _make(email: str, role: str = "student", **fields) -> User:
        user = User(email=email, role=role, **fields)
        test_db.add(user)
        await test_db.commit()
        await test_db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_tuition(test_db):
    async def _make(student_email: str, status: str = "approved", **fields) -> Tuition:
        fields.setdefault("subject", "Math")
        fields.setdefault("salary", 5000.0)
        tuition = Tuition(student_email=student_email, status=status, **fields)
        test_db.add(tuition)
        await test_db.commit()
        await test_db.refresh(tuition)
        return tuition
    return _make


@pytest.fixture
def make_application(test_db):
    async def _make(
        tutor_email: str, student_email: str, status: str = "Pending", **fields,
    ) -> Application:
        fields.setdefault("subject", "Math")
        fields.setdefault("salary", 5000.0)
        application = Application(
            tutor_email=tutor_email, student_email=student_email,
            status=status, **fields,
        )
        test_db.add(application)
        await test_db.commit()
        await test_db.refresh(application)
        return application
    return _make


@pytest.fixture
def make_payment(test_db):
    async def _make(app_id, tutor_email: str, student_email: str, salary: float) -> Payment:
        payment = Payment(
            app_id=app_id, tutor_email=tutor_email,
            student_email=student_email, salary=salary,
        )
        test_db.add(payment)
        await test_db.commit()
        await test_db.refresh(payment)
        return payment
    return _make
