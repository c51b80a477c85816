"""
tests/conftest.py

Test fixtures for API integration and unit tests.
Includes async clients, fake identities, access-guard overrides and an
in-memory SQLite session for store-level tests.
"""
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Settings are required fields; provide test values before anything imports them.
os.environ.setdefault("APP_NAME", "Maidly API (test)")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
os.environ.setdefault("REDIS_HOST", "localhost")
os.environ.setdefault("REDIS_PORT", "6379")
os.environ.setdefault("REDIS_DB", "15")
os.environ.setdefault("CORS_ALLOWED_ORIGINS", "http://localhost:5173")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

# --- Imports ---
from collections.abc import AsyncGenerator, Callable, Generator
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from maidly.access.context import AccessContext, load_access_context
from maidly.access.guard import AccessGuard
from maidly.auth.schemas import SignupRequest, SignupResponse
from maidly.auth.services import signup_user
from maidly.core.dependencies import get_access_guard, get_current_identity
from maidly.database.base import Base
from maidly.database.enums import AppRole
from maidly.database.models import Identity
from maidly.database.session import get_db
from maidly.job.models import Job, JobStatus, JobType
from maidly.maid.models import Maid


# --- Core Test Fixtures ---


@pytest.fixture(scope="session")
def transport() -> ASGITransport:
    """Fixture for ASGI transport."""
    return ASGITransport(app=app)


@pytest_asyncio.fixture(scope="function")
async def async_client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Fixture for HTTP async client."""
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Fake Identity Fixtures ---


def _fake_identity(email: str) -> Identity:
    return Identity(
        id=uuid4(),
        email=email,
        hashed_password="fakehashedpassword",
        user_metadata={},
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def fake_customer_identity() -> Identity:
    """Fixture for a fake customer identity."""
    return _fake_identity("customer.test@example.com")


@pytest.fixture
def fake_maid_identity() -> Identity:
    """Fixture for a fake maid identity."""
    return _fake_identity("maid.test@example.com")


@pytest.fixture
def customer_context(fake_customer_identity: Identity) -> AccessContext:
    return AccessContext(
        identity_id=fake_customer_identity.id, roles=frozenset({AppRole.CUSTOMER})
    )


@pytest.fixture
def maid_context(fake_maid_identity: Identity) -> AccessContext:
    return AccessContext(
        identity_id=fake_maid_identity.id, roles=frozenset({AppRole.MAID}), maid_id=uuid4()
    )


# --- Fake Row Builders ---


def _make_maid(user_id: Any, maid_id: Any = None, **overrides: Any) -> Maid:
    """Build a detached Maid row with every column populated."""
    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = dict(
        id=maid_id or uuid4(),
        user_id=user_id,
        hourly_rate=Decimal("250.00"),
        daily_rate=Decimal("1500.00"),
        monthly_rate=Decimal("25000.00"),
        location="Sector 5, Noida",
        description="Experienced in cooking and cleaning",
        rating=Decimal("4.50"),
        total_jobs=0,
        completed_jobs=0,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Maid(**fields)


def _make_job(customer_id: Any, maid_id: Any, **overrides: Any) -> Job:
    """Build a detached Job row with every column populated."""
    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = dict(
        id=uuid4(),
        customer_id=customer_id,
        maid_id=maid_id,
        job_date=date(2026, 11, 2),
        duration="3 hours",
        location="Sector 5, Noida",
        job_type=JobType.HOURLY,
        amount=Decimal("250.00"),
        status=JobStatus.PENDING,
        version=1,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture
def maid_factory() -> Callable[..., Maid]:
    return _make_maid


@pytest.fixture
def job_factory() -> Callable[..., Job]:
    return _make_job


# --- Dependency Override Fixtures ---


@pytest_asyncio.fixture
async def override_get_db() -> AsyncGenerator[None, None]:
    """Override for the database dependency."""

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


def _override_caller(identity: Identity, context: AccessContext) -> None:
    app.dependency_overrides[get_current_identity] = lambda: identity
    app.dependency_overrides[get_access_guard] = lambda: AccessGuard(context)


def _clear_caller() -> None:
    app.dependency_overrides.pop(get_current_identity, None)
    app.dependency_overrides.pop(get_access_guard, None)


@pytest.fixture
def mock_current_customer(
    fake_customer_identity: Identity, customer_context: AccessContext
) -> Generator[Identity, None, None]:
    """Authenticate requests as a customer."""
    _override_caller(fake_customer_identity, customer_context)
    yield fake_customer_identity
    _clear_caller()


@pytest.fixture
def mock_current_maid(
    fake_maid_identity: Identity, maid_context: AccessContext
) -> Generator[Identity, None, None]:
    """Authenticate requests as a maid."""
    _override_caller(fake_maid_identity, maid_context)
    yield fake_maid_identity
    _clear_caller()


# --- Store Fixtures (in-memory SQLite) ---


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test, with the full schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


SignupFn = Callable[..., Any]


@pytest.fixture
def signup(db_session: AsyncSession) -> SignupFn:
    """Register an identity through the signup service and return the response."""

    async def _signup(
        email: str, role: AppRole = AppRole.CUSTOMER, **fields: Any
    ) -> SignupResponse:
        payload: dict[str, Any] = {
            "email": email,
            "password": "correct-horse-battery",
            "full_name": fields.pop("full_name", "Test Person"),
            "role": role,
        }
        if role == AppRole.MAID:
            payload.update(
                hourly_rate=Decimal("250.00"),
                daily_rate=Decimal("1500.00"),
                monthly_rate=Decimal("25000.00"),
                location="Sector 5, Noida",
            )
        payload.update(fields)
        return await signup_user(SignupRequest(**payload), db_session)

    return _signup


@pytest.fixture
def guard_for(db_session: AsyncSession) -> Callable[..., Any]:
    """Load the access guard for an identity, as the request dependency would."""

    async def _guard_for(identity_id: Any) -> AccessGuard:
        return AccessGuard(await load_access_context(db_session, identity_id))

    return _guard_for
