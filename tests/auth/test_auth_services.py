# tests/auth/test_auth_services.py
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.auth import services as auth_services
from maidly.auth.schemas import LoginRequest, SignupRequest
from maidly.core.exceptions import ConstraintViolation
from maidly.core.tokens import TokenPayload, decode_access_token
from maidly.database.enums import AppRole
from maidly.database.models import Identity
from maidly.maid.models import Maid
from maidly.profile.models import Profile
from maidly.role.models import RoleAssignment

# --- Signup ---


@pytest.mark.asyncio
async def test_customer_signup_creates_identity_profile_and_role(
    db_session: AsyncSession, signup
) -> None:
    created = await signup("Priya@Example.com", full_name="  Priya Sharma ", phone="9876543210")

    assert created.identity.email == "priya@example.com"
    assert created.identity.roles == [AppRole.CUSTOMER]
    assert created.maid_id is None

    profile = await db_session.get(Profile, created.identity.id)
    assert profile is not None
    assert profile.full_name == "Priya Sharma"
    assert profile.phone == "9876543210"

    roles = (
        await db_session.execute(
            select(RoleAssignment.role).filter(RoleAssignment.user_id == created.identity.id)
        )
    ).scalars().all()
    assert roles == [AppRole.CUSTOMER]


@pytest.mark.asyncio
async def test_maid_signup_creates_listing(db_session: AsyncSession, signup) -> None:
    created = await signup("maid@example.com", role=AppRole.MAID, description="Cooking")

    assert created.maid_id is not None
    listing = await db_session.get(Maid, created.maid_id)
    assert listing is not None
    assert listing.user_id == created.identity.id
    assert listing.description == "Cooking"


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(db_session: AsyncSession, signup) -> None:
    await signup("dup@example.com")
    with pytest.raises(ConstraintViolation) as exc_info:
        await signup("DUP@example.com")
    assert exc_info.value.message == "Email already registered"

    count = (await db_session.execute(select(func.count()).select_from(Identity))).scalar_one()
    assert count == 1


def test_maid_signup_requires_listing_fields() -> None:
    with pytest.raises(ValidationError) as exc_info:
        SignupRequest(
            email="m@example.com",
            password="long-enough",
            full_name="Meena",
            role=AppRole.MAID,
            hourly_rate="200",
        )
    assert "daily_rate" in str(exc_info.value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"password": "short"},
        {"password": "x" * 73},
        {"full_name": " A "},
        {"phone": "12345"},
        {"phone": "98765432ab"},
        {"email": "not-an-email"},
    ],
)
def test_signup_validation(overrides: dict) -> None:
    payload = {"email": "v@example.com", "password": "long-enough", "full_name": "Valid Name"}
    with pytest.raises(ValidationError):
        SignupRequest(**{**payload, **overrides})


def test_empty_phone_is_no_phone() -> None:
    request = SignupRequest(
        email="v@example.com", password="long-enough", full_name="Valid Name", phone=""
    )
    assert request.phone is None


# --- Login ---


@pytest.mark.asyncio
async def test_login_returns_token_and_role(db_session: AsyncSession, signup) -> None:
    created = await signup("login@example.com", role=AppRole.MAID)

    result = await auth_services.login_user_json(
        LoginRequest(email="login@example.com", password="correct-horse-battery"), db_session
    )
    assert result.token_type == "bearer"
    assert result.identity.roles == [AppRole.MAID]
    assert decode_access_token(result.access_token).sub == created.identity.id


@pytest.mark.asyncio
async def test_login_oauth_form(db_session: AsyncSession, signup) -> None:
    await signup("form@example.com")
    form = SimpleNamespace(username="form@example.com", password="correct-horse-battery")

    result = await auth_services.login_user_oauth(form, db_session)
    assert result.identity.email == "form@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("login@example.com", "wrong-password"), ("nobody@example.com", "correct-horse-battery")],
)
async def test_login_bad_credentials(
    db_session: AsyncSession, signup, email: str, password: str
) -> None:
    await signup("login@example.com")
    with pytest.raises(HTTPException) as exc_info:
        await auth_services.login_user_json(LoginRequest(email=email, password=password), db_session)
    assert exc_info.value.status_code == 401


# --- Logout ---


@pytest.mark.asyncio
@patch.object(auth_services, "blacklist_token", new_callable=AsyncMock)
async def test_logout_blacklists_jti_for_remaining_lifetime(mock_blacklist: AsyncMock) -> None:
    exp = int((datetime.now(timezone.utc) + timedelta(minutes=10)).timestamp())
    payload = TokenPayload(sub=uuid4(), exp=exp, jti="jti-123")

    result = await auth_services.logout_user_token(payload)

    assert result.detail == "Logout successful"
    mock_blacklist.assert_awaited_once()
    jti, ttl = mock_blacklist.await_args.args
    assert jti == "jti-123"
    assert 0 < ttl <= 600


@pytest.mark.asyncio
@patch.object(auth_services, "blacklist_token", new_callable=AsyncMock)
async def test_logout_expired_token_skips_blacklist(mock_blacklist: AsyncMock) -> None:
    exp = int((datetime.now(timezone.utc) - timedelta(minutes=1)).timestamp())
    await auth_services.logout_user_token(TokenPayload(sub=uuid4(), exp=exp, jti="old"))
    mock_blacklist.assert_not_awaited()
