# tests/auth/test_auth_routes.py
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from main import app
from maidly.auth import routes as auth_routes
from maidly.auth import services as auth_services
from maidly.auth.schemas import LoginResponse, SessionIdentity, SignupResponse
from maidly.core.dependencies import get_token_payload
from maidly.core.exceptions import ConstraintViolation
from maidly.core.tokens import TokenPayload
from maidly.database.enums import AppRole
from maidly.database.models import Identity

# --- Helpers ---

SIGNUP_PAYLOAD = {
    "email": "new.customer@example.com",
    "password": "correct-horse-battery",
    "full_name": "New Customer",
    "phone": "9876543210",
    "role": "customer",
}


def session_identity(role: AppRole = AppRole.CUSTOMER) -> SessionIdentity:
    return SessionIdentity(
        id=uuid4(),
        email="new.customer@example.com",
        created_at=datetime.now(timezone.utc),
        roles=[role],
    )


# --- Signup ---


@pytest.mark.asyncio
@patch.object(auth_routes, "signup_user", new_callable=AsyncMock)
async def test_signup_success(
    mock_signup: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_signup.return_value = SignupResponse(identity=session_identity())

    response = await async_client.post("/auth/signup", json=SIGNUP_PAYLOAD)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["identity"]["roles"] == ["customer"]
    mock_signup.assert_awaited_once()


@pytest.mark.asyncio
@patch.object(auth_routes, "signup_user", new_callable=AsyncMock)
async def test_signup_duplicate_email(
    mock_signup: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_signup.side_effect = ConstraintViolation("Email already registered")

    response = await async_client.post("/auth/signup", json=SIGNUP_PAYLOAD)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"detail": {"error": "Email already registered"}}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"password": "short"},
        {"phone": "123"},
        {"full_name": "A"},
        {"role": "maid"},  # maid without listing fields
        {"role": "admin"},
    ],
)
async def test_signup_validation_errors(
    overrides: dict, async_client: AsyncClient, override_get_db: None
) -> None:
    response = await async_client.post("/auth/signup", json={**SIGNUP_PAYLOAD, **overrides})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# --- Login ---


@pytest.mark.asyncio
@patch.object(auth_routes, "login_user_json", new_callable=AsyncMock)
async def test_login_sets_cookie(
    mock_login: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_login.return_value = LoginResponse(
        access_token="fake-jwt-token", identity=session_identity(AppRole.MAID)
    )

    response = await async_client.post(
        "/auth/login", json={"email": "new.customer@example.com", "password": "whatever"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["access_token"] == "fake-jwt-token"
    assert data["identity"]["roles"] == ["maid"]
    set_cookie = response.headers["set-cookie"]
    assert "access_token=fake-jwt-token" in set_cookie
    assert "HttpOnly" in set_cookie


@pytest.mark.asyncio
@patch.object(auth_routes, "login_user_oauth", new_callable=AsyncMock)
async def test_login_oauth_form(
    mock_login: AsyncMock, async_client: AsyncClient, override_get_db: None
) -> None:
    mock_login.return_value = LoginResponse(
        access_token="fake-jwt-token", identity=session_identity()
    )

    response = await async_client.post(
        "/auth/login/oauth",
        data={"username": "new.customer@example.com", "password": "whatever"},
    )

    assert response.status_code == status.HTTP_200_OK
    form = mock_login.await_args.args[0]
    assert form.username == "new.customer@example.com"


# --- Logout ---


@pytest.mark.asyncio
@patch.object(auth_services, "blacklist_token", new_callable=AsyncMock)
async def test_logout_blacklists_and_clears_cookie(
    mock_blacklist: AsyncMock, async_client: AsyncClient
) -> None:
    exp = int((datetime.now(timezone.utc) + timedelta(minutes=5)).timestamp())
    app.dependency_overrides[get_token_payload] = lambda: TokenPayload(
        sub=uuid4(), exp=exp, jti="logout-jti"
    )
    try:
        response = await async_client.post("/auth/logout")
    finally:
        app.dependency_overrides.pop(get_token_payload, None)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"detail": "Logout successful"}
    assert mock_blacklist.await_args.args[0] == "logout-jti"
    assert 'access_token=""' in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_logout_without_token_is_401(async_client: AsyncClient) -> None:
    response = await async_client.post("/auth/logout")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


# --- Current Session ---


@pytest.mark.asyncio
@patch.object(auth_routes, "get_session_identity", new_callable=AsyncMock)
async def test_me(
    mock_session: AsyncMock,
    mock_current_customer: Identity,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_session.return_value = SessionIdentity(
        id=mock_current_customer.id,
        email=mock_current_customer.email,
        created_at=mock_current_customer.created_at,
        roles=[AppRole.CUSTOMER],
    )

    response = await async_client.get("/auth/me")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == str(mock_current_customer.id)


# --- Application ---


@pytest.mark.asyncio
async def test_health_and_security_headers(async_client: AsyncClient) -> None:
    response = await async_client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
