# tests/core/test_dependencies.py
from datetime import timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.core import dependencies
from maidly.core.tokens import create_access_token, decode_access_token
from maidly.database.enums import AppRole

# --- Token helpers ---


def test_access_token_round_trip_carries_jti() -> None:
    identity_id = uuid4()
    payload = decode_access_token(create_access_token({"sub": identity_id}))
    assert payload.sub == identity_id
    assert payload.jti
    assert payload.seconds_remaining() > 0


def test_access_token_requires_sub() -> None:
    with pytest.raises(ValueError):
        create_access_token({"role": "customer"})


# --- Token extraction ---


@pytest.mark.asyncio
async def test_header_token_preferred_over_cookie() -> None:
    assert await dependencies.get_token("header-token", "cookie-token") == "header-token"
    assert await dependencies.get_token(None, "cookie-token") == "cookie-token"


@pytest.mark.asyncio
async def test_missing_token_is_401() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await dependencies.get_token(None, None)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
@patch.object(dependencies, "is_token_blacklisted", new_callable=AsyncMock, return_value=False)
async def test_valid_token_payload(mock_blacklisted: AsyncMock) -> None:
    identity_id = uuid4()
    payload = await dependencies.get_token_payload(create_access_token({"sub": identity_id}))
    assert payload.sub == identity_id
    mock_blacklisted.assert_awaited_once_with(payload.jti)


@pytest.mark.asyncio
@patch.object(dependencies, "is_token_blacklisted", new_callable=AsyncMock, return_value=True)
async def test_blacklisted_token_is_401(mock_blacklisted: AsyncMock) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await dependencies.get_token_payload(create_access_token({"sub": uuid4()}))
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
async def test_malformed_token_is_401(token: str) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await dependencies.get_token_payload(token)
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_is_401() -> None:
    token = create_access_token({"sub": uuid4()}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(HTTPException) as exc_info:
        await dependencies.get_token_payload(token)
    assert exc_info.value.status_code == 401


# --- Identity and guard loading ---


@pytest.mark.asyncio
@patch.object(dependencies, "is_token_blacklisted", new_callable=AsyncMock, return_value=False)
async def test_current_identity_and_guard(
    mock_blacklisted: AsyncMock, db_session: AsyncSession, signup
) -> None:
    created = await signup("guard@example.com", role=AppRole.MAID)
    payload = await dependencies.get_token_payload(
        create_access_token({"sub": created.identity.id})
    )

    identity = await dependencies.get_current_identity(payload, db_session)
    guard = await dependencies.get_access_guard(identity, db_session)

    assert identity.id == created.identity.id
    assert guard.context.roles == frozenset({AppRole.MAID})
    assert guard.context.maid_id == created.maid_id


@pytest.mark.asyncio
@patch.object(dependencies, "is_token_blacklisted", new_callable=AsyncMock, return_value=False)
async def test_token_for_unknown_identity_is_401(
    mock_blacklisted: AsyncMock, db_session: AsyncSession
) -> None:
    payload = await dependencies.get_token_payload(create_access_token({"sub": uuid4()}))
    with pytest.raises(HTTPException) as exc_info:
        await dependencies.get_current_identity(payload, db_session)
    assert exc_info.value.status_code == 401
