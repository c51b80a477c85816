# tests/database/test_hooks.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.database.models import Identity, Profile


@pytest.mark.asyncio
async def test_new_identity_gets_exactly_one_profile(db_session: AsyncSession) -> None:
    identity = Identity(
        email="asha@example.com",
        hashed_password="x",
        user_metadata={"full_name": "Asha Rao", "phone": "9876543210"},
    )
    db_session.add(identity)
    await db_session.commit()

    count = (
        await db_session.execute(select(func.count()).select_from(Profile).filter(Profile.id == identity.id))
    ).scalar_one()
    assert count == 1

    profile = await db_session.get(Profile, identity.id)
    assert profile is not None
    assert profile.email == "asha@example.com"
    assert profile.full_name == "Asha Rao"
    assert profile.phone == "9876543210"


@pytest.mark.asyncio
async def test_missing_full_name_defaults_to_empty_string(db_session: AsyncSession) -> None:
    identity = Identity(email="anon@example.com", hashed_password="x", user_metadata={})
    db_session.add(identity)
    await db_session.commit()

    profile = await db_session.get(Profile, identity.id)
    assert profile is not None
    assert profile.full_name == ""
    assert profile.phone is None


@pytest.mark.asyncio
async def test_profile_provisioned_only_on_insert(db_session: AsyncSession) -> None:
    identity = Identity(email="own@example.com", hashed_password="x", user_metadata={})
    db_session.add(identity)
    await db_session.commit()

    # a later flush of the same identity must not provision a second profile
    identity.user_metadata = {"full_name": "Changed"}
    await db_session.commit()

    count = (await db_session.execute(select(func.count()).select_from(Profile))).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_updated_at_overrides_caller_value(db_session: AsyncSession) -> None:
    identity = Identity(
        email="stamp@example.com", hashed_password="x", user_metadata={"full_name": "Stamp"}
    )
    db_session.add(identity)
    await db_session.commit()

    profile = await db_session.get(Profile, identity.id)
    assert profile is not None
    before = datetime.now(timezone.utc).replace(tzinfo=None)

    profile.full_name = "Stamp Updated"
    profile.updated_at = datetime(2000, 1, 1, tzinfo=timezone.utc)
    await db_session.commit()
    await db_session.refresh(profile)

    assert profile.full_name == "Stamp Updated"
    assert profile.updated_at.year != 2000
    assert profile.updated_at.replace(tzinfo=None) >= before
