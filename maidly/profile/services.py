"""
maidly/profile/services.py

Profile Service Layer
Reads and updates profiles through the access guard:
- A profile is visible only to its owner; anyone else gets 404
- Only the owner may update it; `updated_at` is stamped by the flush hook
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.guard import AccessGuard
from maidly.access.policies import Operation, Resource
from maidly.database.session import store_errors
from maidly.profile import models, schemas

logger = logging.getLogger(__name__)


class ProfileService:
    """Service class for profile reads and owner updates."""

    def __init__(self, db: AsyncSession, guard: AccessGuard) -> None:
        self.db = db
        self.guard = guard

    async def get_profile(self, profile_id: UUID) -> models.Profile:
        """Fetch a profile the caller is allowed to see."""
        profile = await self.db.get(models.Profile, profile_id)
        return self.guard.ensure_visible(Resource.PROFILES, profile, "Profile not found")

    async def get_own_profile(self) -> models.Profile:
        return await self.get_profile(self.guard.identity_id)

    async def update_own_profile(self, payload: schemas.ProfileUpdate) -> models.Profile:
        """Apply the provided fields to the caller's profile."""
        profile = await self.get_own_profile()
        self.guard.authorize(Resource.PROFILES, Operation.UPDATE, profile)

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("full_name") is None:
            changes.pop("full_name", None)
        for field, value in changes.items():
            setattr(profile, field, value)

        async with store_errors(self.db, "Profile update rejected"):
            await self.db.commit()
        await self.db.refresh(profile)
        logger.info(f"Profile updated: id={profile.id} fields={sorted(changes)}")
        return profile
