"""
maidly/maid/services.py

Maid Service Layer
Handles the public maid listing and owner-only listing management:
- Listing ordered by rating (any authenticated identity)
- Create / update own listing (owner only, rate bounds enforced by the store)
- Completed-job counter maintenance
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.guard import AccessGuard
from maidly.access.policies import Operation, Resource
from maidly.core.exceptions import NotFound
from maidly.database.session import store_errors
from maidly.maid import models, schemas

logger = logging.getLogger(__name__)

CREATE_REJECTED_MESSAGE = "Maid profile rejected: it already exists or a rate is out of range"
UPDATE_REJECTED_MESSAGE = "Maid profile update rejected: a rate is out of range"


class MaidService:
    """Handles all maid-listing operations."""

    def __init__(self, db: AsyncSession, guard: AccessGuard) -> None:
        self.db = db
        self.guard = guard

    # --- Reads ---
    async def list_maids(
        self, skip: int = 0, limit: int = 100, location: str | None = None
    ) -> tuple[list[models.Maid], int]:
        """Return the public listing, best rated first, with total count."""
        base_stmt = select(models.Maid)
        if location:
            base_stmt = base_stmt.filter(models.Maid.location == location)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total_count = (await self.db.execute(count_stmt)).scalar_one()

        data_stmt = (
            base_stmt.order_by(models.Maid.rating.desc(), models.Maid.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        rows = (await self.db.execute(data_stmt)).scalars().all()
        return self.guard.visible(Resource.MAIDS, rows), total_count

    async def get_maid(self, maid_id: UUID) -> models.Maid:
        maid = await self.db.get(models.Maid, maid_id)
        return self.guard.ensure_visible(Resource.MAIDS, maid, "Maid not found")

    async def get_own_maid(self) -> models.Maid:
        result = await self.db.execute(
            select(models.Maid).filter(models.Maid.user_id == self.guard.identity_id)
        )
        maid = result.scalar_one_or_none()
        if maid is None:
            raise NotFound("Maid profile not found")
        return maid

    # --- Writes ---
    async def stage_maid(self, payload: schemas.MaidCreate) -> models.Maid:
        """Authorize and flush a new listing without committing."""
        maid = models.Maid(
            user_id=payload.user_id or self.guard.identity_id,
            hourly_rate=payload.hourly_rate,
            daily_rate=payload.daily_rate,
            monthly_rate=payload.monthly_rate,
            location=payload.location,
            description=payload.description or None,
        )
        self.guard.authorize(Resource.MAIDS, Operation.INSERT, maid)

        self.db.add(maid)
        async with store_errors(self.db, CREATE_REJECTED_MESSAGE):
            await self.db.flush()
        return maid

    async def create_maid(self, payload: schemas.MaidCreate) -> models.Maid:
        maid = await self.stage_maid(payload)
        async with store_errors(self.db, CREATE_REJECTED_MESSAGE):
            await self.db.commit()
        logger.info(f"Maid profile created: id={maid.id} user_id={maid.user_id}")
        return maid

    async def update_maid(self, maid_id: UUID, payload: schemas.MaidUpdate) -> models.Maid:
        """Owner edits rates, location or description."""
        maid = await self.get_maid(maid_id)
        self.guard.authorize(Resource.MAIDS, Operation.UPDATE, maid)

        changes = payload.model_dump(exclude_unset=True)
        for field in ("hourly_rate", "daily_rate", "monthly_rate", "location"):
            if field in changes and changes[field] is None:
                changes.pop(field)
        for field, value in changes.items():
            setattr(maid, field, value)

        async with store_errors(self.db, UPDATE_REJECTED_MESSAGE):
            await self.db.commit()
        await self.db.refresh(maid)
        logger.info(f"Maid profile updated: id={maid.id} fields={sorted(changes)}")
        return maid

    async def record_completed_job(self, maid_id: UUID) -> models.Maid:
        """Bump `completed_jobs` on the caller's listing inside the current transaction."""
        maid = await self.get_maid(maid_id)
        self.guard.authorize(Resource.MAIDS, Operation.UPDATE, maid)
        maid.completed_jobs = (maid.completed_jobs or 0) + 1
        return maid
