"""
maidly/job/services.py

Job Service Layer
Handles all job-related operations: booking, status changes and retrieval.
Every operation passes through the access guard first; status changes are
then checked against the state machine and the row version.
"""

import logging
from uuid import UUID

from sqlalchemy import false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.guard import AccessGuard
from maidly.access.policies import Operation, Resource
from maidly.core.exceptions import ConstraintViolation
from maidly.database.session import store_errors
from maidly.job import models, schemas
from maidly.job.models import JobStatus
from maidly.job.transitions import JobParty, validate_transition
from maidly.maid.models import Maid
from maidly.maid.services import MaidService

logger = logging.getLogger(__name__)


class JobService:
    """Service class for job-related business logic."""

    def __init__(self, db: AsyncSession, guard: AccessGuard) -> None:
        self.db = db
        self.guard = guard

    def _parties(self, job: models.Job) -> frozenset[JobParty]:
        """Which side(s) of `job` the caller is on."""
        parties = set()
        if job.customer_id == self.guard.identity_id:
            parties.add(JobParty.CUSTOMER)
        if self.guard.context.maid_id is not None and job.maid_id == self.guard.context.maid_id:
            parties.add(JobParty.MAID)
        return frozenset(parties)

    # ---------------------------------------------------
    # Job Creation
    # ---------------------------------------------------
    async def create_job(self, payload: schemas.JobCreate) -> models.Job:
        """Customer books a maid; amount is the maid's current rate for the job type."""
        customer_id = payload.customer_id or self.guard.identity_id
        logger.info(
            f"Customer {customer_id} booking maid {payload.maid_id} ({payload.job_type.value})"
        )

        maid = await self.db.get(Maid, payload.maid_id)
        maid = self.guard.ensure_visible(Resource.MAIDS, maid, "Maid not found")

        job = models.Job(
            customer_id=customer_id,
            maid_id=maid.id,
            job_date=payload.job_date,
            duration=payload.duration,
            location=payload.location,
            job_type=payload.job_type,
            amount=maid.rate_for(payload.job_type),
            status=JobStatus.PENDING,
        )
        self.guard.authorize(Resource.JOBS, Operation.INSERT, job)

        self.db.add(job)
        async with store_errors(self.db, "Job rejected by the store"):
            await self.db.commit()
        logger.info(f"Job created successfully: job_id={job.id} amount={job.amount}")
        return job

    # ---------------------------------------------------
    # Job Status Changes
    # ---------------------------------------------------
    async def update_status(self, job_id: UUID, payload: schemas.JobStatusUpdate) -> models.Job:
        """
        Move a job to `payload.status`.

        Order of checks: visibility (404), update policy (403), version (409),
        state machine (409).
        """
        job = await self.get_job(job_id)
        self.guard.authorize(Resource.JOBS, Operation.UPDATE, job)

        if payload.expected_version is not None and payload.expected_version != job.version:
            raise ConstraintViolation(
                f"Job has changed (version {job.version}, expected {payload.expected_version}); "
                "reload and try again"
            )

        previous = job.status
        validate_transition(previous, payload.status, self._parties(job))

        job.status = payload.status
        if payload.status == JobStatus.COMPLETED:
            await MaidService(self.db, self.guard).record_completed_job(job.maid_id)

        async with store_errors(self.db, "Job update rejected by the store"):
            await self.db.commit()
        await self.db.refresh(job)
        logger.info(f"Job {job.id} status {previous.value} -> {job.status.value}")
        return job

    async def accept_job(self, job_id: UUID, expected_version: int | None = None) -> models.Job:
        return await self.update_status(
            job_id,
            schemas.JobStatusUpdate(status=JobStatus.ACCEPTED, expected_version=expected_version),
        )

    async def reject_job(self, job_id: UUID, expected_version: int | None = None) -> models.Job:
        """Maid declines a pending job; a rejected job is recorded as cancelled."""
        return await self.update_status(
            job_id,
            schemas.JobStatusUpdate(status=JobStatus.CANCELLED, expected_version=expected_version),
        )

    async def complete_job(self, job_id: UUID, expected_version: int | None = None) -> models.Job:
        return await self.update_status(
            job_id,
            schemas.JobStatusUpdate(status=JobStatus.COMPLETED, expected_version=expected_version),
        )

    async def cancel_job(self, job_id: UUID, expected_version: int | None = None) -> models.Job:
        return await self.update_status(
            job_id,
            schemas.JobStatusUpdate(status=JobStatus.CANCELLED, expected_version=expected_version),
        )

    # ---------------------------------------------------
    # Job Retrieval
    # ---------------------------------------------------
    async def get_job(self, job_id: UUID) -> models.Job:
        job = await self.db.get(models.Job, job_id)
        return self.guard.ensure_visible(Resource.JOBS, job, "Job not found")

    async def list_jobs(
        self, skip: int = 0, limit: int = 100, status: JobStatus | None = None
    ) -> tuple[list[models.Job], int]:
        """Jobs the caller booked or is assigned to, newest first."""
        maid_id = self.guard.context.maid_id
        scope = or_(
            models.Job.customer_id == self.guard.identity_id,
            models.Job.maid_id == maid_id if maid_id is not None else false(),
        )
        base_stmt = select(models.Job).filter(scope)
        if status is not None:
            base_stmt = base_stmt.filter(models.Job.status == status)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total_count = (await self.db.execute(count_stmt)).scalar_one()

        data_stmt = base_stmt.order_by(models.Job.created_at.desc()).offset(skip).limit(limit)
        rows = (await self.db.execute(data_stmt)).scalars().all()
        return self.guard.visible(Resource.JOBS, rows), total_count
