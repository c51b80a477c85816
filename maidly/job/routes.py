"""
maidly/job/routes.py

Job Routes
Defines job-related API endpoints for customers and maids:
- Create a job (Authenticated Customer)
- Accept / reject / complete a job (Assigned Maid)
- Cancel a job (Customer or assigned Maid, while pending)
- Generic status change with optional version check
- List jobs visible to the caller, and retrieve one

All endpoints require authentication. Row access is decided by the
job policies; a job the caller cannot see is reported as 404.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, Request, status

from maidly.core.dependencies import AccessGuardDep, DBDep, PaginationParams
from maidly.core.limiter import limiter
from maidly.core.schemas import PaginatedResponse
from maidly.job import schemas
from maidly.job.models import JobStatus
from maidly.job.services import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])

PaginationDep = Annotated[PaginationParams, Depends()]
VersionBody = Annotated[schemas.JobVersion | None, Body()]


def _expected_version(body: schemas.JobVersion | None) -> int | None:
    return body.expected_version if body else None


# ---------------------------------------------------
# Customer Endpoints (Create Job)
# ---------------------------------------------------
@router.post(
    "",
    response_model=schemas.JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job",
    description="Customer books a maid. Amount is taken from the maid's rate; status starts as pending.",
)
@limiter.limit("5/minute")
async def create_job(
    request: Request,
    payload: schemas.JobCreate,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.JobRead:
    job = await JobService(db, guard).create_job(payload)
    return schemas.JobRead.model_validate(job)


# ---------------------------------------------------
# Status Endpoints
# ---------------------------------------------------
@router.patch(
    "/{job_id}/status",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Update Job Status",
    description="Moves a job to a new status, subject to the transition table and version check.",
)
@limiter.limit("10/minute")
async def update_job_status(
    request: Request,
    job_id: UUID,
    payload: schemas.JobStatusUpdate,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.JobRead:
    job = await JobService(db, guard).update_status(job_id, payload)
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/accept",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Accept Job",
    description="Assigned maid accepts a pending job.",
)
@limiter.limit("10/minute")
async def accept_job(
    request: Request,
    job_id: UUID,
    db: DBDep,
    guard: AccessGuardDep,
    body: VersionBody = None,
) -> schemas.JobRead:
    job = await JobService(db, guard).accept_job(job_id, _expected_version(body))
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/reject",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Reject Job",
    description="Assigned maid declines a pending job; it is recorded as cancelled.",
)
@limiter.limit("10/minute")
async def reject_job(
    request: Request,
    job_id: UUID,
    db: DBDep,
    guard: AccessGuardDep,
    body: VersionBody = None,
) -> schemas.JobRead:
    job = await JobService(db, guard).reject_job(job_id, _expected_version(body))
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/complete",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Complete Job",
    description="Assigned maid marks an accepted job as completed.",
)
@limiter.limit("10/minute")
async def complete_job(
    request: Request,
    job_id: UUID,
    db: DBDep,
    guard: AccessGuardDep,
    body: VersionBody = None,
) -> schemas.JobRead:
    job = await JobService(db, guard).complete_job(job_id, _expected_version(body))
    return schemas.JobRead.model_validate(job)


@router.put(
    "/{job_id}/cancel",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Cancel Job",
    description="Customer or assigned maid cancels a pending job.",
)
@limiter.limit("10/minute")
async def cancel_job(
    request: Request,
    job_id: UUID,
    db: DBDep,
    guard: AccessGuardDep,
    body: VersionBody = None,
) -> schemas.JobRead:
    job = await JobService(db, guard).cancel_job(job_id, _expected_version(body))
    return schemas.JobRead.model_validate(job)


# ---------------------------------------------------
# Shared Endpoints (List / Get)
# ---------------------------------------------------
@router.get(
    "",
    response_model=PaginatedResponse[schemas.JobRead],
    status_code=status.HTTP_200_OK,
    summary="List My Jobs",
    description="Jobs the caller booked or is assigned to, newest first.",
)
async def list_jobs(
    db: DBDep,
    guard: AccessGuardDep,
    pagination: PaginationDep,
    job_status: JobStatus | None = Query(None, alias="status", description="Filter by status"),
) -> PaginatedResponse[schemas.JobRead]:
    jobs, total_count = await JobService(db, guard).list_jobs(
        skip=pagination.skip, limit=pagination.limit, status=job_status
    )
    return PaginatedResponse(
        total_count=total_count,
        has_next_page=(pagination.skip + pagination.limit) < total_count,
        items=[schemas.JobRead.model_validate(j) for j in jobs],
    )


@router.get(
    "/{job_id}",
    response_model=schemas.JobRead,
    status_code=status.HTTP_200_OK,
    summary="Get Job Details",
)
async def get_job(job_id: UUID, db: DBDep, guard: AccessGuardDep) -> schemas.JobRead:
    job = await JobService(db, guard).get_job(job_id)
    return schemas.JobRead.model_validate(job)
