"""
maidly/maid/routes.py

Maid Routes
Defines maid-listing endpoints:
- Browse listings, best rated first (Any authenticated identity)
- Read one listing (Any authenticated identity)
- Read own listing (Authenticated Maid)
- Create / update own listing (Authenticated owner)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from maidly.core.dependencies import AccessGuardDep, DBDep, PaginationParams
from maidly.core.limiter import limiter
from maidly.core.schemas import PaginatedResponse
from maidly.maid import schemas
from maidly.maid.services import MaidService

router = APIRouter(prefix="/maids", tags=["Maids"])

PaginationDep = Annotated[PaginationParams, Depends()]


# ---------------------------------------------------
# Browse Endpoints
# ---------------------------------------------------
@router.get(
    "",
    response_model=PaginatedResponse[schemas.MaidRead],
    status_code=status.HTTP_200_OK,
    summary="List Maids",
    description="Public maid listing ordered by rating (highest first), optionally filtered by location.",
)
async def list_maids(
    db: DBDep,
    guard: AccessGuardDep,
    pagination: PaginationDep,
    location: str | None = Query(None, description="Exact location to filter by"),
) -> PaginatedResponse[schemas.MaidRead]:
    maids, total_count = await MaidService(db, guard).list_maids(
        skip=pagination.skip, limit=pagination.limit, location=location
    )
    return PaginatedResponse(
        total_count=total_count,
        has_next_page=(pagination.skip + pagination.limit) < total_count,
        items=[schemas.MaidRead.model_validate(m) for m in maids],
    )


@router.get(
    "/me",
    response_model=schemas.MaidRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Maid Profile",
)
async def get_my_maid(db: DBDep, guard: AccessGuardDep) -> schemas.MaidRead:
    maid = await MaidService(db, guard).get_own_maid()
    return schemas.MaidRead.model_validate(maid)


@router.get(
    "/{maid_id}",
    response_model=schemas.MaidRead,
    status_code=status.HTTP_200_OK,
    summary="Get Maid by ID",
)
async def get_maid(maid_id: UUID, db: DBDep, guard: AccessGuardDep) -> schemas.MaidRead:
    maid = await MaidService(db, guard).get_maid(maid_id)
    return schemas.MaidRead.model_validate(maid)


# ---------------------------------------------------
# Owner Endpoints
# ---------------------------------------------------
@router.post(
    "",
    response_model=schemas.MaidRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Maid Profile",
    description="Publishes the caller's maid listing. One listing per identity.",
)
@limiter.limit("5/minute")
async def create_maid(
    request: Request,
    payload: schemas.MaidCreate,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.MaidRead:
    maid = await MaidService(db, guard).create_maid(payload)
    return schemas.MaidRead.model_validate(maid)


@router.patch(
    "/{maid_id}",
    response_model=schemas.MaidRead,
    status_code=status.HTTP_200_OK,
    summary="Update Maid Profile",
    description="Owner updates rates, location or description.",
)
@limiter.limit("10/minute")
async def update_maid(
    request: Request,
    maid_id: UUID,
    payload: schemas.MaidUpdate,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.MaidRead:
    maid = await MaidService(db, guard).update_maid(maid_id, payload)
    return schemas.MaidRead.model_validate(maid)
