"""
maidly/profile/routes.py

Profile Routes
- Read own profile
- Update own full name and phone
- Read a profile by id (owner only; others get 404)
"""

from uuid import UUID

from fastapi import APIRouter, Request, status

from maidly.core.dependencies import AccessGuardDep, DBDep
from maidly.core.limiter import limiter
from maidly.profile import schemas
from maidly.profile.services import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get(
    "/me",
    response_model=schemas.ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile",
    description="Returns the caller's own profile.",
)
async def get_my_profile(db: DBDep, guard: AccessGuardDep) -> schemas.ProfileRead:
    profile = await ProfileService(db, guard).get_own_profile()
    return schemas.ProfileRead.model_validate(profile)


@router.patch(
    "/me",
    response_model=schemas.ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Update My Profile",
    description="Updates full name and/or phone on the caller's profile.",
)
@limiter.limit("10/minute")
async def update_my_profile(
    request: Request,
    payload: schemas.ProfileUpdate,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.ProfileRead:
    profile = await ProfileService(db, guard).update_own_profile(payload)
    return schemas.ProfileRead.model_validate(profile)


@router.get(
    "/{profile_id}",
    response_model=schemas.ProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get Profile by ID",
    description="Returns a profile the caller is allowed to read.",
)
async def get_profile(profile_id: UUID, db: DBDep, guard: AccessGuardDep) -> schemas.ProfileRead:
    profile = await ProfileService(db, guard).get_profile(profile_id)
    return schemas.ProfileRead.model_validate(profile)
