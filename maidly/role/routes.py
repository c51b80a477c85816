"""
maidly/role/routes.py

Role Routes
- List the caller's role tags
- Register a role tag for the caller
"""

from fastapi import APIRouter, Request, status

from maidly.core.dependencies import AccessGuardDep, DBDep
from maidly.core.limiter import limiter
from maidly.role import schemas
from maidly.role.services import RoleService

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get(
    "/me",
    response_model=list[schemas.RoleRead],
    status_code=status.HTTP_200_OK,
    summary="List My Roles",
)
async def list_my_roles(db: DBDep, guard: AccessGuardDep) -> list[schemas.RoleRead]:
    roles = await RoleService(db, guard).list_own_roles()
    return [schemas.RoleRead.model_validate(r) for r in roles]


@router.post(
    "",
    response_model=schemas.RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Role",
    description="Grants a role tag to the caller. Each tag can be held once.",
)
@limiter.limit("5/minute")
async def assign_role(
    request: Request,
    payload: schemas.RoleAssign,
    db: DBDep,
    guard: AccessGuardDep,
) -> schemas.RoleRead:
    assignment = await RoleService(db, guard).assign_role(payload)
    return schemas.RoleRead.model_validate(assignment)
