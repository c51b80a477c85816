"""
maidly/role/services.py

Role Service Layer
Handles role-assignment reads and self-registration.
An identity may only grant a role to itself, at most once per role.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.guard import AccessGuard
from maidly.access.policies import Operation, Resource
from maidly.database.session import store_errors
from maidly.role import models, schemas

logger = logging.getLogger(__name__)

DUPLICATE_ROLE_MESSAGE = "Role already assigned to this identity"


class RoleService:
    def __init__(self, db: AsyncSession, guard: AccessGuard) -> None:
        self.db = db
        self.guard = guard

    async def list_own_roles(self) -> list[models.RoleAssignment]:
        result = await self.db.execute(
            select(models.RoleAssignment)
            .filter(models.RoleAssignment.user_id == self.guard.identity_id)
            .order_by(models.RoleAssignment.role)
        )
        return self.guard.visible(Resource.USER_ROLES, result.scalars().all())

    async def stage_role(self, payload: schemas.RoleAssign) -> models.RoleAssignment:
        """
        Authorize and flush a role assignment without committing, so callers
        (e.g. signup) can bundle it into a larger transaction.
        """
        assignment = models.RoleAssignment(
            user_id=payload.user_id or self.guard.identity_id,
            role=payload.role,
        )
        self.guard.authorize(Resource.USER_ROLES, Operation.INSERT, assignment)

        self.db.add(assignment)
        async with store_errors(self.db, DUPLICATE_ROLE_MESSAGE):
            await self.db.flush()
        return assignment

    async def assign_role(self, payload: schemas.RoleAssign) -> models.RoleAssignment:
        """Insert a role assignment for the caller and commit."""
        assignment = await self.stage_role(payload)
        async with store_errors(self.db, DUPLICATE_ROLE_MESSAGE):
            await self.db.commit()
        logger.info(f"Role assigned: user_id={assignment.user_id} role={assignment.role.value}")
        return assignment
