"""
access/context.py

The caller's access context: who is asking, which role tags they hold and
which maid listing (if any) they own. Loaded once per request and handed to
every policy predicate, so predicates stay pure functions of
(context, row).
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.database.enums import AppRole
from maidly.maid.models import Maid
from maidly.role.models import RoleAssignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessContext:
    identity_id: UUID
    roles: frozenset[AppRole] = field(default_factory=frozenset)
    maid_id: UUID | None = None

    def has_role(self, role: AppRole) -> bool:
        return role in self.roles


async def load_access_context(db: AsyncSession, identity_id: UUID) -> AccessContext:
    """
    Build the context for `identity_id`.

    Role and maid lookups run with system privileges: they are inputs to
    the policies, not reads on the caller's behalf.
    """
    roles_result = await db.execute(
        select(RoleAssignment.role).filter(RoleAssignment.user_id == identity_id)
    )
    roles = frozenset(AppRole(role) for role in roles_result.scalars().all())

    maid_result = await db.execute(select(Maid.id).filter(Maid.user_id == identity_id))
    maid_id = maid_result.scalar_one_or_none()

    logger.debug(f"[POLICY] Context for {identity_id}: roles={sorted(roles)} maid_id={maid_id}")
    return AccessContext(identity_id=identity_id, roles=roles, maid_id=maid_id)
