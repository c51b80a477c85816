"""
access/guard.py

AccessGuard binds one caller's AccessContext to the policy engine and is
what the service layer talks to before touching any row:
- authorize(): raise AuthorizationDenied unless a policy allows the write
- visible(): filter rows down to those the caller may read
- ensure_visible(): raise NotFound for a row the caller may not read
"""

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from maidly.access.context import AccessContext
from maidly.access.policies import Operation, PolicyEngine, Resource, policy_engine
from maidly.core.exceptions import AuthorizationDenied, NotFound

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")


class AccessGuard:
    def __init__(self, context: AccessContext, engine: PolicyEngine = policy_engine) -> None:
        self.context = context
        self.engine = engine

    @property
    def identity_id(self) -> Any:
        return self.context.identity_id

    def can(self, resource: Resource, operation: Operation, row: Any) -> bool:
        return self.engine.is_allowed(self.context, resource, operation, row)

    def authorize(self, resource: Resource, operation: Operation, row: Any) -> None:
        """Raise AuthorizationDenied unless some policy allows `operation` on `row`."""
        policy = self.engine.matching_policy(self.context, resource, operation, row)
        if policy is None:
            logger.warning(
                f"[POLICY] Denied {operation.value} on {resource.value} "
                f"for identity {self.context.identity_id}"
            )
            raise AuthorizationDenied(
                f"Not permitted to {operation.value} this {resource.value} row"
            )
        logger.debug(
            f"[POLICY] Allowed {operation.value} on {resource.value} "
            f"for identity {self.context.identity_id} via '{policy.name}'"
        )

    def visible(self, resource: Resource, rows: Iterable[RowT]) -> list[RowT]:
        return [row for row in rows if self.can(resource, Operation.READ, row)]

    def ensure_visible(self, resource: Resource, row: RowT | None, message: str) -> RowT:
        """Return `row` if it exists and is readable; otherwise raise NotFound."""
        if row is None or not self.can(resource, Operation.READ, row):
            raise NotFound(message)
        return row
