"""
access/policies.py

Row-Level Access Policies

A small rule engine: every (resource, operation) pair has zero or more
named predicates taking (AccessContext, row) and returning allow/deny.
Policies for the same pair are permissive (any match allows); a pair with
no policy denies everything, including delete, which is never registered.

Rules:
- profiles:   read/update by owner only
- user_roles: read by owner; insert only for oneself
- maids:      read by any authenticated identity; insert/update by owner
- jobs:       read/update by the customer or the assigned maid;
              insert by the customer themself, holding the customer role
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from maidly.access.context import AccessContext
from maidly.database.enums import AppRole


class Operation(str, Enum):
    READ = "read"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class Resource(str, Enum):
    PROFILES = "profiles"
    USER_ROLES = "user_roles"
    MAIDS = "maids"
    JOBS = "jobs"


Predicate = Callable[[AccessContext, Any], bool]


@dataclass(frozen=True)
class Policy:
    name: str
    resource: Resource
    operation: Operation
    predicate: Predicate


class PolicyEngine:
    """Registry and evaluator for row-level policies."""

    def __init__(self) -> None:
        self._policies: dict[tuple[Resource, Operation], list[Policy]] = defaultdict(list)

    def policy(
        self, resource: Resource, *operations: Operation, name: str
    ) -> Callable[[Predicate], Predicate]:
        """Decorator registering a predicate for one or more operations on a resource."""

        def register(predicate: Predicate) -> Predicate:
            for operation in operations:
                self._policies[(resource, operation)].append(
                    Policy(name=name, resource=resource, operation=operation, predicate=predicate)
                )
            return predicate

        return register

    def policies_for(self, resource: Resource, operation: Operation) -> list[Policy]:
        return list(self._policies.get((resource, operation), []))

    def matching_policy(
        self, context: AccessContext, resource: Resource, operation: Operation, row: Any
    ) -> Policy | None:
        """Return the first policy allowing the operation, or None if all deny."""
        for policy in self._policies.get((resource, operation), []):
            if policy.predicate(context, row):
                return policy
        return None

    def is_allowed(
        self, context: AccessContext, resource: Resource, operation: Operation, row: Any
    ) -> bool:
        return self.matching_policy(context, resource, operation, row) is not None


policy_engine = PolicyEngine()


# ---------------------------------------------------
# profiles
# ---------------------------------------------------
@policy_engine.policy(Resource.PROFILES, Operation.READ, name="Users can view own profile")
def _view_own_profile(ctx: AccessContext, row: Any) -> bool:
    return bool(row.id == ctx.identity_id)


@policy_engine.policy(Resource.PROFILES, Operation.UPDATE, name="Users can update own profile")
def _update_own_profile(ctx: AccessContext, row: Any) -> bool:
    return bool(row.id == ctx.identity_id)


# ---------------------------------------------------
# user_roles
# ---------------------------------------------------
@policy_engine.policy(Resource.USER_ROLES, Operation.READ, name="Users can view own roles")
def _view_own_roles(ctx: AccessContext, row: Any) -> bool:
    return bool(row.user_id == ctx.identity_id)


@policy_engine.policy(
    Resource.USER_ROLES, Operation.INSERT, name="Users can insert own role on signup"
)
def _insert_own_role(ctx: AccessContext, row: Any) -> bool:
    return bool(row.user_id == ctx.identity_id)


# ---------------------------------------------------
# maids
# ---------------------------------------------------
@policy_engine.policy(Resource.MAIDS, Operation.READ, name="Anyone can view maids")
def _view_maids(ctx: AccessContext, row: Any) -> bool:
    return True


@policy_engine.policy(
    Resource.MAIDS, Operation.INSERT, Operation.UPDATE, name="Maids can manage own profile"
)
def _manage_own_maid_profile(ctx: AccessContext, row: Any) -> bool:
    return bool(row.user_id == ctx.identity_id)


# ---------------------------------------------------
# jobs
# ---------------------------------------------------
def _is_job_customer(ctx: AccessContext, row: Any) -> bool:
    return bool(row.customer_id == ctx.identity_id)


def _is_assigned_maid(ctx: AccessContext, row: Any) -> bool:
    return ctx.maid_id is not None and row.maid_id == ctx.maid_id


policy_engine.policy(
    Resource.JOBS, Operation.READ, Operation.UPDATE, name="Customers can access own jobs"
)(_is_job_customer)
policy_engine.policy(
    Resource.JOBS, Operation.READ, Operation.UPDATE, name="Maids can access assigned jobs"
)(_is_assigned_maid)


@policy_engine.policy(Resource.JOBS, Operation.INSERT, name="Customers can create jobs")
def _create_job(ctx: AccessContext, row: Any) -> bool:
    return _is_job_customer(ctx, row) and ctx.has_role(AppRole.CUSTOMER)
