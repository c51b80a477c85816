"""
job/transitions.py

Job status state machine.

    pending  -> accepted   (maid)
    pending  -> cancelled  (customer or maid)
    accepted -> completed  (maid)

`completed` and `cancelled` are terminal. Every job starts at `pending`.
"""

from enum import Enum

from maidly.core.exceptions import ConstraintViolation
from maidly.job.models import JobStatus


class JobParty(str, Enum):
    """Which side of a job the caller is on."""

    CUSTOMER = "customer"
    MAID = "maid"


TRANSITIONS: dict[tuple[JobStatus, JobStatus], frozenset[JobParty]] = {
    (JobStatus.PENDING, JobStatus.ACCEPTED): frozenset({JobParty.MAID}),
    (JobStatus.PENDING, JobStatus.CANCELLED): frozenset({JobParty.CUSTOMER, JobParty.MAID}),
    (JobStatus.ACCEPTED, JobStatus.COMPLETED): frozenset({JobParty.MAID}),
}

TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED})


def allowed_targets(current: JobStatus, parties: frozenset[JobParty]) -> set[JobStatus]:
    """Statuses the given parties may move a job to from `current`."""
    return {
        target
        for (source, target), movers in TRANSITIONS.items()
        if source == current and movers & parties
    }


def validate_transition(
    current: JobStatus, target: JobStatus, parties: frozenset[JobParty]
) -> None:
    """
    Raise ConstraintViolation unless one of `parties` may move a job from
    `current` to `target`.
    """
    if current in TERMINAL_STATUSES:
        raise ConstraintViolation(f"Job is already {current.value} and can no longer change")

    movers = TRANSITIONS.get((current, target))
    if movers is None:
        raise ConstraintViolation(
            f"Cannot change job status from {current.value} to {target.value}"
        )
    if not movers & parties:
        who = " or ".join(sorted(m.value for m in movers))
        raise ConstraintViolation(
            f"Only the {who} can change job status from {current.value} to {target.value}"
        )
