# tests/job/test_transitions.py
import pytest

from maidly.core.exceptions import ConstraintViolation
from maidly.job.models import JobStatus
from maidly.job.transitions import JobParty, allowed_targets, validate_transition

CUSTOMER = frozenset({JobParty.CUSTOMER})
MAID = frozenset({JobParty.MAID})


@pytest.mark.parametrize(
    "current,target,parties",
    [
        (JobStatus.PENDING, JobStatus.ACCEPTED, MAID),
        (JobStatus.PENDING, JobStatus.CANCELLED, CUSTOMER),
        (JobStatus.PENDING, JobStatus.CANCELLED, MAID),
        (JobStatus.ACCEPTED, JobStatus.COMPLETED, MAID),
    ],
)
def test_legal_transitions(current: JobStatus, target: JobStatus, parties: frozenset) -> None:
    validate_transition(current, target, parties)


@pytest.mark.parametrize(
    "current,target",
    [
        (JobStatus.COMPLETED, JobStatus.CANCELLED),
        (JobStatus.CANCELLED, JobStatus.ACCEPTED),
        (JobStatus.PENDING, JobStatus.COMPLETED),
        (JobStatus.ACCEPTED, JobStatus.PENDING),
        (JobStatus.ACCEPTED, JobStatus.CANCELLED),
    ],
)
def test_illegal_transitions_rejected(current: JobStatus, target: JobStatus) -> None:
    with pytest.raises(ConstraintViolation) as exc_info:
        validate_transition(current, target, CUSTOMER | MAID)
    assert exc_info.value.status_code == 409


def test_terminal_status_message() -> None:
    with pytest.raises(ConstraintViolation) as exc_info:
        validate_transition(JobStatus.COMPLETED, JobStatus.CANCELLED, CUSTOMER)
    assert exc_info.value.message == "Job is already completed and can no longer change"


@pytest.mark.parametrize(
    "current,target",
    [(JobStatus.PENDING, JobStatus.ACCEPTED), (JobStatus.ACCEPTED, JobStatus.COMPLETED)],
)
def test_customer_cannot_accept_or_complete(current: JobStatus, target: JobStatus) -> None:
    with pytest.raises(ConstraintViolation) as exc_info:
        validate_transition(current, target, CUSTOMER)
    assert exc_info.value.message.startswith("Only the maid")


def test_allowed_targets() -> None:
    assert allowed_targets(JobStatus.PENDING, CUSTOMER) == {JobStatus.CANCELLED}
    assert allowed_targets(JobStatus.PENDING, MAID) == {JobStatus.ACCEPTED, JobStatus.CANCELLED}
    assert allowed_targets(JobStatus.ACCEPTED, MAID) == {JobStatus.COMPLETED}
    assert allowed_targets(JobStatus.COMPLETED, CUSTOMER | MAID) == set()
