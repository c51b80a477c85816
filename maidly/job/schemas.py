"""
maidly/job/schemas.py

Job Schemas
Pydantic schemas for job-related operations:
- Job creation (Authenticated Customer)
- Status changes: accept / reject / complete (Maid), cancel (Customer or Maid)
- Reading job details (Customer or assigned Maid)
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from maidly.job.models import JobStatus, JobType

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


# ---------------------------------------------------
# Job Creation Schema (Authenticated Customer)
# ---------------------------------------------------
class JobCreate(BaseModel):
    """
    Schema used when a customer books a maid.
    The amount is not accepted from the caller; it is copied from the maid's rate.
    """

    maid_id: UUID = Field(..., description="Maid listing being booked")
    job_date: date = Field(..., description="Date of the job")
    duration: NonEmptyStr = Field(..., description="Free-text duration, e.g. '3 hours'")
    location: NonEmptyStr = Field(..., description="Where the job takes place")
    job_type: JobType = Field(default=JobType.HOURLY, description="hourly, daily or monthly")
    customer_id: UUID | None = Field(
        default=None, description="Booking customer; defaults to the caller"
    )


# ---------------------------------------------------
# Status Change Schemas
# ---------------------------------------------------
class JobVersion(BaseModel):
    """Optional optimistic-concurrency token sent with status changes."""

    expected_version: int | None = Field(
        default=None, ge=1, description="Version the caller last saw; mismatch is rejected"
    )


class JobStatusUpdate(JobVersion):
    """Schema used to move a job to a new status."""

    status: JobStatus = Field(..., description="Target status")


# ---------------------------------------------------
# Read Job Schema (Authenticated Output)
# ---------------------------------------------------
class JobRead(BaseModel):
    """Schema returned when reading job details (customer or assigned maid)."""

    id: UUID = Field(..., description="Job unique identifier")
    customer_id: UUID = Field(..., description="Customer who booked the job")
    maid_id: UUID = Field(..., description="Maid listing the job is assigned to")
    job_date: date = Field(..., description="Date of the job")
    duration: str = Field(..., description="Free-text duration")
    location: str = Field(..., description="Where the job takes place")
    job_type: JobType = Field(..., description="hourly, daily or monthly")
    amount: Decimal = Field(..., description="Price copied from the maid's rate at booking")
    status: JobStatus = Field(..., description="Current status of the job")
    version: int = Field(..., description="Row version for optimistic concurrency")
    created_at: datetime = Field(..., description="Timestamp when the job was created")
    updated_at: datetime = Field(..., description="Timestamp when the job was last updated")

    model_config = ConfigDict(from_attributes=True)
