"""
maidly/maid/schemas.py

Maid Schemas
Pydantic schemas for maid listings:
- Creating a listing (Authenticated owner)
- Updating rates, location and description (Authenticated owner)
- Reading listings (Any authenticated identity)

Rate bounds mirror the store's check constraints: each rate is > 0 and
strictly below its limit.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from maidly.maid.models import DAILY_RATE_LIMIT, HOURLY_RATE_LIMIT, MONTHLY_RATE_LIMIT

HourlyRate = Annotated[Decimal, Field(gt=0, lt=HOURLY_RATE_LIMIT, decimal_places=2)]
DailyRate = Annotated[Decimal, Field(gt=0, lt=DAILY_RATE_LIMIT, decimal_places=2)]
MonthlyRate = Annotated[Decimal, Field(gt=0, lt=MONTHLY_RATE_LIMIT, decimal_places=2)]
LocationStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
DescriptionStr = Annotated[str, StringConstraints(max_length=500)]


# ---------------------------------------------------
# Shared Fields Schema
# ---------------------------------------------------
class MaidBase(BaseModel):
    """Listing fields supplied by the maid."""

    hourly_rate: HourlyRate = Field(..., description="Price per hour (< 10,000)")
    daily_rate: DailyRate = Field(..., description="Price per day (< 50,000)")
    monthly_rate: MonthlyRate = Field(..., description="Price per month (< 500,000)")
    location: LocationStr = Field(..., description="Service area, e.g. 'Sector 5, Noida'")
    description: DescriptionStr | None = Field(
        default=None, description="Short introduction shown to customers"
    )


# ---------------------------------------------------
# Create Listing Schema (Authenticated Maid)
# ---------------------------------------------------
class MaidCreate(MaidBase):
    """Schema used when an identity publishes its maid listing."""

    user_id: UUID | None = Field(
        default=None, description="Owning identity; defaults to the caller"
    )


# ---------------------------------------------------
# Update Listing Schema (Authenticated Maid)
# ---------------------------------------------------
class MaidUpdate(BaseModel):
    """Schema used when the owner edits the listing. Omitted fields are left unchanged."""

    hourly_rate: HourlyRate | None = None
    daily_rate: DailyRate | None = None
    monthly_rate: MonthlyRate | None = None
    location: LocationStr | None = None
    description: DescriptionStr | None = None


# ---------------------------------------------------
# Read Listing Schema (Authenticated Output)
# ---------------------------------------------------
class MaidRead(BaseModel):
    """Schema returned when reading a maid listing."""

    id: UUID = Field(..., description="Maid listing unique identifier")
    user_id: UUID = Field(..., description="Owning identity")
    hourly_rate: Decimal = Field(..., description="Price per hour")
    daily_rate: Decimal = Field(..., description="Price per day")
    monthly_rate: Decimal = Field(..., description="Price per month")
    location: str = Field(..., description="Service area")
    description: str | None = Field(default=None, description="Introduction")
    rating: Decimal = Field(..., description="Aggregate rating")
    total_jobs: int = Field(..., description="Total jobs taken")
    completed_jobs: int = Field(..., description="Jobs completed")
    created_at: datetime = Field(..., description="Timestamp when the listing was created")
    updated_at: datetime = Field(..., description="Timestamp when the listing was last updated")

    model_config = ConfigDict(from_attributes=True)
