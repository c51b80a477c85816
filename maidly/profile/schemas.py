"""
maidly/profile/schemas.py

Profile Schemas
Pydantic schemas for reading and updating the caller's own profile.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from maidly.core.validators import full_name_validator, phone_validator

FullNameStr = Annotated[str, AfterValidator(full_name_validator)]
PhoneStr = Annotated[str | None, AfterValidator(phone_validator)]


class ProfileRead(BaseModel):
    """Schema returned when reading a profile (owner only)."""

    id: UUID = Field(..., description="Identity the profile belongs to")
    email: str = Field(..., description="Contact email address")
    full_name: str = Field(..., description="Display name")
    phone: str | None = Field(default=None, description="Contact phone number")
    created_at: datetime = Field(..., description="Timestamp when the profile was created")
    updated_at: datetime = Field(..., description="Timestamp when the profile was last updated")

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Schema used when the owner edits their profile. Omitted fields are left unchanged."""

    full_name: FullNameStr | None = Field(default=None, description="New display name")
    phone: PhoneStr = Field(default=None, description="New phone number (10 digits)")
