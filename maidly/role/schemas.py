"""
maidly/role/schemas.py

Role Assignment Schemas
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from maidly.database.enums import AppRole


class RoleAssign(BaseModel):
    """Schema used when an identity registers a role tag."""

    role: AppRole = Field(..., description="Role tag: customer or maid")
    user_id: UUID | None = Field(
        default=None, description="Target identity; defaults to the caller"
    )


class RoleRead(BaseModel):
    """Schema returned when reading role assignments (owner only)."""

    id: UUID = Field(..., description="Role assignment unique identifier")
    user_id: UUID = Field(..., description="Identity holding the role")
    role: AppRole = Field(..., description="Role tag")

    model_config = ConfigDict(from_attributes=True)
