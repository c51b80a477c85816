"""
auth/schemas.py

Defines Pydantic models for authentication flows:
- Signup and login request payloads (customer and maid signup)
- Token response structure
- Authenticated identity response schema
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Self
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    model_validator,
)

from maidly.core.validators import full_name_validator, phone_validator
from maidly.database.enums import AppRole
from maidly.maid.schemas import (
    DailyRate,
    DescriptionStr,
    HourlyRate,
    LocationStr,
    MaidCreate,
    MonthlyRate,
)

# --------------------------------------------------
# Custom Types
# --------------------------------------------------

FullNameStr = Annotated[str, AfterValidator(full_name_validator)]
PhoneStr = Annotated[str | None, AfterValidator(phone_validator)]


# --------------------------------------------------
# AUTH REQUEST SCHEMAS
# --------------------------------------------------


class LoginRequest(BaseModel):
    """
    Request schema for sign-in using JSON payload.
    """

    email: EmailStr = Field(..., max_length=255, description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


class SignupRequest(BaseModel):
    """
    Request schema for new account registration.
    Maid signups must also supply the listing fields.
    """

    email: EmailStr = Field(..., max_length=255, description="Email address for new account")
    password: str = Field(
        ..., min_length=8, max_length=72, description="Password (8-72 characters)"
    )
    full_name: FullNameStr = Field(..., description="Display name (2-100 characters)")
    phone: PhoneStr = Field(default=None, description="Phone number (exactly 10 digits)")
    role: AppRole = Field(default=AppRole.CUSTOMER, description="customer or maid")

    # --- Maid listing fields ---
    hourly_rate: HourlyRate | None = Field(default=None, description="Maid only: hourly rate")
    daily_rate: DailyRate | None = Field(default=None, description="Maid only: daily rate")
    monthly_rate: MonthlyRate | None = Field(default=None, description="Maid only: monthly rate")
    location: LocationStr | None = Field(default=None, description="Maid only: service area")
    description: DescriptionStr | None = Field(default=None, description="Maid only: intro")

    @model_validator(mode="after")
    def require_listing_for_maids(self) -> Self:
        if self.role == AppRole.MAID:
            missing = [
                name
                for name in ("hourly_rate", "daily_rate", "monthly_rate", "location")
                if getattr(self, name) is None
            ]
            if missing:
                raise ValueError(f"Maid signup requires: {', '.join(missing)}")
        return self

    def maid_listing(self, user_id: UUID) -> MaidCreate:
        """Listing payload for a maid signup."""
        return MaidCreate(
            user_id=user_id,
            hourly_rate=self.hourly_rate or Decimal("0"),
            daily_rate=self.daily_rate or Decimal("0"),
            monthly_rate=self.monthly_rate or Decimal("0"),
            location=self.location or "",
            description=self.description,
        )


# --------------------------------------------------
# AUTH RESPONSE SCHEMAS
# --------------------------------------------------


class IdentityRead(BaseModel):
    """
    Response schema representing an authenticated identity.
    """

    id: UUID = Field(..., description="Unique identifier for the identity")
    email: EmailStr = Field(..., description="Account email address")
    created_at: datetime = Field(..., description="Timestamp when the identity was created")

    model_config = ConfigDict(from_attributes=True)


class SessionIdentity(IdentityRead):
    """Identity plus the role tags it holds, used to pick a dashboard."""

    roles: list[AppRole] = Field(default_factory=list, description="Role tags held")


class SignupResponse(BaseModel):
    """Response schema after successful signup."""

    identity: SessionIdentity = Field(..., description="The newly created identity")
    maid_id: UUID | None = Field(default=None, description="Listing id for maid signups")


class LoginResponse(BaseModel):
    """
    Response schema after successful sign-in. The token is also set as an
    HttpOnly cookie.
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Type of the token (default: bearer)")
    identity: SessionIdentity = Field(..., description="Details of the authenticated identity")
