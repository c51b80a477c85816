"""
maidly/database/models.py

Core SQLAlchemy ORM Models

Defines:
- Identity: Authenticated accounts (the identity provider's user table)

Imports every domain model so the mapper registry and Alembic see the
full schema:
- Profile (one per identity)
- RoleAssignment (customer / maid tags)
- Maid (service-provider listings)
- Job (bookings)
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maidly.database.base import Base, utcnow
from maidly.job.models import Job
from maidly.maid.models import Maid
from maidly.profile.models import Profile
from maidly.role.models import RoleAssignment

__all__ = ["Identity", "Profile", "RoleAssignment", "Maid", "Job"]

# ---------------------------------------------------
# Identity Model: Authenticated Account
# ---------------------------------------------------


class Identity(Base):
    __tablename__ = "identities"

    # -------------------------------------
    # Fields
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the identity",
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="Login email address"
    )
    hashed_password: Mapped[str] = mapped_column(
        String, nullable=False, comment="Hashed password for authentication"
    )
    user_metadata: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Signup metadata (full_name, phone) copied into the profile",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the identity was created",
    )

    # -------------------------------------
    # Relationships
    # -------------------------------------

    # One-to-One: every identity owns exactly one profile
    profile: Mapped["Profile"] = relationship(
        "Profile", back_populates="identity", uselist=False, passive_deletes=True
    )

    # One-to-Many: role tags granted to this identity
    roles: Mapped[list["RoleAssignment"]] = relationship(
        "RoleAssignment", back_populates="identity", passive_deletes=True
    )
