"""
profile/models.py

Defines the Profile model:
- One row per identity, sharing the identity's primary key
- Materialized automatically when the identity is created
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maidly.database.base import Base, utcnow

if TYPE_CHECKING:
    from maidly.database.models import Identity


class Profile(Base):
    """
    Contact details for an identity. Readable and writable only by its owner.
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(
            "identities.id",
            ondelete="CASCADE",
            name="fk_profiles_id",
            deferrable=True,
            initially="DEFERRED",
        ),
        primary_key=True,
        comment="Identity this profile belongs to",
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, comment="Contact email address")
    full_name: Mapped[str] = mapped_column(Text, nullable=False, comment="Display name")
    phone: Mapped[str | None] = mapped_column(
        String(20), nullable=True, comment="Contact phone number (optional)"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the profile was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the profile was last updated",
    )

    # One-to-One: the identity that owns this profile
    identity: Mapped["Identity"] = relationship("Identity", back_populates="profile")
