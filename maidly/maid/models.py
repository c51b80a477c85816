"""
maid/models.py

Defines the Maid model:
- Public service-provider listing owned by a maid identity
- Stores the three price points with store-enforced bounds
- Tracks aggregate rating and job counters
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Final

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from maidly.database.base import Base, utcnow
from maidly.job.models import JobType

# Exclusive upper bounds for each rate; every rate must also be > 0.
HOURLY_RATE_LIMIT: Final[Decimal] = Decimal("10000")
DAILY_RATE_LIMIT: Final[Decimal] = Decimal("50000")
MONTHLY_RATE_LIMIT: Final[Decimal] = Decimal("500000")


# ------------------------------------------------------
# Maid Model
# ------------------------------------------------------
class Maid(Base):
    """
    Listing for an identity offering maid services.
    Readable by any authenticated identity; writable only by its owner.
    """

    __tablename__ = "maids"
    __table_args__ = (
        CheckConstraint(
            f"hourly_rate > 0 AND hourly_rate < {HOURLY_RATE_LIMIT}",
            name="check_hourly_rate_positive",
        ),
        CheckConstraint(
            f"daily_rate > 0 AND daily_rate < {DAILY_RATE_LIMIT}",
            name="check_daily_rate_positive",
        ),
        CheckConstraint(
            f"monthly_rate > 0 AND monthly_rate < {MONTHLY_RATE_LIMIT}",
            name="check_monthly_rate_positive",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the maid profile",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(
            "profiles.id",
            ondelete="CASCADE",
            name="maids_user_id_fkey",
            deferrable=True,
            initially="DEFERRED",
        ),
        nullable=False,
        unique=True,
        comment="Profile (and identity) that owns this listing",
    )
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    daily_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    monthly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False, comment="Service area")
    description: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="Free-text introduction shown to customers"
    )
    rating: Mapped[Decimal] = mapped_column(
        Numeric(3, 2), nullable=False, default=Decimal("0"), server_default="0"
    )
    total_jobs: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    completed_jobs: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def rate_for(self, job_type: JobType) -> Decimal:
        """Return the price point matching a job type."""
        rates = {
            JobType.HOURLY: self.hourly_rate,
            JobType.DAILY: self.daily_rate,
            JobType.MONTHLY: self.monthly_rate,
        }
        return rates[JobType(job_type)]
