"""
job/models.py

Defines the Job model and associated JobType / JobStatus enums.
- Represents a booking request from a customer to a maid profile
- Carries a version counter checked on every UPDATE (optimistic concurrency)
"""

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, Numeric, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from maidly.database.base import Base, utcnow
from maidly.database.enums import enum_values


# ENUM: Job Type
class JobType(str, enum.Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"


# ENUM: Job Status
class JobStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# MODEL: Job
class Job(Base):
    __tablename__ = "jobs"

    # Basic Identifiers & Foreign Keys
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the job",
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(
            "identities.id",
            ondelete="CASCADE",
            name="fk_jobs_customer_id",
            deferrable=True,
            initially="DEFERRED",
        ),
        nullable=False,
        index=True,
        comment="Customer identity who booked the job",
    )
    maid_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(
            "maids.id",
            ondelete="CASCADE",
            name="fk_jobs_maid_id",
            deferrable=True,
            initially="DEFERRED",
        ),
        nullable=False,
        index=True,
        comment="Maid profile the job is assigned to",
    )

    # Booking Details
    job_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    job_type: Mapped[JobType] = mapped_column(
        Enum(
            JobType,
            name="jobs_job_type_check",
            native_enum=False,
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, comment="Maid's matching rate at booking time"
    )

    # Job Status & Concurrency
    status: Mapped[JobStatus] = mapped_column(
        Enum(
            JobStatus,
            name="jobs_status_check",
            native_enum=False,
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=JobStatus.PENDING,
        server_default=JobStatus.PENDING.value,
        comment="Current status of the job",
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Row version, bumped on every update"
    )

    # Audit Fields
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the job was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when the job was last updated",
    )

    __mapper_args__ = {"version_id_col": version}
