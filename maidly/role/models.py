"""
role/models.py

Defines the RoleAssignment model (table `user_roles`):
- Maps an identity to a role tag (customer or maid)
- At most one assignment per (identity, role) pair
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from maidly.database.base import Base
from maidly.database.enums import AppRole, enum_values

if TYPE_CHECKING:
    from maidly.database.models import Identity


class RoleAssignment(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="user_roles_user_id_role_key"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the role assignment",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(
            "identities.id",
            ondelete="CASCADE",
            name="fk_user_roles_user_id",
            deferrable=True,
            initially="DEFERRED",
        ),
        nullable=False,
        index=True,
        comment="Identity holding the role",
    )
    role: Mapped[AppRole] = mapped_column(
        Enum(AppRole, name="app_role", values_callable=enum_values),
        nullable=False,
        comment="Role tag (customer, maid)",
    )

    identity: Mapped["Identity"] = relationship("Identity", back_populates="roles")
