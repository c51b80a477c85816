"""
maidly/database/enums.py

Enumerations

Defines enumerations shared across the platform:
- AppRole: Role tags an identity can hold (customer, maid)
"""

from enum import Enum

# ---------------------------------------------------
# Application Role Enumeration
# ---------------------------------------------------


class AppRole(str, Enum):
    """
    Enum representing the role tag granted to an identity at signup.

    Values:
    - customer
    - maid
    """

    CUSTOMER = "customer"
    MAID = "maid"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in the database."""
    return [member.value for member in enum_cls]
