"""
core/validators.py

Field Validators

Validates signup and profile input the same way the booking UI does:
- Phone numbers are exactly 10 digits (or empty)
- Display names are trimmed and between 2 and 100 characters
"""

import re
from typing import Final


# -------------------------------
# Constants
# -------------------------------
MIN_FULL_NAME_LENGTH: Final[int] = 2
MAX_FULL_NAME_LENGTH: Final[int] = 100
PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d{10}$")


# -------------------------------
# Validator Functions
# -------------------------------
def phone_validator(phone: str | None) -> str | None:
    """
    Validates an optional phone number.

    An empty string is treated as "no phone" and normalized to None.

    Raises:
        ValueError: If the value is not exactly 10 digits.
    """
    if phone is None or phone == "":
        return None
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Phone number must be exactly 10 digits")
    return phone


def full_name_validator(full_name: str) -> str:
    """
    Trims and validates a display name.

    Raises:
        ValueError: If the trimmed name is too short or too long.
    """
    full_name = full_name.strip()
    if len(full_name) < MIN_FULL_NAME_LENGTH:
        raise ValueError(f"Name must be at least {MIN_FULL_NAME_LENGTH} characters")
    if len(full_name) > MAX_FULL_NAME_LENGTH:
        raise ValueError(f"Name must be at most {MAX_FULL_NAME_LENGTH} characters")
    return full_name
