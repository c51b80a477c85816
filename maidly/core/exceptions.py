"""
core/exceptions.py

Defines a standard error response format for the API and the three
failure kinds every data operation can surface:
- AuthorizationDenied: the caller may not perform the operation on the row
- ConstraintViolation: a value, uniqueness, transition or version rule failed
- NotFound: the referenced row is missing or not visible to the caller
"""

from typing import Any

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Custom exception with standardized error response."""

    def __init__(self, status_code: int, message: str, headers: dict[str, Any] | None = None):
        super().__init__(status_code=status_code, detail={"error": message}, headers=headers)
        self.message = message


class AuthorizationDenied(APIError):
    def __init__(self, message: str = "Operation not permitted") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, message=message)


class ConstraintViolation(APIError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, message=message)


class NotFound(APIError):
    def __init__(self, message: str = "Not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message)
