"""
maidly/core/tokens.py

Token generation and decoding utilities:
- JWT access token with expiration and JTI
- Access token decoder returning a validated payload
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import jwt
from pydantic import BaseModel, Field

from maidly.core.config import settings

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    """
    Decoded JWT payload structure.
    """

    sub: UUID = Field(..., description="Subject (identity ID)")
    exp: int = Field(..., description="Expiration timestamp of the token")
    jti: str = Field(..., description="JWT ID (used for token blacklist)")

    def seconds_remaining(self) -> int:
        """Seconds until the token expires, never negative."""
        return max(self.exp - int(datetime.now(timezone.utc).timestamp()), 0)


# ------------------------------------------------------
# --- Access Token ---
# ------------------------------------------------------
def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token with expiration and unique JTI.

    Args:
        data (dict[str, Any]): Payload data to include in the token (must contain 'sub').
        expires_delta (timedelta | None): Optional custom expiration time. Defaults to settings.

    Returns:
        str: Encoded JWT access token.
    """
    if "sub" not in data:
        logger.error("Access token creation attempt missing 'sub' in data.")
        raise ValueError("Access token payload must include 'sub'.")

    expire: datetime = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    jti: str = str(uuid.uuid4())  # Unique token identifier for blacklisting
    payload: dict[str, Any] = {**data, "sub": str(data["sub"]), "exp": expire, "jti": jti}

    logger.info(f"Issuing access token for sub={data.get('sub')} exp={expire} jti={jti}")
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return str(token)


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and validate an access token.

    Raises:
        JWTError: If the signature is invalid or the token has expired.
        ValueError: If the payload does not match the expected structure.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    return TokenPayload(**payload)
