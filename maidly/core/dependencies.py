"""
maidly/core/dependencies.py

Authentication and Authorization Dependencies

Provides authentication and row-level access control for FastAPI routes:
- Validates JWT tokens from Bearer header OR HttpOnly cookie
- Checks against blacklisted tokens (sign-out protection)
- Retrieves the authenticated identity from the database
- Builds the per-request AccessGuard used by every service

Pagination Dependency:
- Provides reusable dependency for pagination (skip, limit).
"""

import logging
from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.context import load_access_context
from maidly.access.guard import AccessGuard
from maidly.core.blacklist import is_token_blacklisted
from maidly.core.tokens import TokenPayload, decode_access_token
from maidly.database.models import Identity
from maidly.database.session import get_db

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# OAuth2 Configuration
# ---------------------------------------------------
# auto_error=False so a missing header falls through to the cookie check
oauth2_scheme: OAuth2PasswordBearer = OAuth2PasswordBearer(
    tokenUrl="/auth/login/oauth", auto_error=False
)


# ---------------------------------------------------
# Pagination Dependency
# ---------------------------------------------------
class PaginationParams:
    """
    Dependency that provides pagination parameters from query parameters.
    """

    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip for pagination"),
        limit: int = Query(100, ge=1, le=500, description="Maximum number of records to return"),
    ):
        self.skip = skip
        self.limit = limit


# ---------------------------------------------------
# Authentication Functions
# ---------------------------------------------------
def _credentials_exception(with_challenge: bool) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"} if with_challenge else None,
    )


async def get_token(
    token_header: Annotated[str | None, Depends(oauth2_scheme)] = None,
    token_cookie: Annotated[str | None, Cookie(alias="access_token")] = None,
) -> str:
    """Return the raw access token, preferring the Authorization header over the cookie."""
    token = token_header or token_cookie
    if token is None:
        logger.debug("[AUTH] No token found in Authorization header or access_token cookie.")
        raise _credentials_exception(with_challenge=True)
    return token


async def get_token_payload(token: Annotated[str, Depends(get_token)]) -> TokenPayload:
    """Decode the access token and reject blacklisted (signed-out) tokens."""
    try:
        payload = decode_access_token(token)
    except (JWTError, ValueError) as e:
        logger.warning(f"[AUTH] JWT decoding/validation failed: {e}")
        raise _credentials_exception(with_challenge=False)

    if await is_token_blacklisted(payload.jti):
        logger.warning(f"[AUTH] Blacklisted token detected: jti={payload.jti}")
        raise _credentials_exception(with_challenge=False)
    return payload


async def get_current_identity(
    payload: Annotated[TokenPayload, Depends(get_token_payload)],
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """
    Authenticate the current identity based on the provided JWT access token.

    Raises:
        HTTPException: 401 Unauthorized if authentication fails.
    """
    identity = await db.get(Identity, payload.sub)
    if not identity:
        logger.warning(f"[AUTH] JWT valid but no matching identity: identity_id={payload.sub}")
        raise _credentials_exception(with_challenge=False)

    logger.debug(f"[AUTH] Identity {identity.id} authenticated successfully.")
    return identity


# ---------------------------------------------------
# Authorization (Row-Level Access Guard)
# ---------------------------------------------------
async def get_access_guard(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: AsyncSession = Depends(get_db),
) -> AccessGuard:
    """Load the caller's roles and maid listing and bind them to the policy engine."""
    context = await load_access_context(db, identity.id)
    return AccessGuard(context)


DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
AccessGuardDep = Annotated[AccessGuard, Depends(get_access_guard)]
