"""
auth/services.py

Handles authentication-related business logic:
- Signup (identity + profile + role tag, and maid listing for maids) in one transaction
- Login (JSON / OAuth2 form) and JWT issuance
- Logout via token blacklist
- Session lookup for the current identity
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maidly.access.context import AccessContext
from maidly.access.guard import AccessGuard
from maidly.auth.schemas import (
    LoginRequest,
    LoginResponse,
    SessionIdentity,
    SignupRequest,
    SignupResponse,
)
from maidly.core.blacklist import blacklist_token
from maidly.core.exceptions import ConstraintViolation
from maidly.core.schemas import MessageResponse
from maidly.core.security import get_password_hash, verify_password
from maidly.core.tokens import TokenPayload, create_access_token
from maidly.database.enums import AppRole
from maidly.database.models import Identity
from maidly.database.session import store_errors
from maidly.maid.services import MaidService
from maidly.role.models import RoleAssignment
from maidly.role.schemas import RoleAssign
from maidly.role.services import RoleService

logger = logging.getLogger(__name__)

SIGNUP_REJECTED_MESSAGE = "Email already registered"


# ------------------------------------------------
# Helpers
# ------------------------------------------------
async def _roles_for(identity_id: UUID, db: AsyncSession) -> list[AppRole]:
    result = await db.execute(
        select(RoleAssignment.role)
        .filter(RoleAssignment.user_id == identity_id)
        .order_by(RoleAssignment.role)
    )
    return [AppRole(role) for role in result.scalars().all()]


async def _session_identity(identity: Identity, db: AsyncSession) -> SessionIdentity:
    return SessionIdentity(
        id=identity.id,
        email=identity.email,
        created_at=identity.created_at,
        roles=await _roles_for(identity.id, db),
    )


# ------------------------------------------------
# Signup
# ------------------------------------------------
async def signup_user(payload: SignupRequest, db: AsyncSession) -> SignupResponse:
    """
    Register a new identity.

    The profile row is provisioned by the flush hook; the role tag (and the
    maid listing for maid signups) go through the same policies a signed-in
    caller would face, acting as the new identity.
    """
    email = payload.email.lower()
    email_exists = (
        await db.execute(select(Identity.id).filter(Identity.email == email))
    ).scalar_one_or_none()
    if email_exists:
        logger.warning(f"Signup attempt with existing email: {email}")
        raise ConstraintViolation(SIGNUP_REJECTED_MESSAGE)

    identity = Identity(
        email=email,
        hashed_password=get_password_hash(payload.password),
        user_metadata={"full_name": payload.full_name, "phone": payload.phone},
    )
    db.add(identity)
    async with store_errors(db, SIGNUP_REJECTED_MESSAGE):
        await db.flush()

    guard = AccessGuard(AccessContext(identity_id=identity.id))
    await RoleService(db, guard).stage_role(RoleAssign(role=payload.role))

    maid_id = None
    if payload.role == AppRole.MAID:
        maid = await MaidService(db, guard).stage_maid(payload.maid_listing(identity.id))
        maid_id = maid.id

    async with store_errors(db, SIGNUP_REJECTED_MESSAGE):
        await db.commit()
    logger.info(f"New identity registered: {identity.email} (ID: {identity.id}) as {payload.role.value}")

    return SignupResponse(
        identity=SessionIdentity(
            id=identity.id,
            email=identity.email,
            created_at=identity.created_at,
            roles=[payload.role],
        ),
        maid_id=maid_id,
    )


# ------------------------------------------------
# Login
# ------------------------------------------------
async def _authenticate_identity(email: str, password: str, db: AsyncSession) -> Identity:
    """Fetch and validate credentials; the same 401 covers unknown email and bad password."""
    identity = (
        await db.execute(select(Identity).filter(Identity.email == email.lower()))
    ).scalar_one_or_none()

    if not identity or not verify_password(password, identity.hashed_password):
        logger.warning(f"Failed login attempt for email: {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def _issue_session(identity: Identity, db: AsyncSession) -> LoginResponse:
    session_identity = await _session_identity(identity, db)
    access_token = create_access_token({"sub": str(identity.id)})
    logger.info(f"Identity logged in successfully: {identity.email}")
    return LoginResponse(access_token=access_token, identity=session_identity)


async def login_user_json(payload: LoginRequest, db: AsyncSession) -> LoginResponse:
    """Authenticates an identity via JSON email/password."""
    identity = await _authenticate_identity(payload.email, payload.password, db)
    return await _issue_session(identity, db)


async def login_user_oauth(form_data: Any, db: AsyncSession) -> LoginResponse:
    """Authenticates an identity via OAuth2 form data (username=email)."""
    identity = await _authenticate_identity(form_data.username, form_data.password, db)
    return await _issue_session(identity, db)


# ------------------------------------------------
# Logout
# ------------------------------------------------
async def logout_user_token(payload: TokenPayload) -> MessageResponse:
    """Blacklists the caller's access token for the rest of its lifetime."""
    ttl = payload.seconds_remaining()
    if ttl > 0:
        await blacklist_token(payload.jti, ttl)
        logger.info(f"Access token blacklisted (JTI: {payload.jti}) for {ttl} seconds.")
    else:
        logger.info(f"Access token already expired (JTI: {payload.jti}). No blacklist needed.")
    return MessageResponse(detail="Logout successful")


# ------------------------------------------------
# Current Session
# ------------------------------------------------
async def get_session_identity(identity: Identity, db: AsyncSession) -> SessionIdentity:
    return await _session_identity(identity, db)
