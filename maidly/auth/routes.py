"""
auth/routes.py

Handles authentication routes including:
- Customer and maid registration
- Login via JSON or OAuth2 form (token in body and HttpOnly cookie)
- Logout (token blacklist) and current-session lookup
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from maidly.auth.schemas import (
    LoginRequest,
    LoginResponse,
    SessionIdentity,
    SignupRequest,
    SignupResponse,
)
from maidly.auth.services import (
    get_session_identity,
    login_user_json,
    login_user_oauth,
    logout_user_token,
    signup_user,
)
from maidly.core.config import settings
from maidly.core.dependencies import CurrentIdentityDep, DBDep, get_token_payload
from maidly.core.limiter import limiter
from maidly.core.schemas import MessageResponse
from maidly.core.tokens import TokenPayload

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
        domain=None,
    )


# ---------------------------------------------------
# Registration
# ---------------------------------------------------
@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register New Identity",
    description="Creates an identity, its profile and role tag; maid signups also create the listing.",
)
@limiter.limit("5/minute")
async def signup(
    request: Request,
    payload: SignupRequest,
    db: DBDep,
) -> SignupResponse:
    return await signup_user(payload, db)


# ---------------------------------------------------
# Login (JSON)
# ---------------------------------------------------
@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with JSON",
    description="Authenticates via JSON. Returns the token and identity; also sets an HttpOnly cookie.",
)
@limiter.limit("10/minute")
async def login_json(
    request: Request,
    payload: LoginRequest,
    response: Response,
    db: DBDep,
) -> LoginResponse:
    login_result = await login_user_json(payload, db)
    _set_session_cookie(response, login_result.access_token)
    return login_result


# ---------------------------------------------------
# Login (OAuth2 Form)
# ---------------------------------------------------
@router.post(
    "/login/oauth",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with OAuth2 Form",
    description="Authenticates via form data (username = email). Used by the OpenAPI docs.",
)
@limiter.limit("10/minute")
async def login_oauth(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DBDep,
) -> LoginResponse:
    login_result = await login_user_oauth(form_data, db)
    _set_session_cookie(response, login_result.access_token)
    return login_result


# ---------------------------------------------------
# Logout
# ---------------------------------------------------
@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Blacklists the current access token and clears the session cookie.",
)
@limiter.limit("20/minute")
async def logout(
    request: Request,
    response: Response,
    payload: Annotated[TokenPayload, Depends(get_token_payload)],
) -> MessageResponse:
    response.delete_cookie(ACCESS_TOKEN_COOKIE, path="/")
    return await logout_user_token(payload)


# ---------------------------------------------------
# Current Session
# ---------------------------------------------------
@router.get(
    "/me",
    response_model=SessionIdentity,
    status_code=status.HTTP_200_OK,
    summary="Current Identity",
    description="Returns the signed-in identity and its role tags.",
)
async def me(identity: CurrentIdentityDep, db: DBDep) -> SessionIdentity:
    return await get_session_identity(identity, db)
