"""
main.py

Application entrypoint for the Maidly API.
- Initializes structured logging
- Sets up FastAPI application and middlewares
- Registers all API routers
- Integrates rate limiting via SlowAPI
- Adds common security headers and request logging
- Configures CORS
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from starlette.responses import Response

from maidly.auth.routes import router as auth_router
from maidly.core.config import settings
from maidly.core.limiter import limiter
from maidly.core.logging import init_logging
from maidly.job.routes import router as job_router
from maidly.maid.routes import router as maid_router
from maidly.profile.routes import router as profile_router
from maidly.role.routes import router as role_router
from maidly.utils.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

# -----------------------------
# FastAPI App Initialization
# -----------------------------
init_logging()
app = FastAPI(title=settings.APP_NAME)

# -----------------------------
# Middleware Configuration
# -----------------------------
app.state.limiter = limiter


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    return _rate_limit_exceeded_handler(request, exc)  # type: ignore[arg-type]


app.add_exception_handler(429, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(role_router)
app.include_router(maid_router)
app.include_router(job_router)


# -----------------------------
# Health Endpoint
# -----------------------------
@app.get("/", tags=["Health"])
async def health() -> dict[str, Any]:
    return {"app": settings.APP_NAME, "status": "ok"}
