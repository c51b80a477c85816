"""
database/session.py

Initializes the SQLAlchemy asynchronous engine and session factory.
Provides an AsyncGenerator for database session dependency injection,
and a context manager turning store-level rejections into API errors.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError

from maidly.core.config import settings
from maidly.core.exceptions import ConstraintViolation
from maidly.database import hooks  # noqa: F401  (registers transaction hooks)

logger = logging.getLogger(__name__)

# -----------------------------------------------------
# SQLAlchemy Async Engine Initialization
# -----------------------------------------------------
engine = create_async_engine(
    settings.db_url,
    echo=False,  # Set to True for SQL debugging output
)

# -----------------------------------------------------
# Session Factory for Async Database Access
# -----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,  # Prevents auto-expiration of ORM objects after commit
)


# -----------------------------------------------------
# Dependency: Get Async DB Session
# -----------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI endpoints to provide an async DB session.
    Yields a single session per request, rolls back on exceptions, and closes cleanly.
    """
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception:
            await db.rollback()
            raise


# -----------------------------------------------------
# Store Rejections -> ConstraintViolation
# -----------------------------------------------------
@asynccontextmanager
async def store_errors(db: AsyncSession, message: str) -> AsyncIterator[None]:
    """
    Roll back and raise ConstraintViolation when the wrapped flush/commit is
    rejected by a check, unique or foreign-key constraint, or loses a
    version race on a versioned row.
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"[DB] Constraint rejected write: {message} ({e.orig})")
        raise ConstraintViolation(message) from e
    except StaleDataError as e:
        await db.rollback()
        logger.warning(f"[DB] Concurrent modification detected: {e}")
        raise ConstraintViolation(
            "Row was modified by another request; reload and try again"
        ) from e
