"""Session management for database operations.

This module provides the FastAPI dependency that hands each request its own
SQLAlchemy async session, with rollback and cleanup on failure.
"""

from typing import AsyncGenerator
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from urlshortener.db.base import get_session

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    Every request gets a fresh session from the shared pool. Repositories
    commit their own writes; anything left open is rolled back when the
    request fails and the session is always closed.

    Yields:
        AsyncSession: A SQLAlchemy async session object.

    Example:
        ```python
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            return await URLRepository(db).count()
        ```
    """
    async with get_session() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error occurred")
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise


