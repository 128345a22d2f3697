"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access database sessions and service instances.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from urlshortener.db.session import get_db
from urlshortener.repositories.url_repository import URLRepository
from urlshortener.services.shortener import ShortenedURLService
from urlshortener.core.config import settings


async def get_url_repository(db: AsyncSession = Depends(get_db)) -> URLRepository:
    """Get a URL repository bound to the request's session."""
    return URLRepository(db)


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(url_repository=url_repo)


def get_base_url() -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL


async def require_json_content_type(request: Request) -> None:
    """Reject request bodies that aren't declared as JSON."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Content-Type must be application/json",
        )
