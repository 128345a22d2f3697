import asyncio

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from loguru import logger

from urlshortener.api import schemas
from urlshortener.api.dependencies import (
    get_base_url,
    get_shortener_service,
    require_json_content_type,
)
from urlshortener.core.config import settings
from urlshortener.repositories.base import RepositoryError
from urlshortener.services.shortener import ShortenedURLService
from urlshortener.services.exceptions import URLNotFoundError, URLCreationError

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.URLResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json_content_type)],
    responses={
        200: {"model": schemas.URLResponse, "description": "URL was already shortened"},
        400: {"model": schemas.ErrorResponse, "description": "Invalid request or URL"},
        500: {"model": schemas.ErrorResponse, "description": "Could not create the short URL"},
        504: {"model": schemas.ErrorResponse, "description": "Storage did not answer in time"},
    }
)
async def create_short_url(
    url_data: schemas.URLCreateRequest,
    response: Response,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
    base_url: str = Depends(get_base_url)
):
    """Shorten a URL, or return the existing short URL if it was shortened before."""
    try:
        record, created = await asyncio.wait_for(
            shortener_service.shorten(base_url, url_data.url),
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        logger.error("Timed out shortening URL", long_url=url_data.url)
        raise HTTPException(status_code=504, detail="Timed out creating short URL")
    except URLCreationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except RepositoryError as e:
        logger.error("Storage error shortening URL", long_url=url_data.url, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to create short URL")

    if not created:
        response.status_code = status.HTTP_200_OK
    return schemas.URLResponse.model_validate(record)


@router.get(
    "/urls/{code}",
    response_model=schemas.URLResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"}
    }
)
async def get_url_info(
    code: str = Path(..., description="The short code of the URL"),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    try:
        record = await shortener_service.get_url_by_code(code)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return schemas.URLResponse.model_validate(record)
