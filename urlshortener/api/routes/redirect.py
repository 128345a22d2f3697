"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import RedirectResponse
from loguru import logger

from urlshortener.api.dependencies import get_shortener_service
from urlshortener.services.shortener import ShortenedURLService
from urlshortener.services.exceptions import URLNotFoundError

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND
)
async def redirect_to_original_url(
    code: str,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Redirect to the original URL for a short code."""
    try:
        long_url = await shortener_service.resolve(code)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.debug("Redirecting", code=code, long_url=long_url)
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
