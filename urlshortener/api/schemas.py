"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from urlshortener.models.url import URLRecordRead

ALLOWED_URL_SCHEMES = {"http", "https"}


class URLCreateRequest(BaseModel):
    """Request schema for shortening a URL.

    The URL is checked but kept exactly as submitted, so the same string
    always maps to the same code.
    """
    url: str

    @field_validator("url")
    def validate_url(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("missing_url", "Missing field: url")
        try:
            parts = urlsplit(v)
        except ValueError:
            raise PydanticCustomError("unsupported_url", "Malformed or unsupported URL")
        if parts.scheme.lower() not in ALLOWED_URL_SCHEMES or not parts.hostname:
            raise PydanticCustomError("unsupported_url", "Malformed or unsupported URL")
        return v


class URLResponse(URLRecordRead):
    """Response schema for a URL mapping."""
    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None  # Machine-readable error code
