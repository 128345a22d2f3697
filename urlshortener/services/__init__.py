"""Service layer for the URL shortener application.

This package contains the service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from urlshortener.services.codegen import CodeGenerator
from urlshortener.services.shortener import ShortenedURLService

__all__ = ["CodeGenerator", "ShortenedURLService"]
