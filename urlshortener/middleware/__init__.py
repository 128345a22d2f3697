"""HTTP middleware for the URL shortener application."""

from urlshortener.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
