"""Repository layer for the URL shortener application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from urlshortener.repositories.base import (
    BaseRepository,
    RepositoryError,
    DuplicateEntityError,
    URLStore,
)
from urlshortener.repositories.url_repository import URLRepository

__all__ = [
    # Base classes, protocol and exceptions
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",
    "URLStore",

    # Concrete repositories
    "URLRepository",
]
