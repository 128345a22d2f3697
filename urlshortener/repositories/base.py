"""Base repository implementation for the URL shortener application.

This module provides the repository error hierarchy, a small generic
BaseRepository bound to one async session, and the URLStore protocol the
shortening service depends on.
"""

from typing import Any, Generic, Optional, Protocol, Type, TypeVar
import logging
import uuid

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from urlshortener.models.url import URLRecord

# Type variable for model types
T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated.

    ``field_name`` names the column whose constraint rejected the write,
    so callers can react to each violation differently.
    """

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


class URLStore(Protocol):
    """Storage capability consumed by the shortening service.

    Lookups return None when nothing matches. ``insert`` is a single atomic
    write that raises DuplicateEntityError with ``field_name`` set to
    ``"code"`` or ``"long_url"`` on a uniqueness violation, and
    RepositoryError for any other failure.
    """

    async def get_by_long_url(self, long_url: str) -> Optional[URLRecord]: ...

    async def get_by_code(self, code: str) -> Optional[URLRecord]: ...

    async def insert(
        self, id: uuid.UUID, code: str, long_url: str, short_url: str
    ) -> URLRecord: ...


class BaseRepository(Generic[T]):
    """
    Base repository implementing common read operations for SQLModel entities.

    A repository instance is bound to one session, which is normally the
    request-scoped session handed out by ``get_db``.

    Type parameters:
        T: The SQLModel type this repository manages
    """

    def __init__(self, db: AsyncSession, model_type: Type[T]):
        """
        Initialize the repository with a session and a model type.

        Args:
            db: Database session
            model_type: The SQLModel class this repository will work with
        """
        self.db = db
        self.model_type = model_type

    async def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get an entity by its ID.

        Args:
            id: Entity ID

        Returns:
            The entity if found, None otherwise
        """
        try:
            return await self.db.get(self.model_type, id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} with id {id}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def get_one_by(self, **filters: Any) -> Optional[T]:
        """
        Get the single entity matching field=value filters.

        Args:
            **filters: Field=value pairs to filter by

        Returns:
            The entity if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        if not filters:
            raise ValueError("No conditions provided for lookup")

        conditions = [getattr(self.model_type, field) == value for field, value in filters.items()]
        try:
            result = await self.db.execute(select(self.model_type).where(*conditions))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} by {list(filters)}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def count(self, **filters: Any) -> int:
        """
        Count entities, optionally restricted by field=value filters.

        Returns:
            Number of matching entities

        Raises:
            RepositoryError: On database errors
        """
        conditions = [getattr(self.model_type, field) == value for field, value in filters.items()]
        try:
            query = select(func.count()).select_from(self.model_type)
            if conditions:
                query = query.where(*conditions)
            result = await self.db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e
