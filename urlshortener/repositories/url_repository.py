"""URL Repository for the URL shortener application.

This module provides the URLRepository class, the SQLAlchemy implementation of
the URLStore capability. It hides driver-specific integrity errors behind
DuplicateEntityError so the service layer never inspects database messages.
"""

from typing import Dict, Optional
import re
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from urlshortener.models.url import URLRecord
from urlshortener.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError

logger = logging.getLogger(__name__)

# Unique constraint names on url_records and the column each one guards
UNIQUE_CONSTRAINTS: Dict[str, str] = {
    "uq_url_records_code": "code",
    "uq_url_records_long_url": "long_url",
    "url_records_pkey": "id",
}
UNIQUE_COLUMNS = frozenset(UNIQUE_CONSTRAINTS.values())

# Driver messages echo the rejected value, so every pattern is anchored to
# the text the driver puts before it.
PG_CONSTRAINT_RE = re.compile(r'unique constraint "(\w+)"')
SQLITE_COLUMN_RE = re.compile(r"UNIQUE constraint failed: url_records\.(\w+)")
PG_KEY_DETAIL_RE = re.compile(r"Key \((\w+)\)=")


def _constraint_name(error: IntegrityError) -> Optional[str]:
    """Constraint name reported by the driver, when it exposes one."""
    orig = error.orig
    # asyncpg errors arrive wrapped by SQLAlchemy's DBAPI adapter
    cause = getattr(orig, "__cause__", None)
    name = getattr(cause, "constraint_name", None)
    if name:
        return name
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def violated_unique_field(error: IntegrityError) -> Optional[str]:
    """
    Work out which unique constraint an IntegrityError comes from.

    Args:
        error: The IntegrityError raised by the insert

    Returns:
        "code", "long_url" or "id", or None if the error isn't a
        uniqueness violation on url_records
    """
    name = _constraint_name(error)
    if name in UNIQUE_CONSTRAINTS:
        return UNIQUE_CONSTRAINTS[name]

    message = str(error.orig)
    lowered = message.lower()
    if "unique" not in lowered and "duplicate key" not in lowered:
        return None

    match = PG_CONSTRAINT_RE.search(message)
    if match:
        return UNIQUE_CONSTRAINTS.get(match.group(1))

    match = SQLITE_COLUMN_RE.search(message)
    if match:
        return match.group(1) if match.group(1) in UNIQUE_COLUMNS else None

    # First "Key (column)=" is the driver's; later ones can only come from the value
    match = PG_KEY_DETAIL_RE.search(message)
    if match and match.group(1) in UNIQUE_COLUMNS:
        return match.group(1)
    return None


class URLRepository(BaseRepository[URLRecord]):
    """
    Repository for URLRecord database operations.

    Lookups are plain point queries. ``insert`` commits its own transaction,
    so a mapping is either fully persisted or not at all by the time the
    call returns.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the repository with a session and the URLRecord model type."""
        super().__init__(db, URLRecord)

    async def get_by_long_url(self, long_url: str) -> Optional[URLRecord]:
        """
        Find a mapping by its original URL.

        Args:
            long_url: The original URL to look up

        Returns:
            The URLRecord if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_one_by(long_url=long_url)

    async def get_by_code(self, code: str) -> Optional[URLRecord]:
        """
        Find a mapping by its short code.

        Args:
            code: The short code to look up

        Returns:
            The URLRecord if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_one_by(code=code)

    async def count_by_long_url(self, long_url: str) -> int:
        """Number of mappings stored for a long URL (0 or 1)."""
        return await self.count(long_url=long_url)

    async def insert(
        self,
        id: uuid.UUID,
        code: str,
        long_url: str,
        short_url: str,
    ) -> URLRecord:
        """
        Insert a new mapping and commit it.

        Args:
            id: Identifier for the new mapping
            code: Candidate short code
            long_url: The original URL
            short_url: Base URL followed by the code

        Returns:
            The stored URLRecord, including the server-assigned created_at

        Raises:
            DuplicateEntityError: If the code, long URL or id is already taken;
                ``field_name`` tells which
            RepositoryError: On any other database error
        """
        record = URLRecord(id=id, code=code, long_url=long_url, short_url=short_url)
        values = {"id": id, "code": code, "long_url": long_url}

        try:
            self.db.add(record)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            field = violated_unique_field(e)
            if field is None:
                logger.error(f"Integrity error inserting URLRecord: {e}")
                raise RepositoryError(f"Database error creating URL record: {e}") from e
            raise DuplicateEntityError(self.model_type, field, values[field]) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Error inserting URLRecord: {e}")
            raise RepositoryError(f"Database error creating URL record: {e}") from e

        try:
            # Load created_at, which the database fills in
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            logger.error(f"Error reloading URLRecord {id} after insert: {e}")
            raise RepositoryError(f"Database error reloading URL record: {e}") from e
        return record
