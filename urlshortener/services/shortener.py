"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class, which implements
get-or-create semantics for long URL -> code mappings and resolves codes
back to long URLs.

The service takes no locks. Concurrent callers are kept consistent by the
two unique constraints in storage: a code collision means "try another
code", a long URL collision means "someone else already created it".
"""

import logging
import uuid
from typing import Optional, Tuple

from urlshortener.core.config import settings
from urlshortener.models.url import URLRecord
from urlshortener.repositories.base import DuplicateEntityError, RepositoryError, URLStore
from urlshortener.services.codegen import CodeGenerator
from urlshortener.services.exceptions import ShortCodeGenerationError, URLNotFoundError

logger = logging.getLogger(__name__)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    Holds a reference to an injected URLStore; it never talks to the
    database directly and never reads driver error details.
    """

    def __init__(
        self,
        url_repository: URLStore,
        code_generator: Optional[CodeGenerator] = None,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Storage capability for URL mappings
            code_generator: Source of candidate codes
            max_attempts: Insert attempts allowed before giving up on code collisions
        """
        self.url_repository = url_repository
        self.code_generator = code_generator or CodeGenerator()
        self.max_attempts = settings.URL_CODE_MAX_ATTEMPTS if max_attempts is None else max_attempts

    async def shorten(self, base_url: str, long_url: str) -> Tuple[URLRecord, bool]:
        """
        Return the mapping for ``long_url``, creating it if it doesn't exist yet.

        Args:
            base_url: Prefix for the short URL, normally ending with '/'
            long_url: The already validated original URL

        Returns:
            Tuple[URLRecord, bool]: The mapping and whether this call created it

        Raises:
            ShortCodeGenerationError: If every attempt hit a code collision
            DuplicateEntityError: If another caller created the mapping but it
                could not be read back
            RepositoryError: On any other storage failure
        """
        existing = await self.url_repository.get_by_long_url(long_url)
        if existing is not None:
            return existing, False

        record_id = uuid.uuid4()
        for attempt in range(1, self.max_attempts + 1):
            code = self.code_generator.generate()
            try:
                record = await self.url_repository.insert(
                    record_id, code, long_url, base_url + code
                )
            except DuplicateEntityError as e:
                if e.field_name == "code":
                    logger.info(
                        f"Short code collision on attempt {attempt}/{self.max_attempts}, retrying"
                    )
                    continue
                if e.field_name == "long_url":
                    return await self._read_race_winner(long_url, e), False
                raise

            logger.info(f"Created short code '{record.code}' for {long_url}")
            return record, True

        logger.error(f"Gave up allocating a short code for {long_url} after {self.max_attempts} attempts")
        raise ShortCodeGenerationError(self.max_attempts)

    async def _read_race_winner(self, long_url: str, error: DuplicateEntityError) -> URLRecord:
        """
        Fetch the mapping a concurrent caller committed for ``long_url``.

        Only one re-read is made. If it comes back empty or fails, the race
        is left unresolved and the original insert error is raised.
        """
        try:
            winner = await self.url_repository.get_by_long_url(long_url)
        except RepositoryError as e:
            logger.warning(f"Re-read after long URL conflict failed for {long_url}: {e}")
            winner = None

        if winner is None:
            logger.warning(f"Long URL conflict for {long_url} but no mapping could be read back")
            raise error

        logger.info(f"Lost creation race for {long_url}, returning code '{winner.code}'")
        return winner

    async def get_url_by_code(self, code: str) -> URLRecord:
        """
        Retrieve a mapping by its short code.

        Args:
            code: The short code to look up

        Returns:
            URLRecord: The found mapping

        Raises:
            URLNotFoundError: If no mapping with this code exists
            RepositoryError: On storage failures
        """
        record = await self.url_repository.get_by_code(code)
        if record is None:
            raise URLNotFoundError(f"URL with code '{code}' not found")
        return record

    async def resolve(self, code: str) -> str:
        """
        Resolve a short code to its original URL.

        Args:
            code: The short code to look up

        Returns:
            str: The original URL

        Raises:
            URLNotFoundError: If no mapping with this code exists
            RepositoryError: On storage failures
        """
        record = await self.get_url_by_code(code)
        return record.long_url
