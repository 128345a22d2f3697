"""Test utilities for URL shortener tests."""

import asyncio
import random
import string
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from urlshortener.models.url import URLRecord
from urlshortener.repositories.base import DuplicateEntityError

TEST_BASE_URL = "https://shawt.ly/"


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_record(
    db: AsyncSession,
    long_url: Optional[str] = None,
    code: Optional[str] = None,
    base_url: str = TEST_BASE_URL,
) -> URLRecord:
    """Create and commit a URLRecord directly, bypassing the service."""
    code = code or random_string(6)
    record = URLRecord(
        id=uuid.uuid4(),
        code=code,
        long_url=long_url or random_url(),
        short_url=base_url + code,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


class SequenceCodeGenerator:
    """Code generator that hands out a fixed sequence of codes, then repeats the last one."""

    def __init__(self, codes: Iterable[str]):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


class InMemoryURLStore:
    """
    URLStore kept in two dicts.

    Every call yields to the event loop first, so concurrent shorten() calls
    interleave between lookup and insert the way they would against a real
    database. The uniqueness check and the write happen without an await in
    between, which makes insert atomic with respect to other tasks.
    """

    def __init__(self):
        self.by_code: Dict[str, URLRecord] = {}
        self.by_long_url: Dict[str, URLRecord] = {}
        self.insert_calls = 0
        self.long_url_lookups = 0

    async def get_by_long_url(self, long_url: str) -> Optional[URLRecord]:
        self.long_url_lookups += 1
        await asyncio.sleep(0)
        return self.by_long_url.get(long_url)

    async def get_by_code(self, code: str) -> Optional[URLRecord]:
        await asyncio.sleep(0)
        return self.by_code.get(code)

    async def insert(self, id: uuid.UUID, code: str, long_url: str, short_url: str) -> URLRecord:
        self.insert_calls += 1
        await asyncio.sleep(0)
        if code in self.by_code:
            raise DuplicateEntityError(URLRecord, "code", code)
        if long_url in self.by_long_url:
            raise DuplicateEntityError(URLRecord, "long_url", long_url)

        record = URLRecord(
            id=id,
            code=code,
            long_url=long_url,
            short_url=short_url,
            created_at=datetime.now(timezone.utc),
        )
        self.by_code[code] = record
        self.by_long_url[long_url] = record
        return record
