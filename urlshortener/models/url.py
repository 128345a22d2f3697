"""URL shortener data models.

This module defines the URLRecord model, the persisted mapping between a
long URL and its short code.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, UniqueConstraint, func
from sqlmodel import Field, SQLModel


class URLRecordBase(SQLModel):
    """Base model for URL mapping data."""

    code: str = Field(
        description="Unique short code identifying the mapping"
    )
    long_url: str = Field(
        description="The original (long) URL to redirect to"
    )
    short_url: str = Field(
        description="Base URL prefix followed by the code"
    )


class URLRecord(URLRecordBase, table=True):
    """
    URL mapping stored in the database.

    A record is written once by the shortening service and never updated.
    Both ``code`` and ``long_url`` carry their own named unique constraint;
    the repository relies on those names to tell the two violations apart.
    """

    __tablename__ = "url_records"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
        description="Timestamp when this mapping was created (set by the database)"
    )

    __table_args__ = (
        UniqueConstraint("code", name="uq_url_records_code"),
        UniqueConstraint("long_url", name="uq_url_records_long_url"),
    )


class URLRecordRead(URLRecordBase):
    """Schema for reading a URL mapping."""
    id: uuid.UUID
    created_at: datetime
