"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from urlshortener.models.url import URLRecord, URLRecordBase, URLRecordRead

__all__ = [
    "SQLModel",
    "URLRecord",
    "URLRecordBase",
    "URLRecordRead",
]
