"""Database module for the URL shortener application."""
from urlshortener.db.base import engine, get_engine, get_session, init_models, DatabaseHealthCheck
from urlshortener.db.session import get_db

__all__ = [
    "engine",
    "get_engine",
    "get_session",
    "init_models",
    "DatabaseHealthCheck",
    "get_db",
]
