"""Database connectivity and ORM models."""

from .database import Base, Database

__all__ = ["Base", "Database"]
