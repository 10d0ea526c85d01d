"""Declarative base for all SQLAlchemy models.

Tables declare no schema of their own; the ``Database`` handle maps the
default schema to the configured one with ``schema_translate_map``.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for bookshelf models."""
    pass
