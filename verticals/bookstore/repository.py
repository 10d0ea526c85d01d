"""Bookstore repository: CRUD access to the ``books`` table.

All primitives come from BaseRepository; this module binds them to the
Book model and exposes the FastAPI dependency factory.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.bookstore.models.db_models import Book


class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD operations."""

    model = Book


def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
