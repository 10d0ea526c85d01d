"""Bookstore service: book use cases on top of BookRepository.

Composes the repository's write primitives into create (``insert``), full
replace and author-only update (``save``). Every operation that can fail returns
a ``Result`` whose error is one of the resource error kinds, so the router
branches on values rather than catching exceptions. Successful writes are
committed here.
"""

from __future__ import annotations

from fastapi import Depends
from loguru import logger
from sqlalchemy.exc import IntegrityError

from core.errors import (
    BadResourceError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)
from core.result import Failure, Result, Success
from verticals.bookstore.models.db_models import Book
from verticals.bookstore.models.schemas import MAX_TEXT_LENGTH, BookSchema
from verticals.bookstore.repository import BookRepository, get_book_repository

RESOURCE = "Book"


def _bad(message: str, *, book_id: int | None = None, field: str | None = None) -> Failure:
    return Failure(
        error=BadResourceError(
            message=message,
            resource_type=RESOURCE,
            resource_id=book_id,
            field=field,
        )
    )


def _conflict(book_id: int) -> Failure:
    return Failure(
        error=ResourceAlreadyExistsError(
            message=f"Book with id: {book_id} already exists",
            resource_type=RESOURCE,
            resource_id=book_id,
        )
    )


def _not_found(book_id: int) -> Failure:
    return Failure(
        error=ResourceNotFoundError(
            message=f"Cannot find Book with id: {book_id}",
            resource_type=RESOURCE,
            resource_id=book_id,
        )
    )


def validate_book(book: BookSchema) -> Failure | None:
    """Return a BadResourceError failure for an invalid book, else None."""
    if book.id < 0:
        return _bad("Book id must not be negative", book_id=book.id, field="id")
    if not book.name or not book.name.strip():
        return _bad("Book name is required", book_id=book.id, field="name")
    if not book.author or not book.author.strip():
        return _bad("Book author is required", book_id=book.id, field="author")
    return None


class BookService:
    """Book use cases. One instance per request."""

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def _commit(self) -> None:
        await self.repository.session.commit()

    # -- Reads --

    async def list_books(self) -> list[Book]:
        return await self.repository.find_all()

    async def get_book(self, book_id: int) -> Result[Book, ResourceNotFoundError]:
        book = await self.repository.find_by_id(book_id)
        if book is None:
            return _not_found(book_id)
        return Success(value=book)

    # -- Writes --

    async def create_book(
        self, book: BookSchema
    ) -> Result[Book, ResourceAlreadyExistsError | BadResourceError]:
        """Insert a new book. An existing id is a conflict and is left untouched."""
        invalid = validate_book(book)
        if invalid is not None:
            return invalid

        if await self.repository.exists_by_id(book.id):
            return _conflict(book.id)

        # A concurrent create can still win between the check and the INSERT.
        try:
            saved = await self.repository.insert(Book(**book.model_dump()))
            await self._commit()
        except IntegrityError:
            await self.repository.session.rollback()
            return _conflict(book.id)

        logger.info("Created book {}", saved.to_dict())
        return Success(value=saved)

    async def replace_book(
        self, book_id: int, book: BookSchema
    ) -> Result[Book, ResourceNotFoundError | BadResourceError]:
        """Overwrite every field of an existing book (PUT semantics)."""
        if book.id != book_id:
            return _bad(
                f"Book id {book.id} in body does not match path id {book_id}",
                book_id=book_id,
                field="id",
            )
        invalid = validate_book(book)
        if invalid is not None:
            return invalid

        if not await self.repository.exists_by_id(book_id):
            return _not_found(book_id)

        saved = await self.repository.save(Book(**book.model_dump()))
        await self._commit()
        logger.info("Replaced book {}", saved.to_dict())
        return Success(value=saved)

    async def update_author(
        self, book_id: int, author: str
    ) -> Result[Book, ResourceNotFoundError | BadResourceError]:
        """Change only the author of an existing book (PATCH semantics)."""
        author = (author or "").strip()
        if not author:
            return _bad("Book author is required", book_id=book_id, field="author")
        if len(author) > MAX_TEXT_LENGTH:
            return _bad(
                f"Book author is longer than {MAX_TEXT_LENGTH} characters",
                book_id=book_id,
                field="author",
            )

        existing = await self.repository.find_by_id(book_id)
        if existing is None:
            return _not_found(book_id)

        existing.author = author
        saved = await self.repository.save(existing)
        await self._commit()
        logger.info("Updated author of book {}", saved.to_dict())
        return Success(value=saved)

    async def delete_book(self, book_id: int) -> Result[None, ResourceNotFoundError]:
        result = await self.repository.delete_by_id(book_id)
        if isinstance(result, Success):
            await self._commit()
            logger.info("Deleted book {}", book_id)
        return result


def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookService:
    """FastAPI dependency for BookService."""
    return BookService(repository)
