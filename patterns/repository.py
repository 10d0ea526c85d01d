"""Async repository pattern for database access.

Provides a generic base repository with the classic CRUD primitives
(find-all, find-by-id, exists, count, insert, save, delete-by-id) keyed by an
integer primary key. Resources subclass it and set ``model``.

``save`` inserts a new row or overwrites every column of an existing one;
``insert`` only ever inserts, so a duplicate key surfaces as an error.
Repositories flush but never commit; the caller owns the transaction.

Example: BookRepository extending BaseRepository.
"""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ResourceNotFoundError
from core.models.base import Base
from core.result import Failure, Result, Success

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async CRUD repository.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            async def find_by_author(self, author: str) -> list[Book]:
                stmt = select(self.model).where(self.model.author == author)
                result = await self.session.execute(stmt)
                return list(result.scalars().all())
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def resource_type(self) -> str:
        return self.model.__name__

    # -- Reads --

    async def find_all(self) -> list[ModelT]:
        """Return every row, ordered by primary key."""
        stmt = select(self.model).order_by(self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_id(self, item_id: int) -> ModelT | None:
        """Return the row with ``item_id`` or None. Absence is not an error."""
        return await self.session.get(self.model, item_id)

    async def exists_by_id(self, item_id: int) -> bool:
        stmt = select(self.model.id).where(self.model.id == item_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    # -- Insert (new rows only) --

    async def insert(self, item: ModelT) -> ModelT:
        """Insert ``item`` as a new row.

        A duplicate primary key raises ``sqlalchemy.exc.IntegrityError`` on
        flush; the caller rolls back.
        """
        self.session.add(item)
        await self.session.flush()
        return item

    # -- Save (insert or full replace) --

    async def save(self, item: ModelT) -> ModelT:
        """Insert ``item`` or overwrite the row sharing its primary key."""
        persisted = await self.session.merge(item)
        await self.session.flush()
        return persisted

    # -- Delete --

    async def delete_by_id(self, item_id: int) -> Result[None, ResourceNotFoundError]:
        """Delete the row with ``item_id``; Failure when it does not exist."""
        item = await self.find_by_id(item_id)
        if item is None:
            return Failure(
                error=ResourceNotFoundError(
                    message=f"Cannot find {self.resource_type} with id: {item_id}",
                    resource_type=self.resource_type,
                    resource_id=item_id,
                )
            )

        await self.session.delete(item)
        await self.session.flush()
        return Success(value=None)
