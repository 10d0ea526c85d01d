"""SQLAlchemy models for the bookstore vertical.

Column names follow the legacy table layout (``bookName``, ``bookAuthor``)
while the Python attributes stay ``name`` and ``author``. The to_dict()
method is the serialisation used in service log lines.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base


class Book(Base):
    """A book row. The id is assigned by the caller, never generated."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        "id", Integer, primary_key=True, autoincrement=False
    )
    name: Mapped[str] = mapped_column("bookName", String(255), nullable=False)
    author: Mapped[str] = mapped_column("bookAuthor", String(255), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "author": self.author,
        }

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, name={self.name!r}, author={self.author!r})"
