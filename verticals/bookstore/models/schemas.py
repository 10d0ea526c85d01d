"""Pydantic schemas for API request/response validation."""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field

# Column limits of the books table: Integer id, String(255) text columns.
MAX_BOOK_ID = 2**31 - 1
MAX_TEXT_LENGTH = 255

BookId = Annotated[int, Path(ge=0, le=MAX_BOOK_ID)]


class BookSchema(BaseModel):
    """Wire shape of a Book: ``{"id": 1, "name": "Dune", "author": "Herbert"}``.

    Used as both request body (POST, PUT) and response body. Blank strings
    are accepted here and rejected by the service as a bad resource.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., ge=0, le=MAX_BOOK_ID)
    name: str = Field(..., max_length=MAX_TEXT_LENGTH)
    author: str = Field(..., max_length=MAX_TEXT_LENGTH)
