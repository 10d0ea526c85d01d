"""Result types for operations that can fail without raising.

Repositories and services return ``Success`` or ``Failure`` so callers branch
on a value::

    result = await service.get_book(book_id)
    match result:
        case Success(value=book):
            ...
        case Failure(error=ResourceNotFoundError()):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """A failed outcome carrying ``error``."""

    error: E


Result = Union[Success[T], Failure[E]]
