"""Bookstore API router: the /books resource.

Collection:
- GET    /books        list every book                          200
- POST   /books        create; Location: /books/{id}            201 / 409 / 400

Single resource:
- GET    /books/{id}   read one                                 200 / 404
- PUT    /books/{id}   replace all fields, empty body           200 / 404 / 400
- PATCH  /books/{id}   raw text body replaces the author only   200 / 404 / 400
- DELETE /books/{id}   delete                                   200 / 404

Any other method on these paths (POST on a single book, PUT/PATCH/DELETE
on the collection) is answered 405 by the framework router.
"""

import json

from fastapi import APIRouter, Depends, Request, Response, status

from api.exception_handlers import error_response
from core.errors import BadResourceError
from core.result import Failure, Success
from verticals.bookstore.models.schemas import BookId, BookSchema
from verticals.bookstore.service import BookService, get_book_service

router = APIRouter()


def parse_author_body(raw: bytes) -> str | None:
    """Decode a PATCH body into an author string.

    The body is plain text. A JSON string literal (``"F. Herbert"``) is
    unquoted as well. Returns None if the bytes are not UTF-8.
    """
    try:
        text = raw.decode("utf-8").strip()
    except UnicodeDecodeError:
        return None

    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            decoded = json.loads(text)
        except ValueError:
            return text
        if isinstance(decoded, str):
            return decoded.strip()
    return text


# ============================================================================
# Collection
# ============================================================================

@router.get("/books", response_model=list[BookSchema])
async def list_books(service: BookService = Depends(get_book_service)):
    """List all books."""
    books = await service.list_books()
    return [BookSchema.model_validate(book) for book in books]


@router.post("/books", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
async def create_book(
    book: BookSchema,
    request: Request,
    response: Response,
    service: BookService = Depends(get_book_service),
):
    """Create a new book and return it with a Location header."""
    match await service.create_book(book):
        case Success(value=created):
            location = request.app.url_path_for("get_book", book_id=str(created.id))
            response.headers["Location"] = str(location)
            return BookSchema.model_validate(created)
        case Failure(error=error):
            return error_response(error)


# ============================================================================
# Single resource
# ============================================================================

@router.get("/books/{book_id}", response_model=BookSchema)
async def get_book(book_id: BookId, service: BookService = Depends(get_book_service)):
    """Get a book by id."""
    match await service.get_book(book_id):
        case Success(value=book):
            return BookSchema.model_validate(book)
        case Failure(error=error):
            return error_response(error)


@router.put("/books/{book_id}")
async def replace_book(
    book_id: BookId,
    book: BookSchema,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Replace every field of a book (full update)."""
    match await service.replace_book(book_id, book):
        case Success():
            return Response(status_code=status.HTTP_200_OK)
        case Failure(error=error):
            return error_response(error)


@router.patch("/books/{book_id}")
async def update_book_author(
    book_id: BookId,
    request: Request,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Partial update: the raw request body becomes the book's author."""
    author = parse_author_body(await request.body())
    if author is None:
        return error_response(
            BadResourceError(
                message="Author must be UTF-8 text",
                resource_type="Book",
                resource_id=book_id,
                field="author",
            )
        )

    match await service.update_author(book_id, author):
        case Success():
            return Response(status_code=status.HTTP_200_OK)
        case Failure(error=error):
            return error_response(error)


@router.delete("/books/{book_id}")
async def delete_book(
    book_id: BookId,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book. Deleting an absent id is a 404."""
    match await service.delete_book(book_id):
        case Success():
            return Response(status_code=status.HTTP_200_OK)
        case Failure(error=error):
            return error_response(error)
