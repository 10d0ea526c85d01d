"""Error-to-response mapping for the HTTP boundary.

Resource errors, request validation errors and unexpected exceptions all end
here. Each is logged with its message and answered with a bare status code;
error responses carry no body.

Exports:
    error_response: Map a resource error value to an empty Response
    register_exception_handlers: Install the app-wide handlers
"""

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from loguru import logger

from api.middleware import REQUEST_ID_HEADER, request_id_of
from core.errors import (
    BadResourceError,
    ResourceAlreadyExistsError,
    ResourceError,
    ResourceNotFoundError,
)

STATUS_BY_ERROR: dict[type[ResourceError], int] = {
    ResourceNotFoundError: status.HTTP_404_NOT_FOUND,
    ResourceAlreadyExistsError: status.HTTP_409_CONFLICT,
    BadResourceError: status.HTTP_400_BAD_REQUEST,
}


def status_for(error: ResourceError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: ResourceError) -> Response:
    """Log ``error`` and return an empty response with its status code."""
    status_code = status_for(error)
    logger.warning("{} ({}): {}", type(error).__name__, status_code, error.message)
    return Response(status_code=status_code)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Malformed payloads and unparsable path ids are bad resources (400)."""
    problems = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{loc}: {error.get('msg', 'invalid')}")
    logger.warning(
        "Bad request {} {}: {}",
        request.method,
        request.url.path,
        "; ".join(problems) or "validation failed",
    )
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Store failures and bugs surface as 500, never as 404."""
    logger.bind(request_id=request_id_of(request)).opt(exception=exc).error(
        "Unhandled error on {} {}: {}", request.method, request.url.path, exc
    )
    return Response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers={REQUEST_ID_HEADER: request_id_of(request)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
