"""Request context middleware.

Takes the request id from the X-Request-ID header (or generates one) and
binds it into every loguru record emitted while the request is handled,
via ``logger.contextualize`` (backed by a ContextVar, so it is task-safe).
The id is also kept on ``request.state`` for handlers that run outside the
middleware: the 500 handler logs it and echoes it in its response header.
The access line is written even when the handler raises.
"""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_of(request: Request) -> str:
    """Return the id assigned to ``request``, or ``-`` before assignment."""
    return getattr(request.state, "request_id", "-")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request id and log one access line per request.

    Priority:
    1. X-Request-ID header (explicit, e.g. from a proxy)
    2. Fresh uuid4 hex
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        started = time.perf_counter()
        status_code = 500  # unless call_next returns a response
        with logger.contextualize(request_id=request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.info(
                    "{} {} -> {} ({:.1f} ms)",
                    request.method,
                    request.url.path,
                    status_code,
                    elapsed_ms,
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
