"""
Translation of errors into HTTP responses.

Expected failures (validation, not found, malformed requests) are turned into
structured 4xx responses by exception handlers. Anything else ends up in
ErrorHandlerMiddleware, the single sink for unexpected failures.
"""
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from schemas.errors import ErrorResponse
from services.exceptions import (
    BookmarkNotFoundError,
    BookmarkValidationError,
    MalformedBodyError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "server error"
MALFORMED_BODY_MESSAGE = MalformedBodyError.message


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    """Build a `{"error": {"message": ...}}` JSON response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.build(message),
        headers=headers,
    )


async def bookmark_validation_exception_handler(
    _request: Request, exc: BookmarkValidationError,
) -> JSONResponse:
    """Invalid bookmark payloads are client errors."""
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def bookmark_not_found_exception_handler(
    _request: Request, exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Unknown (or unparseable) bookmark IDs."""
    return error_response(status.HTTP_404_NOT_FOUND, exc.message)


async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Bodies that are not JSON objects never reach the bookmark validators."""
    logger.debug("Rejected malformed request body: %s", exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, MALFORMED_BODY_MESSAGE)


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> Response:
    """Render framework HTTP errors (unknown route, wrong method) in the error envelope."""
    if exc.status_code in {status.HTTP_204_NO_CONTENT, status.HTTP_304_NOT_MODIFIED}:
        return Response(status_code=exc.status_code, headers=exc.headers)
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for all expected failures on the app."""
    app.add_exception_handler(BookmarkValidationError, bookmark_validation_exception_handler)
    app.add_exception_handler(BookmarkNotFoundError, bookmark_not_found_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Convert unexpected exceptions into 500 responses.

    In production the body is the generic `{"error": {"message": "server error"}}`.
    Otherwise the exception text and type are included to ease debugging.
    """

    def __init__(self, app: ASGIApp, production: bool) -> None:
        super().__init__(app)
        self.production = production

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Run the request, catching anything the exception handlers did not."""
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled error processing %s %s", request.method, request.url.path,
            )
            if self.production:
                content = ErrorResponse.build(GENERIC_SERVER_ERROR)
            else:
                content = {
                    "error": {
                        "message": str(e) or GENERIC_SERVER_ERROR,
                        "type": type(e).__name__,
                    },
                }
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content,
            )
