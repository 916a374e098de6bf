"""
Paper API errors and the handlers that turn them into HTTP responses.

Response contract:
- payload problems      -> 400 {"error": "Validation Error", "messages": [...]}
- malformed id / query  -> 400 {"error": "Validation Error", "message": "..."}
- missing paper         -> 404 {"error": "Paper not found"}
- storage / anything else -> 500, logged with traceback
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.db import StorageError

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "Validation Error"
INVALID_ID_FORMAT = "Invalid ID format"
INVALID_QUERY_FORMAT = "Invalid query parameter format"
INVALID_BODY = "Invalid request body"
PAPER_NOT_FOUND = "Paper not found"


class PaperError(Exception):
    pass


class PaperValidationError(PaperError):
    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class FormatError(PaperError):
    message = "Invalid request"

    def __init__(self) -> None:
        super().__init__(self.message)


class InvalidIdError(FormatError):
    message = INVALID_ID_FORMAT


class InvalidQueryError(FormatError):
    message = INVALID_QUERY_FORMAT


class PaperNotFoundError(PaperError):
    def __init__(self, paper_id: int | None = None) -> None:
        super().__init__(PAPER_NOT_FOUND)
        self.paper_id = paper_id


def _internal_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PaperValidationError)
    async def paper_validation_error_handler(request: Request, exc: PaperValidationError):
        logger.warning("validation_error path=%s messages=%s", request.url.path, exc.messages)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": VALIDATION_ERROR, "messages": exc.messages},
        )

    @app.exception_handler(FormatError)
    async def format_error_handler(request: Request, exc: FormatError):
        logger.warning("format_error path=%s message=%s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": VALIDATION_ERROR, "message": exc.message},
        )

    @app.exception_handler(PaperNotFoundError)
    async def not_found_handler(request: Request, exc: PaperNotFoundError):
        logger.warning("paper_not_found path=%s paper_id=%s", request.url.path, exc.paper_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": PAPER_NOT_FOUND},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("request_error path=%s errors=%s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": VALIDATION_ERROR, "message": INVALID_BODY},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("storage_error path=%s", request.url.path, exc_info=exc)
        return _internal_error()

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
        return _internal_error()
