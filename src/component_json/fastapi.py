"""FastAPI integration: answer requests that fail JSON handling with HTTP 400."""

from __future__ import annotations

from typing import Protocol

from fastapi.responses import JSONResponse
from starlette.requests import Request
from starlette.responses import Response

from component_json.errors import ParseError
from component_json.logging import LIBRARY_LOGGER, LogEventFields, get_logger

INVALID_JSON_CODE = "INVALID_JSON"


class _StarletteExceptionHandler(Protocol):
    async def __call__(self, request: Request, exc: Exception) -> Response: ...


class _FastAPILike(Protocol):
    """Protocol for FastAPI-like apps with add_exception_handler."""

    def add_exception_handler(
        self,
        exc_class_or_status_code: int | type[Exception],
        handler: _StarletteExceptionHandler,
    ) -> None: ...


def register_parse_error_handler(
    app: _FastAPILike,
    *,
    detail: str = "Invalid JSON body",
    logger_name: str = LIBRARY_LOGGER,
) -> _StarletteExceptionHandler:
    """Map ParseError raised by route handlers to a 400 response.

    The response body is ``{"code": "INVALID_JSON", "message": detail}``. The
    offending text is never echoed back to the client.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> register_parse_error_handler(app)
    """
    logger = get_logger(logger_name)

    async def _handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, ParseError):
            raise exc
        extra: LogEventFields = {
            "error_type": type(exc.cause).__name__ if exc.cause is not None else "",
            "path": request.url.path,
            "method": request.method,
        }
        logger.info("json_request_rejected", extra=extra)
        return JSONResponse(
            content={"code": INVALID_JSON_CODE, "message": detail},
            status_code=400,
        )

    handler: _StarletteExceptionHandler = _handler
    app.add_exception_handler(ParseError, handler)
    return handler


__all__ = ["INVALID_JSON_CODE", "register_parse_error_handler"]
