"""Exception handlers that render API failures as ``{"error": <message>}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from countrydex.core.errors import CountrydexError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on *app*."""

    @app.exception_handler(CountrydexError)
    async def countrydex_error_handler(request: Request, exc: CountrydexError):
        if exc.status_code >= 500:
            logger.exception(
                f"{request.method} {request.url.path} failed: {exc.message}",
                exc_info=exc,
            )
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_errors(exc)
        logger.warning(f"{request.method} {request.url.path} invalid: {message}")
        return _error_response(422, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(OSError)
    async def filesystem_error_handler(request: Request, exc: OSError):
        logger.exception(
            f"{request.method} {request.url.path} filesystem failure: {exc}",
            exc_info=exc,
        )
        return _error_response(500, str(exc))
