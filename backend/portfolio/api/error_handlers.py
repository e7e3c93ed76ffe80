"""Error Handlers — global exception handlers for the portfolio API.

Invariants:
    - PortfolioError → its own status and {message, errors?} envelope
    - RequestValidationError → 400 with per-field detail
    - Starlette HTTPException (unknown route, wrong method) → {message}
    - Exception (catch-all) → 500 generic message; the underlying message is
      echoed under "error" only when app.state.expose_error_details is set

Design Decisions:
    - Four-layer handler: domain, validation, routing, catch-all
    - Detail exposure read from app.state at request time, set once in main
      from settings.environment
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.core.errors import PortfolioError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"
NOT_FOUND_MESSAGE = "API endpoint not found"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_portfolio_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_portfolio_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"PortfolioError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        content = exc.to_response()
        if exc.http_status >= 500:
            content = _internal_error_content(request, exc)
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (404 unknown path, 405 wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details outside development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_internal_error_content(request, exc),
        )


def _internal_error_content(request: Request, exc: Exception) -> dict:
    content = {"message": GENERIC_ERROR_MESSAGE}
    if getattr(request.app.state, "expose_error_details", False):
        content["error"] = str(exc)
    return content


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "message": "Validation failed",
        "errors": [
            {"field": _field_name(e["loc"]), "message": e["msg"]}
            for e in exc.errors()
        ],
    }
