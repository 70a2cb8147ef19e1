"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). LinkVaultException is
mapped by its kind; store failures and anything unexpected become an
opaque 500 so driver messages never reach clients.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkvault.core.config import get_settings
from linkvault.domain.exceptions import ErrorKind, LinkVaultException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _internal_error(exc: BaseException) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    detail: Any = str(exc) if get_settings().debug else INTERNAL_ERROR_MESSAGE
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def _linkvault_exception_handler(
    request: Request, exc: LinkVaultException
) -> JSONResponse:
    """Return exc.to_dict() with the status of its kind; non-domain kinds are opaque."""
    if not exc.kind.is_domain:
        logger.error(
            "Internal failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
        return _internal_error(exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.AUTHENTICATION else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _internal_error(exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: LinkVaultException,
    RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(LinkVaultException, _linkvault_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
