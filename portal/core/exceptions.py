"""
Error taxonomy for the portal and the FastAPI handlers that render it.

Every error reaches the client as ``{"error": ...}``; unexpected failures are
logged with detail and masked behind a generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


class PortalError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FormValidationError(PortalError):
    """User-correctable input; carries every violated rule in check order."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class AuthenticationError(PortalError):
    """Invalid email/password pair. Deliberately says nothing about which half was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "invalid credentials") -> None:
        super().__init__(message)


class ConflictError(PortalError):
    """Uniqueness violation or a create/update/delete the store refused."""

    status_code = status.HTTP_409_CONFLICT


class IdentityStoreError(PortalError):
    """Raised when the identity store cannot answer a read (storage failure)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


async def _form_validation_handler(_request: Request, exc: FormValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.errors})


async def _portal_error_handler(_request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": INTERNAL_ERROR_MESSAGE})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        errors.append(f"{loc}: {msg}" if loc else msg)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": errors})


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(FormValidationError, _form_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PortalError, _portal_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
