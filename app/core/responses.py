# app/core/responses.py

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AuthorizationError, BackendUnavailable, PortalError, ValidationError


# ------------------------------------------------------------
# ENVELOPE
# ------------------------------------------------------------
def envelope(
    success: bool,
    data: Any = None,
    message: Optional[str] = None,
    errors: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": success}
    if data is not None or success:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if errors:
        body["errors"] = errors
    return body


def present(outcome: Any = None, status_code: int = 200, message: Optional[str] = None) -> JSONResponse:
    """
    Shapes any outcome into the response envelope.

    Errors keep only their public message; log detail never reaches
    the body.
    """
    if isinstance(outcome, PortalError):
        errors = outcome.errors if isinstance(outcome, ValidationError) else None
        return JSONResponse(
            status_code=outcome.status_code,
            content=envelope(False, message=outcome.public_message, errors=errors),
        )

    return JSONResponse(
        status_code=status_code,
        content=envelope(True, data=jsonable_encoder(outcome), message=message),
    )


def _field_name(loc) -> str:
    # ("body", "full_name") -> "full_name"; ("query", "limit") -> "limit"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "body"


# ------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------
def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(PortalError)
    async def _portal_error(request: Request, exc: PortalError):
        if isinstance(exc, BackendUnavailable):
            logger.error(f"{type(exc).__name__} at {request.method} {request.url.path}: {exc.detail}")
        elif isinstance(exc, AuthorizationError):
            # Reason and principal stay in the log, the body is always generic
            logger.warning(
                f"Access denied: reason={type(exc).__name__} "
                f"route={request.method} {request.url.path}: {exc.detail}"
            )
        else:
            logger.info(f"{type(exc).__name__} at {request.method} {request.url.path}: {exc.detail}")
        return present(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        return present(ValidationError(errors))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else None
        if exc.status_code == 404:
            message = "Resource not found"
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope(False, message=message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def _rate_limited(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit hit at {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=429,
            content=envelope(False, message="Too many requests, please try again later"),
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def _database_down(request: Request, exc: Exception):
        logger.error(f"Database unavailable at {request.method} {request.url.path}: {exc}")
        return present(BackendUnavailable())

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error at {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=envelope(False, message=PortalError.public_message),
        )
