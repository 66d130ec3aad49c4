"""
API error taxonomy and exception handlers.

Every error reaches the client as ``{"statusCode": int, "message": str}``.
Messages start with a tag a client can match on: ``__AUTH__`` for 401s,
``__ERROR__`` for everything else.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = structlog.get_logger()

ERROR_TAG = "__ERROR__"
AUTH_TAG = "__AUTH__"


class ApiError(StarletteHTTPException):
    """Base for errors raised by services and auth dependencies."""

    status_code: int = 500
    tag: str = ERROR_TAG

    def __init__(self, message: str, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=f"{self.tag} {message}",
            headers=headers,
        )
        self.message = message


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = 400


class UnauthorizedError(ApiError):
    """Bad credentials or an invalid, expired or superseded token."""

    status_code = 401
    tag = AUTH_TAG


class NotFoundError(ApiError):
    """Referenced account or relationship is absent."""

    status_code = 404


class ConflictError(ApiError):
    """Duplicate signup or duplicate relationship."""

    status_code = 409


def error_body(status_code: int, message: str) -> dict:
    if not message.startswith((ERROR_TAG, AUTH_TAG)):
        tag = AUTH_TAG if status_code == 401 else ERROR_TAG
        message = f"{tag} {message}"
    return {"statusCode": status_code, "message": message}


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def describe_validation_errors(errors: list[dict]) -> str:
    """Summarise pydantic errors in a single client-facing sentence."""
    missing = [_field_name(err["loc"]) for err in errors if err["type"] == "missing"]
    if missing:
        fields = ", ".join(f"<{name}>" for name in missing)
        return f"{fields} required"
    first = errors[0]
    if first["type"] == "extra_forbidden":
        return f"<{_field_name(first['loc'])}> cannot be set"
    return f"invalid <{_field_name(first['loc'])}>: {first['msg']}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code >= 500:
        log.error("request.failed", path=request.url.path, status=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_errors(list(exc.errors()))
    log.info("request.invalid", path=request.url.path, reason=message)
    return JSONResponse(status_code=400, content=error_body(400, message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("request.unhandled_error", path=request.url.path, error=type(exc).__name__)
    return JSONResponse(status_code=500, content=error_body(500, "internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
