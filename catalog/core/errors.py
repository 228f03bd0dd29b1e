from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, cast
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from catalog.core.logging import get_logger


class ErrorKind(str, Enum):
    """Closed set of failures a catalog operation can report."""
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    REFERENTIAL = "reference_not_found"
    UNIQUE_CONFLICT = "duplicate_resource"
    IN_USE = "resource_in_use"
    INTERNAL = "server_error"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorKind.REFERENTIAL: HTTP_404_NOT_FOUND,
    ErrorKind.UNIQUE_CONFLICT: HTTP_409_CONFLICT,
    ErrorKind.IN_USE: HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: HTTP_500_INTERNAL_SERVER_ERROR,
}


class CatalogError(Exception):
    """Raised by services and repositories; translated to HTTP at the boundary."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind: ErrorKind = kind
        self.message: str = message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]


def classify_integrity_error(exc: IntegrityError) -> ErrorKind:
    """Map a driver-level constraint violation onto an ErrorKind."""
    error_message = str(exc.orig) if exc.orig is not None else str(exc)
    error_message = error_message.lower()

    if "foreign key" in error_message:
        return ErrorKind.REFERENTIAL
    if "unique" in error_message or "duplicate key" in error_message:
        return ErrorKind.UNIQUE_CONFLICT
    if "not null" in error_message or "check constraint" in error_message:
        return ErrorKind.VALIDATION
    return ErrorKind.INTERNAL


class ErrorBody(BaseModel):
    """Structured error body."""
    type: str
    message: str
    details: dict[str, object] | None = None


class ErrorEnvelope(BaseModel):
    error: ErrorBody
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }

def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, handling non-serializable objects in context."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)
        serialized_error.pop("url", None)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()

            if "error" in ctx:
                ctx["error"] = str(ctx["error"])
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def _envelope_response(
    request: Request,
    status_code: int,
    error_type: str,
    message: str,
    details: dict[str, object] | None = None,
) -> JSONResponse:
    body = ErrorEnvelope(
        error=ErrorBody(type=error_type, message=message, details=details),
        meta=_build_meta(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        logger = get_logger(__name__, request)
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("Catalog operation failed: %s", exc.message, exc_info=exc.__cause__)
        else:
            logger.info("Catalog error: %s", exc.kind.value)
        return _envelope_response(request, exc.status_code, exc.kind.value, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error: %s", exc.status_code)
        if isinstance(exc.detail, dict):
            message = "Request failed"
            details = cast(dict[str, object], exc.detail)
        else:
            message = exc.detail or "HTTP error"
            details = None
        return _envelope_response(request, exc.status_code, "http_error", message, details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.info("Validation error")
        return _envelope_response(
            request,
            HTTP_400_BAD_REQUEST,
            ErrorKind.VALIDATION.value,
            "Invalid request payload",
            {"errors": _serialize_validation_errors(exc.errors())},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.warning("Database integrity error: %s", exc.orig)

        kind = classify_integrity_error(exc)
        messages = {
            ErrorKind.REFERENTIAL: "Referenced resource not found",
            ErrorKind.UNIQUE_CONFLICT: "Resource already exists",
            ErrorKind.VALIDATION: "Invalid data value",
        }
        return _envelope_response(
            request,
            _STATUS_BY_KIND[kind],
            kind.value,
            messages.get(kind, "Internal Server Error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return _envelope_response(
            request,
            HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorKind.INTERNAL.value,
            "Internal Server Error",
        )
