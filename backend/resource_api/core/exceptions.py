"""
Application exceptions and the global exception handlers.
Errors are rendered as JSON:API error documents and logged with request context.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, List, Optional

from resource_api.http.responses import JSONAPI_MEDIA_TYPE


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class JsonApiRuntimeError(RuntimeError):
    """
    Fatal controller misconfiguration or persistence failure.

    Raised when a hydrator cannot be resolved or a record could not be
    destroyed. Not recoverable at the controller layer.
    """


def error_document(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    path: Optional[str] = None,
    meta: Any = None,
) -> dict:
    """Build a single-error JSON:API document."""
    error = {
        "status": str(status_code),
        "title": title,
    }
    if detail is not None:
        error["detail"] = detail
    if path is not None:
        error["source"] = {"pointer": path}
    if meta is not None:
        error["meta"] = meta
    return {"errors": [error]}


def _error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type=JSONAPI_MEDIA_TYPE,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.error(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )
    
    return _error_response(
        exc.status_code,
        error_document(exc.status_code, exc.message, meta=exc.details),
    )


async def runtime_exception_handler(request: Request, exc: JsonApiRuntimeError) -> JSONResponse:
    """Handle controller runtime errors as internal server errors."""
    logger.exception(
        f"Runtime error: {exc}",
        exc_info=exc,
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_document(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            detail=str(exc),
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    
    response = _error_response(
        exc.status_code,
        error_document(exc.status_code, str(exc.detail)),
    )
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


def _serialize_validation_errors(errors: list) -> List[dict]:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # ctx may carry exception instances such as ValueError
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors, one JSON:API error per failed field."""
    serialized_errors = _serialize_validation_errors(exc.errors())
    
    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )
    
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    errors = []
    for error in serialized_errors:
        pointer = "/" + "/".join(str(part) for part in error.get("loc", ()))
        errors.append(
            error_document(
                status_code,
                "Unprocessable Entity",
                detail=error.get("msg"),
                path=pointer,
            )["errors"][0]
        )
    
    return _error_response(status_code, {"errors": errors})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_document(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(JsonApiRuntimeError, runtime_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
