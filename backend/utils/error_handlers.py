"""
Error handling decorators and utilities for API endpoints.

This module centralizes the translation of application errors into HTTP
responses so every endpoint reports failures the same way.
"""

from datetime import datetime
from functools import wraps
from typing import Callable, Dict, Optional
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import inspect
import logging

from constants import HTTPStatus
from exceptions import (
    ValidationError,
    NotFoundError,
    InvalidTransitionError,
    ConflictError,
    DatabaseError,
    ApplicationError
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, exc: Exception) -> HTTPException:
    """
    Map an exception raised by a service call to an HTTPException.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Create order")
        exc: The exception raised

    Returns:
        HTTPException carrying the status code and message to report
    """
    if isinstance(exc, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {exc.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=exc.message)
    if isinstance(exc, InvalidTransitionError):
        logger.warning(f"{operation_name} - Invalid transition: {exc.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=exc.message)
    if isinstance(exc, NotFoundError):
        logger.warning(f"{operation_name} - Not found: {exc.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=exc.message)
    if isinstance(exc, ConflictError):
        logger.warning(f"{operation_name} - Conflict: {exc.message}")
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=exc.message)
    if isinstance(exc, DatabaseError):
        logger.error(f"{operation_name} - Database error: {exc.message}", exc_info=exc)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Database operation failed: {exc.message}"
        )
    if isinstance(exc, ApplicationError):
        logger.error(f"{operation_name} - Application error: {exc.message}", exc_info=exc)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"{operation_name} failed: {exc.message}"
        )
    logger.error(f"{operation_name} - Unexpected error: {exc}", exc_info=exc)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=f"{operation_name} failed. Please check server logs or contact support."
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle application errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/orders")
        @handle_api_errors("Create order")
        def create_order(...):
            return service.create_order(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def error_body(
    status_code: int,
    message: str,
    path: str,
    validation_errors: Optional[Dict[str, str]] = None
) -> dict:
    """Build the JSON body shared by all error responses."""
    body = {
        "status": status_code,
        "error": HTTPStatus.phrase(status_code),
        "message": message,
        "path": path,
        "timestamp": datetime.now().isoformat(),
    }
    if validation_errors:
        body["validation_errors"] = validation_errors
    return body


async def http_exception_handler(request: Request, exc) -> JSONResponse:
    """Render HTTPException (and Starlette's) with the shared error body."""
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, detail, request.url.path),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with a field → message map."""
    validation_errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        validation_errors.setdefault(field, message)

    logger.warning(f"Rejected request to {request.url.path}: {validation_errors}")
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=error_body(
            HTTPStatus.BAD_REQUEST,
            "Validation failed",
            request.url.path,
            validation_errors=validation_errors,
        ),
    )
