"""
Exception handlers for the application.
"""
import sqlite3
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskmind.exceptions import TaskNotFoundError, InvalidEnumValueError, DueDateParseError
from taskmind.monitoring import get_request_id

logger = logging.getLogger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.
    """
    request_id = get_request_id() or '-'
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "method": request.method,
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred.",
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id
        }
    )


async def sqlite_exception_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    """
    Handler for SQLite database errors.
    MCP endpoints get 200 OK with success: False so clients see the failure as data.
    """
    request_id = get_request_id() or '-'
    error_detail = str(exc)
    logger.error(
        f"Database error in {request.method} {request.url.path}: {error_detail}",
        exc_info=True,
        extra={"method": request.method, "path": request.url.path, "error_type": type(exc).__name__}
    )

    if request.url.path.startswith("/mcp"):
        return JSONResponse(
            status_code=200,
            content={
                "success": False,
                "error": f"Database error in {request.url.path}: {error_detail}",
                "error_type": type(exc).__name__,
                "path": request.url.path,
                "request_id": request_id
            }
        )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Database error",
            "detail": "A database operation failed.",
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors with clear messages.
    """
    request_id = get_request_id() or '-'
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(f"{field}: {error['msg']}")

    logger.warning(f"Validation error in {request.method} {request.url.path}: {', '.join(errors)}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "detail": "One or more fields failed validation",
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
            "request_id": request_id
        }
    )


async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": "Task not found", "detail": str(exc), "path": request.url.path}
    )


async def invalid_value_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Invalid status, priority or due date supplied by the client."""
    logger.warning(f"Invalid value in {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid value", "detail": str(exc), "path": request.url.path}
    )


def setup_exception_handlers(app):
    """
    Register exception handlers with the FastAPI app.
    """
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(sqlite3.Error, sqlite_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TaskNotFoundError, task_not_found_handler)
    app.add_exception_handler(InvalidEnumValueError, invalid_value_handler)
    app.add_exception_handler(DueDateParseError, invalid_value_handler)
