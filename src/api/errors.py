"""Translation of raised errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.services.exceptions import AssetsAPIError, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)


async def handle_api_error(request: Request, exc: AssetsAPIError) -> JSONResponse:
    """Turn a domain error into {"success": false, "error": ...}."""
    content: dict = {"success": False, "error": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies the same way as service validation errors."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
        message = error.get("msg", "Validation failed")
        messages.append(f"{field}: {message}" if field else message)

    logger.warning(f"Invalid request to {request.url.path}: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": ", ".join(messages), "errors": messages},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers shared by every router."""
    app.add_exception_handler(AssetsAPIError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
