"""
Exception handlers mapping the service errors onto HTTP responses. Every
error body has the shape `{"error": "<message>"}`.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from structlog import get_logger

from usergroups.core.validation import ValidationError
from usergroups.database.store import StoreError
from usergroups.service.user import DuplicateUser

INTERNAL_SERVER_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def validation_error_handler(request: Request, exc: ValidationError):
    log = get_logger().bind(path=request.url.path, error=exc.message)
    await log.ainfo("api.validation_error")
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    # Only reached when the body is not parseable JSON.
    log = get_logger().bind(path=request.url.path, errors=exc.errors())
    await log.ainfo("api.request_validation_error")
    return error_response(status.HTTP_400_BAD_REQUEST, "Request body is not valid")


async def duplicate_user_handler(request: Request, exc: DuplicateUser):
    log = get_logger().bind(path=request.url.path)
    await log.ainfo("api.duplicate_user")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def store_error_handler(request: Request, exc: StoreError):
    log = get_logger().bind(path=request.url.path, error=str(exc))
    await log.aerror("api.store_error")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR
    )


def add_exception_handlers(app: FastAPI) -> FastAPI:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(DuplicateUser, duplicate_user_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    return app
