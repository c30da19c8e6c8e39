"""
Exception handlers.

Translate application errors into HTTP responses carrying the ApiResponse
envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service.api.v1.schemas.common import ApiResponse, ErrorCode
from user_service.core.errors import ConflictError, InvalidArgumentError, NotFoundError

logger = logging.getLogger("user-service.api.errors")


def _error_response(status_code: int, error_code: ErrorCode, message: str) -> JSONResponse:
    body = ApiResponse.error(error_code, message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"Not found: {exc.message}", extra={"path": request.url.path, **exc.details})
    return _error_response(404, ErrorCode.USER_NOT_FOUND, exc.message)


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning(f"Conflict: {exc.message}", extra={"path": request.url.path})
    return _error_response(409, ErrorCode.USER_ALREADY_EXISTS, exc.message)


async def handle_invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.warning(f"Invalid argument: {exc.message}", extra={"path": request.url.path})
    return _error_response(400, ErrorCode.BAD_REQUEST, exc.message)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:]) or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Request validation failed: {message}", extra={"path": request.url.path})
    return _error_response(400, ErrorCode.BAD_REQUEST, message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return _error_response(500, ErrorCode.INTERNAL_SERVER_ERROR, ErrorCode.INTERNAL_SERVER_ERROR.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error mapping to an application"""
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(InvalidArgumentError, handle_invalid_argument)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
