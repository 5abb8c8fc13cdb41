# vidshare/core/errors.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors the API reports to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid input"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class TokenExpiredError(UnauthorizedError):
    default_message = "expired"


class InvalidTokenError(UnauthorizedError):
    default_message = "invalid token"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "already exists"


class InternalError(AppError):
    pass


def envelope(status_code: int, message: str, data=None) -> dict:
    return {"statusCode": status_code, "message": message, "data": data}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(exc.status_code, exc.message),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Request bodies that fail schema validation are client errors, reported as 400.
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    fields = [f for f in fields if f]
    message = f"invalid input: {', '.join(fields)}" if fields else "invalid input"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope(status.HTTP_400_BAD_REQUEST, message),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
