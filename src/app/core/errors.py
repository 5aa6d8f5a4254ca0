import logging
from collections.abc import Awaitable, Callable, Sequence
from functools import wraps
from typing import Any, ParamSpec

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import request_ctx
from app.models.common import ErrorResponse
from app.models.math import ValidationError

logger = logging.getLogger(__name__)

P = ParamSpec("P")

EMPTY_BODY_MESSAGE = "request body cannot be empty"
INVALID_BODY_MESSAGE = "invalid request body"
VALIDATION_MESSAGE = "validation error"
UNSUPPORTED_MEDIA_TYPE_MESSAGE = "unsupported media type"
INTERNAL_ERROR_MESSAGE = "internal server error"


def error_response(
    status_code: int,
    message: str,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorResponse(message=message, details=details)
    return JSONResponse(
        status_code=status_code, content=envelope.model_dump(mode="json"), headers=headers
    )


def validation_error_response(error: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_MESSAGE, details=error.message)


def describe_request_errors(errors: Sequence[Any]) -> str | None:
    """Summarise the first pydantic/FastAPI error as ``loc: msg``."""
    if not errors:
        return None
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "")
    return f"{loc}: {msg}" if loc else msg


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTP exception",
        extra={"path": request.url.path, "method": request.method, "status_code": exc.status_code},
    )
    # FastAPI raises a bare 400 when the body bytes cannot be decoded at all
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        return error_response(
            exc.status_code, INVALID_BODY_MESSAGE, details=str(exc.detail), headers=exc.headers
        )
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "Request body rejected",
        extra={"path": request.url.path, "method": request.method, "status_code": 400},
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        INVALID_BODY_MESSAGE,
        details=describe_request_errors(exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method, "status_code": 500},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def boundary(handler: Callable[P, Awaitable[Any]]) -> Callable[P, Awaitable[Any]]:
    """Wrap a route handler so unexpected failures become the 500 envelope.

    ``HTTPException`` is re-raised untouched so FastAPI's handlers keep rendering it.
    """

    @wraps(handler)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
        try:
            return await handler(*args, **kwargs)
        except StarletteHTTPException:
            raise
        except Exception as exc:
            context = request_ctx.get()
            extra = context.log_extra(status_code=500) if context else {"status_code": 500}
            logger.error(
                "Unhandled exception in %s", handler.__name__, exc_info=exc, extra=extra
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    return wrapper
