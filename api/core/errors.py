"""
Error taxonomy and its HTTP mapping.

Services raise `AppError` subclasses; the handlers registered here turn them
into `{"error": "<message>"}` JSON responses with the matching status code.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "invalid post ID"

# Same lax int parsing FastAPI applies to the `post_id: int` path param.
_POST_ID_ADAPTER = TypeAdapter(int)


class AppError(RuntimeError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


# Persistence failures are surfaced verbatim and never retried.
class StoreFault(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_request_error(error: dict[str, Any]) -> str:
    if error.get("type") == "json_invalid":
        reason = (error.get("ctx") or {}).get("error")
        return f"JSON decode error: {reason}" if reason else "JSON decode error"

    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    msg = str(error.get("msg") or "invalid request body")
    if not loc:
        return msg
    return f"{'.'.join(loc)}: {msg}"


def _has_malformed_id(path_params: dict[str, Any]) -> bool:
    raw = path_params.get("post_id")
    if raw is None:
        return False
    try:
        _POST_ID_ADAPTER.validate_python(raw)
    except PydanticValidationError:
        return True
    return False


def request_error_message(exc: RequestValidationError, path_params: dict[str, Any] | None = None) -> str:
    """
    Collapse FastAPI's error list into one message.

    A malformed path identifier wins over any body error so that the id is
    reported before the body is looked at. FastAPI stops at a JSON decode
    error without validating the path, hence the raw path_params check.
    """
    errors = list(exc.errors())
    if _has_malformed_id(path_params or {}):
        return INVALID_ID_MESSAGE
    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return INVALID_ID_MESSAGE
    if not errors:
        return "invalid request"
    return _describe_request_error(errors[0])


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StoreFault):
        logger.error(
            "store_fault method=%s path=%s error=%s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
    else:
        logger.info(
            "request_rejected method=%s path=%s status=%s error=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return error_response(exc.status_code, exc.message)


async def _handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = request_error_message(exc, dict(request.path_params))
    logger.info(
        "request_rejected method=%s path=%s status=%s error=%s",
        request.method,
        request.url.path,
        status.HTTP_400_BAD_REQUEST,
        message,
    )
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Framework-raised HTTP errors: unparseable bodies, unknown routes, wrong
    methods. A malformed path id still wins for a 400.
    """
    message = str(exc.detail)
    if exc.status_code == status.HTTP_400_BAD_REQUEST and _has_malformed_id(dict(request.path_params)):
        message = INVALID_ID_MESSAGE
    logger.info(
        "request_rejected method=%s path=%s status=%s error=%s",
        request.method,
        request.url.path,
        exc.status_code,
        message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _handle_app_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
