"""
errors.py — maps every failure onto the {"error": {...}} envelope.

    RequestValidationError → 422 VALIDATION_ERROR, one detail per bad field
    HTTPException          → its own status; code from _HTTP_ERROR_CODES
    anything else          → 500 INTERNAL_ERROR, traceback to the log only

install_error_handlers(app) must run before routers are included.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taxcalc.config import settings
from taxcalc.schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

# Statuses this API raises: bad input / duplicate / bad credentials or token,
# missing token, unknown user or route, wrong method.
_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[list[ErrorDetail]] = None,
) -> JSONResponse:
    envelope = ErrorResponse(
        error=ErrorBody(code=code, message=message, details=details or []),
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


def _field_path(loc: tuple) -> Optional[str]:
    # ("body", "deductions", "section80c") → "deductions.section80c"
    path = ".".join(str(part) for part in loc if part != "body")
    return path or None


async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        ErrorDetail(field=_field_path(error["loc"]), issue=error["msg"])
        for error in exc.errors()
    ]
    return error_response(422, "VALIDATION_ERROR", "Request validation failed", details)


async def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    return error_response(exc.status_code, code, str(exc.detail))


async def _on_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=True)
    details = []
    if settings.debug:
        details = [ErrorDetail(issue=f"{type(exc).__name__}: {exc}")]
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred", details)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(StarletteHTTPException, _on_http_error)
    app.add_exception_handler(Exception, _on_unhandled_error)
