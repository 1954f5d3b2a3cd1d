"""
FastAPI exception handlers that map propagated failures to envelope responses.

`build_error_response()` is the only place a failure kind becomes an HTTP status.
Checks are applied in this order:

    1. NotFoundError                                -> 404 NOT FOUND, data = message
    2. ValidationError / RequestValidationError     -> 400 BAD REQUEST, data = all violations
    3. anything else                                -> 500 INTERNAL SERVER ERROR, data = message

Register on the app from the app factory:

    register_exception_handlers(app)
    app.add_middleware(UnhandledErrorMiddleware)   # between the API key gate and RequestIDMiddleware

Framework HTTP errors (unknown route, wrong method) keep their own status and
are wrapped in the same envelope with `data` = the framework detail.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import SQLAlchemyError, StatementError

from ...exceptions.base import CategoryAPIError, NotFoundError, ValidationError
from ...schemas.web import WebResponse
from ...validators.category_validators import violations_from_errors

logger = logging.getLogger(__name__)


def render_error(exc: BaseException) -> str:
    """
    Client-facing text for an unexpected failure.

    SQLAlchemy statement errors render only the driver message (`exc.orig`), never
    the SQL text or bound parameters.
    """
    if isinstance(exc, CategoryAPIError):
        return exc.message
    if isinstance(exc, StatementError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc) or type(exc).__name__


def describe_violations(exc: ValidationError | RequestValidationError) -> str:
    if isinstance(exc, ValidationError):
        return exc.describe()
    return "; ".join(f"{field}: {msg}" for field, msg in violations_from_errors(exc.errors()))


def build_error_response(exc: BaseException) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        code, data = status.HTTP_404_NOT_FOUND, exc.message
    elif isinstance(exc, (ValidationError, RequestValidationError)):
        code, data = status.HTTP_400_BAD_REQUEST, describe_violations(exc)
    else:
        code, data = status.HTTP_500_INTERNAL_SERVER_ERROR, render_error(exc)

    body = WebResponse.of(code, data)
    return JSONResponse(status_code=code, content=body.model_dump())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: %s", request.method, request.url.path, exc.message)
    return build_error_response(exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("ValidationError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return build_error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("RequestValidationError for %s %s: %s", request.method, request.url.path, exc.errors())
    return build_error_response(exc)


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    500 for store failures, transaction failures and anything unclassified.
    Logged with stack trace.
    """
    logger.error(
        "Unhandled %s for %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return build_error_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.info("HTTPException %s for %s %s", exc.status_code, request.method, request.url.path)
    body = WebResponse.of(exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns exceptions no handler claimed into the 500 envelope.

    Runs inside RequestIDMiddleware, so these responses carry `X-Request-ID` and
    the request id is on the error log line. The exception is not re-raised.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await server_error_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(CategoryAPIError, server_error_handler)
    app.add_exception_handler(SQLAlchemyError, server_error_handler)
    # Last resort for failures raised outside UnhandledErrorMiddleware
    app.add_exception_handler(Exception, server_error_handler)
