"""
HTTP error mapping.

Translates the domain exception taxonomy into HTTP status codes. Domain and
payload validation errors share the top-level body
{success: false, error, code, details}; validation failures are reported as
400 instead of FastAPI's default 422.

Dependencies: fastapi, worksync.core.exceptions
System role: Error contract of the HTTP API
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from worksync.core.exceptions import ErrorCode, WorkSyncException
from worksync.models.common import ErrorResponse

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
}


def http_error_from(exc: WorkSyncException) -> HTTPException:
    """
    Build the HTTPException for a domain exception.

    Args:
        exc: Domain exception raised by a service

    Returns:
        HTTPException: Status from the error code, ErrorResponse as detail
    """
    body = ErrorResponse(error=exc.message, code=exc.code.value, details=exc.details or None)
    return HTTPException(
        status_code=STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=jsonable_encoder(body),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed or incomplete payloads as 400 VALIDATION_ERROR."""
    body = ErrorResponse(
        error="Invalid request payload",
        code=ErrorCode.VALIDATION_ERROR.value,
        details={"errors": exc.errors()},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(body),
    )


async def structured_http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Send ErrorResponse details as the top-level body; defer to FastAPI otherwise."""
    if isinstance(exc.detail, dict) and "code" in exc.detail:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the API's exception handlers on an application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, structured_http_exception_handler)
